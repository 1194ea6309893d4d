# parking_api/services/activity_service.py
"""
Shared activity-log service.
Used by entry_service, parking_service and user_service to keep an audit
trail of who changed what. Rows join the caller's transaction; the caller commits.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from parking_api.models.activity_log import ActivityLog
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)


def record_activity(db: Session, user_id: Optional[str], action: str) -> ActivityLog:
    row = ActivityLog(user_id=user_id, action=action, created_at=datetime.utcnow())
    db.add(row)
    logger.debug(f"[AUDIT] user={user_id} {action}")
    return row


def list_activity(db: Session, user_id: Optional[str] = None, limit: int = 50):
    q = db.query(ActivityLog)
    if user_id:
        q = q.filter(ActivityLog.user_id == user_id)
    return q.order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc()).limit(limit).all()
