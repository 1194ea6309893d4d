# parking_api/routers/logs.py
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from parking_api.database import get_db
from parking_api.schemas.activity_log import ActivityLogOut
from parking_api.security import Principal, require_admin
from parking_api.services.activity_service import list_activity
from parking_api.utils import response

router = APIRouter()


@router.get("/logs", summary="Activity log — filterable by user")
def get_activity_log(
    user_id: Optional[str] = Query(None, alias="userId"),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_admin),
):
    """Newest first."""
    rows = list_activity(db, user_id=user_id, limit=limit)
    return response.success([ActivityLogOut.model_validate(r) for r in rows], "Activity log retrieved successfully")
