# parking_api/models/activity_log.py
"""
Activity log table — audit trail of mutating operations
(entries, exits, parking and user changes) and who performed them.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text
from parking_api.database import Base


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), index=True)      # NULL for anonymous actions (e.g. self-registration)
    action = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<ActivityLog {self.id} user={self.user_id} action={self.action!r}>"
