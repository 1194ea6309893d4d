# parking_api/schemas/activity_log.py
from datetime import datetime
from typing import Optional
from parking_api.schemas.common import CamelModel


class ActivityLogOut(CamelModel):
    id: int
    user_id: Optional[str]
    action: str
    created_at: datetime
