# parking_api/models/parking.py
"""
Parkings table — lot inventory and the available-space counter.
available_spaces is owned by the lot and only moved by SpaceLedger
(entry/exit) or by an admin changing total_spaces.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Numeric, CheckConstraint
from parking_api.database import Base


class Parking(Base):
    __tablename__ = "parkings"
    __table_args__ = (
        CheckConstraint("available_spaces >= 0", name="ck_parkings_available_non_negative"),
        CheckConstraint("available_spaces <= total_spaces", name="ck_parkings_available_le_total"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    location = Column(String(255), nullable=False)
    total_spaces = Column(Integer, nullable=False)
    available_spaces = Column(Integer, nullable=False)
    hourly_fee = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Parking {self.code} available={self.available_spaces}/{self.total_spaces}>"
