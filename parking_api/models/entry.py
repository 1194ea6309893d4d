# parking_api/models/entry.py
"""
Entries table — one row per vehicle visit.
OPEN while exit_date_time is NULL; CLOSED once exit_date_time and
charged_amount are both set. Rows reference parkings by code only
(no FK), so closed visits survive the deletion of their parking.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Numeric
from sqlalchemy.orm import relationship
from parking_api.database import Base


class Entry(Base):
    __tablename__ = "entries"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    plate_number = Column(String(50), nullable=False, index=True)
    parking_code = Column(String(50), nullable=False, index=True)
    entry_date_time = Column(DateTime, nullable=False, index=True)
    exit_date_time = Column(DateTime, index=True)       # NULL while open
    charged_amount = Column(Numeric(10, 2))             # NULL while open
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    parking = relationship(
        "Parking",
        primaryjoin="foreign(Entry.parking_code) == Parking.code",
        viewonly=True,
        lazy="joined",
    )

    @property
    def is_open(self) -> bool:
        return self.exit_date_time is None

    def __repr__(self):
        state = "open" if self.is_open else "closed"
        return f"<Entry {self.id} plate={self.plate_number} parking={self.parking_code} {state}>"
