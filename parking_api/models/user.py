# parking_api/models/user.py
"""
Users table — operators and administrators of the parking system.
Role gates which endpoints may mutate parkings, users, and read reports.
"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime
from parking_api.database import Base


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)     # werkzeug hash, never the raw value
    role = Column(String(10), nullable=False, default=Role.USER.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.email} role={self.role}>"
