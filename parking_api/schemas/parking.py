# parking_api/schemas/parking.py
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import Field
from parking_api.schemas.common import CamelModel, Money


class ParkingCreate(CamelModel):
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    total_spaces: int = Field(ge=1)
    hourly_fee: Decimal = Field(ge=0, max_digits=10, decimal_places=2)


class ParkingUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1)
    total_spaces: Optional[int] = Field(default=None, ge=1)
    hourly_fee: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class ParkingOut(CamelModel):
    id: str
    code: str
    name: str
    location: str
    total_spaces: int
    available_spaces: int
    hourly_fee: Money
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
