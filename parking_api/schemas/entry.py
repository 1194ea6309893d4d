# parking_api/schemas/entry.py
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator
from parking_api.schemas.common import CamelModel, Money
from parking_api.schemas.parking import ParkingOut


class EntryCreate(CamelModel):
    plate_number: str = Field(min_length=1)
    parking_code: str = Field(min_length=1)

    @field_validator("plate_number", "parking_code")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class EntryOut(CamelModel):
    id: str
    plate_number: str
    parking_code: str
    entry_date_time: datetime
    exit_date_time: Optional[datetime] = None
    charged_amount: Optional[Money] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    parking: Optional[ParkingOut] = None


class Ticket(CamelModel):
    """Printed on entry."""
    ticket_number: str
    plate_number: str
    parking_name: str
    entry_date_time: datetime
    hourly_fee: Money


class Bill(CamelModel):
    """Printed on exit."""
    bill_number: str
    plate_number: str
    parking_name: str
    entry_date_time: datetime
    exit_date_time: datetime
    duration_in_hours: int
    hourly_fee: Money
    total_amount: Money


class EntryTicketOut(CamelModel):
    entry: EntryOut
    ticket: Ticket


class EntryBillOut(CamelModel):
    entry: EntryOut
    bill: Bill
