# parking_api/schemas/report.py
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union
from parking_api.schemas.common import CamelModel, Money
from parking_api.schemas.entry import EntryOut


class OutgoingReport(CamelModel):
    start_date: datetime
    end_date: datetime
    total_entries: int
    total_amount_charged: Money
    entries: list[EntryOut]


class IncomingReport(CamelModel):
    start_date: datetime
    end_date: datetime
    total_entries: int
    entries: list[EntryOut]


class OccupancyRow(CamelModel):
    parking_code: str
    parking_name: str
    total_spaces: int
    occupied_spaces: int
    available_spaces: int
    occupancy_rate: float


class ParkingRevenue(CamelModel):
    parking_code: str
    parking_name: Optional[str] = None
    entries: int = 0
    revenue: Money = Decimal("0")


class DailyRevenue(CamelModel):
    date: str
    entries: int = 0
    revenue: Money = Decimal("0")


class RevenueReport(CamelModel):
    start_date: datetime
    end_date: datetime
    total_entries: int
    total_revenue: Money
    group_by: str
    grouped_data: Optional[list[Union[ParkingRevenue, DailyRevenue]]] = None


class EntryReportRow(CamelModel):
    id: str
    plate_number: str
    parking_name: Optional[str] = None
    entry_date_time: datetime
    exit_date_time: Optional[datetime] = None
    charged_amount: Optional[Money] = None
