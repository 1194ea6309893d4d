# parking_api/services/report_service.py
"""
Read-only reports over entries and parkings.

Date ranges are closed: from 00:00 of the start date through the last
microsecond of the end date. Reports never write and may reflect a
slightly stale snapshot while entries/exits are being registered.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from parking_api.errors import InvalidInput
from parking_api.models.entry import Entry
from parking_api.models.parking import Parking
from parking_api.schemas.entry import EntryOut
from parking_api.schemas.report import (
    OutgoingReport, IncomingReport, OccupancyRow, RevenueReport,
    ParkingRevenue, DailyRevenue, EntryReportRow,
)
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)

GROUP_BY_OPTIONS = ("parking", "day")


def _parse_date(value: Optional[str]) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise InvalidInput("Invalid date format. Use ISO format (YYYY-MM-DD)")


def parse_date_range(start_date: Optional[str], end_date: Optional[str]) -> tuple[datetime, datetime]:
    """Turn two ISO date strings into an inclusive [start 00:00, end 23:59:59.999999] range."""
    if not start_date or not end_date:
        raise InvalidInput("Start date and end date are required")
    start = datetime.combine(_parse_date(start_date), time.min)
    end = datetime.combine(_parse_date(end_date), time.max)
    return start, end


def _sum_charged(entries) -> Decimal:
    return sum((e.charged_amount or Decimal("0") for e in entries), Decimal("0"))


def _exited_between(db: Session, start: datetime, end: datetime):
    return (
        db.query(Entry)
        .filter(Entry.exit_date_time >= start, Entry.exit_date_time <= end)
        .order_by(Entry.exit_date_time.asc())
        .all()
    )


def _entered_between(db: Session, start: datetime, end: datetime):
    return (
        db.query(Entry)
        .filter(Entry.entry_date_time >= start, Entry.entry_date_time <= end)
        .order_by(Entry.entry_date_time.asc())
        .all()
    )


def outgoing_report(db: Session, start_date: str, end_date: str) -> OutgoingReport:
    start, end = parse_date_range(start_date, end_date)
    entries = _exited_between(db, start, end)
    logger.info(f"[REPORT] outgoing {start.date()}..{end.date()}: {len(entries)} entries")
    return OutgoingReport(
        start_date=start,
        end_date=end,
        total_entries=len(entries),
        total_amount_charged=_sum_charged(entries),
        entries=[EntryOut.model_validate(e) for e in entries],
    )


def incoming_report(db: Session, start_date: str, end_date: str) -> IncomingReport:
    start, end = parse_date_range(start_date, end_date)
    entries = _entered_between(db, start, end)
    logger.info(f"[REPORT] incoming {start.date()}..{end.date()}: {len(entries)} entries")
    return IncomingReport(
        start_date=start,
        end_date=end,
        total_entries=len(entries),
        entries=[EntryOut.model_validate(e) for e in entries],
    )


def occupancy_report(db: Session) -> list[OccupancyRow]:
    open_counts = dict(
        db.query(Entry.parking_code, func.count(Entry.id))
        .filter(Entry.exit_date_time.is_(None))
        .group_by(Entry.parking_code)
        .all()
    )

    rows = []
    for parking in db.query(Parking).order_by(Parking.code).all():
        occupied = open_counts.get(parking.code, 0)
        rate = round(occupied / parking.total_spaces * 100, 2) if parking.total_spaces else 0.0
        rows.append(OccupancyRow(
            parking_code=parking.code,
            parking_name=parking.name,
            total_spaces=parking.total_spaces,
            occupied_spaces=occupied,
            available_spaces=parking.available_spaces,
            occupancy_rate=rate,
        ))
    return rows


def revenue_report(db: Session, start_date: str, end_date: str,
                   group_by: Optional[str] = None) -> RevenueReport:
    start, end = parse_date_range(start_date, end_date)
    if group_by and group_by not in GROUP_BY_OPTIONS:
        raise InvalidInput("Group by must be either parking or day")

    entries = _exited_between(db, start, end)

    grouped = None
    if group_by == "parking":
        groups: dict[str, ParkingRevenue] = {}
        for e in entries:
            g = groups.get(e.parking_code)
            if g is None:
                g = groups[e.parking_code] = ParkingRevenue(
                    parking_code=e.parking_code,
                    parking_name=e.parking.name if e.parking else None,
                )
            g.entries += 1
            g.revenue += e.charged_amount or Decimal("0")
        grouped = list(groups.values())
    elif group_by == "day":
        days: dict[str, DailyRevenue] = {}
        for e in entries:
            key = e.exit_date_time.date().isoformat()
            g = days.setdefault(key, DailyRevenue(date=key))
            g.entries += 1
            g.revenue += e.charged_amount or Decimal("0")
        grouped = [days[k] for k in sorted(days)]

    total = _sum_charged(entries)
    logger.info(f"[REPORT] revenue {start.date()}..{end.date()} by={group_by or 'none'}: {total}")
    return RevenueReport(
        start_date=start,
        end_date=end,
        total_entries=len(entries),
        total_revenue=total,
        group_by=group_by or "none",
        grouped_data=grouped,
    )


def entries_report(db: Session, start_date: str, end_date: str) -> list[EntryReportRow]:
    start, end = parse_date_range(start_date, end_date)
    if start > end:
        raise InvalidInput("Invalid date range")

    return [
        EntryReportRow(
            id=e.id,
            plate_number=e.plate_number,
            parking_name=e.parking.name if e.parking else None,
            entry_date_time=e.entry_date_time,
            exit_date_time=e.exit_date_time,
            charged_amount=e.charged_amount,
        )
        for e in _entered_between(db, start, end)
    ]
