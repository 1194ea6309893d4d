# parking_api/services/entry_service.py
"""
Vehicle entry/exit workflow.

An Entry is OPEN while exit_date_time is NULL and CLOSED once the exit is
registered (exit_date_time + charged_amount set). CLOSED is terminal.

How it works:
  - register_entry: parking exists → space available → no OPEN entry for the
    same plate in the same parking → reserve a space + insert the OPEN entry,
    one commit → ticket
  - register_exit: entry exists → still OPEN → charge by started hour →
    close the entry + release the space, one commit → bill → receipt e-mail
    (best-effort, failures are logged only)

Both transitions go through conditional UPDATEs (SpaceLedger, close guard),
so concurrent requests cannot overbook a parking or close an entry twice.
"""

from datetime import datetime
from typing import Callable, Optional
from sqlalchemy import update
from sqlalchemy.orm import Session
from parking_api.config import settings
from parking_api.errors import NotFound, NoCapacity, Conflict, InvalidInput
from parking_api.models.entry import Entry
from parking_api.models.parking import Parking
from parking_api.schemas.entry import Ticket, Bill
from parking_api.security import Principal
from parking_api.services.activity_service import record_activity
from parking_api.services.fee_calculator import calculate_charge, charged_hours
from parking_api.services.notification_service import send_exit_receipt
from parking_api.services.space_ledger import SpaceLedger
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)


def _find_open_entry(db: Session, plate_number: str, parking_code: str) -> Optional[Entry]:
    return db.query(Entry).filter(
        Entry.plate_number == plate_number,
        Entry.parking_code == parking_code,
        Entry.exit_date_time.is_(None),
    ).first()


def register_entry(db: Session, plate_number: str, parking_code: str,
                   principal: Optional[Principal] = None,
                   now: Optional[datetime] = None) -> tuple[Entry, Ticket]:
    plate_number = (plate_number or "").strip()
    if not plate_number:
        raise InvalidInput("Plate number is required")

    parking = db.query(Parking).filter(Parking.code == parking_code).first()
    if not parking:
        raise NotFound(f"Parking with code '{parking_code}' not found")

    if parking.available_spaces <= 0:
        raise NoCapacity(f"No available spaces in parking '{parking.name}'")

    if _find_open_entry(db, plate_number, parking_code):
        raise Conflict(f"Vehicle with plate number '{plate_number}' is already in the parking")

    try:
        SpaceLedger(db).reserve(parking_code)
        entry = Entry(
            plate_number=plate_number,
            parking_code=parking_code,
            entry_date_time=now or datetime.utcnow(),
        )
        db.add(entry)
        db.flush()
        record_activity(db, principal.id if principal else None,
                        f"Registered entry {entry.id} for {plate_number} at {parking_code}")
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(entry)
    logger.info(f"[ENTRY] Plate={plate_number} | Parking={parking_code} | Entry={entry.id}")

    ticket = Ticket(
        ticket_number=entry.id,
        plate_number=entry.plate_number,
        parking_name=parking.name,
        entry_date_time=entry.entry_date_time,
        hourly_fee=parking.hourly_fee,
    )
    return entry, ticket


def register_exit(db: Session, entry_id: str,
                  principal: Optional[Principal] = None,
                  now: Optional[datetime] = None,
                  notifier: Optional[Callable] = None) -> tuple[Entry, Bill]:
    entry = db.query(Entry).filter(Entry.id == entry_id).first()
    if not entry:
        raise NotFound(f"Entry with ID '{entry_id}' not found")

    if not entry.is_open:
        raise Conflict(f"Entry with ID '{entry_id}' is already closed")

    parking = entry.parking
    if parking is None:
        raise NotFound(f"Parking with code '{entry.parking_code}' not found")

    exit_time = now or datetime.utcnow()
    amount = calculate_charge(parking.hourly_fee, entry.entry_date_time, exit_time)
    hours = charged_hours(entry.entry_date_time, exit_time)

    try:
        result = db.execute(
            update(Entry)
            .where(Entry.id == entry_id, Entry.exit_date_time.is_(None))
            .values(exit_date_time=exit_time, charged_amount=amount, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise Conflict(f"Entry with ID '{entry_id}' is already closed")

        SpaceLedger(db).release(entry.parking_code)
        record_activity(db, principal.id if principal else None,
                        f"Registered exit {entry_id} for {entry.plate_number}, charged {amount}")
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(entry)
    logger.info(f"[EXIT] Plate={entry.plate_number} | Parking={entry.parking_code} | "
                f"{hours}h × {parking.hourly_fee} = {amount}")

    bill = Bill(
        bill_number=entry.id,
        plate_number=entry.plate_number,
        parking_name=parking.name,
        entry_date_time=entry.entry_date_time,
        exit_date_time=entry.exit_date_time,
        duration_in_hours=hours,
        hourly_fee=parking.hourly_fee,
        total_amount=entry.charged_amount,
    )

    recipient = settings.RECEIPT_EMAIL_TO or (principal.email if principal else None)
    if recipient:
        try:
            (notifier or send_exit_receipt)(recipient, bill)
        except Exception as e:
            logger.error(f"[EXIT] Receipt e-mail for entry {entry_id} failed: {e}")

    return entry, bill


def list_entries(db: Session):
    return db.query(Entry).order_by(Entry.entry_date_time.desc()).all()


def list_active_entries(db: Session):
    return (
        db.query(Entry)
        .filter(Entry.exit_date_time.is_(None))
        .order_by(Entry.entry_date_time.desc())
        .all()
    )


def get_entry(db: Session, entry_id: str) -> Entry:
    entry = db.query(Entry).filter(Entry.id == entry_id).first()
    if not entry:
        raise NotFound(f"Entry with ID '{entry_id}' not found")
    return entry
