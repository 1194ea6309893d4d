# parking_api/services/parking_service.py
"""
Parking lot administration: create, list, look up, update, delete.
Total-space changes shift available_spaces by the same delta so that
occupied = total - available is preserved. The shift is one conditional
UPDATE, so it composes with entries/exits committed concurrently.
"""

from sqlalchemy import update
from sqlalchemy.orm import Session
from parking_api.errors import NotFound, Conflict, InvalidInput
from parking_api.models.entry import Entry
from parking_api.models.parking import Parking
from parking_api.schemas.parking import ParkingCreate, ParkingUpdate
from parking_api.security import Principal
from parking_api.services.activity_service import record_activity
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)


def get_parking(db: Session, code: str) -> Parking:
    parking = db.query(Parking).filter(Parking.code == code).first()
    if not parking:
        raise NotFound(f"Parking with code '{code}' not found")
    return parking


def list_parkings(db: Session, available_only: bool = False):
    q = db.query(Parking)
    if available_only:
        q = q.filter(Parking.available_spaces > 0)
    return q.order_by(Parking.code).all()


def count_open_entries(db: Session, code: str) -> int:
    return db.query(Entry).filter(Entry.parking_code == code, Entry.exit_date_time.is_(None)).count()


def create_parking(db: Session, body: ParkingCreate, principal: Principal) -> Parking:
    if db.query(Parking).filter(Parking.code == body.code).first():
        raise Conflict(f"Parking with code '{body.code}' already exists")

    parking = Parking(
        code=body.code,
        name=body.name,
        location=body.location,
        total_spaces=body.total_spaces,
        available_spaces=body.total_spaces,
        hourly_fee=body.hourly_fee,
    )
    db.add(parking)
    record_activity(db, principal.id, f"Created parking {body.code}")
    db.commit()
    db.refresh(parking)
    logger.info(f"[PARKING] Created {parking.code} ({parking.total_spaces} spaces @ {parking.hourly_fee}/h)")
    return parking


def update_parking(db: Session, code: str, body: ParkingUpdate, principal: Principal) -> Parking:
    parking = get_parking(db, code)

    if body.total_spaces is not None:
        # delta is taken from the row as stored, not from this session's copy
        delta = body.total_spaces - Parking.total_spaces
        result = db.execute(
            update(Parking)
            .where(Parking.code == code, Parking.available_spaces + delta >= 0)
            .values(total_spaces=body.total_spaces, available_spaces=Parking.available_spaces + delta)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            db.rollback()
            db.refresh(parking)
            occupied = parking.total_spaces - parking.available_spaces
            raise InvalidInput(
                f"Cannot set total spaces to {body.total_spaces}: {occupied} spaces are occupied"
            )

    if body.name is not None:
        parking.name = body.name
    if body.location is not None:
        parking.location = body.location
    if body.hourly_fee is not None:
        parking.hourly_fee = body.hourly_fee

    record_activity(db, principal.id, f"Updated parking {code}")
    db.commit()
    db.refresh(parking)
    logger.info(f"[PARKING] Updated {code}: {parking.available_spaces}/{parking.total_spaces}")
    return parking


def delete_parking(db: Session, code: str, principal: Principal) -> None:
    parking = get_parking(db, code)
    if count_open_entries(db, code) > 0:
        raise Conflict("Cannot delete parking with active entries")

    db.delete(parking)
    record_activity(db, principal.id, f"Deleted parking {code}")
    db.commit()
    logger.info(f"[PARKING] Deleted {code}")
