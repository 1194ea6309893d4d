# parking_api/services/space_ledger.py
"""
Available-space bookkeeping per parking.

Both operations are single conditional UPDATEs, so the availability check
and the change happen in one statement on the database side: two requests
racing for the last space cannot both reserve it. The ledger never commits;
the caller commits together with the entry transition that triggered it.
"""

from sqlalchemy import update
from sqlalchemy.orm import Session
from parking_api.errors import NotFound, NoCapacity
from parking_api.models.parking import Parking
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)


class SpaceLedger:
    def __init__(self, db: Session):
        self.db = db

    def _get(self, parking_code: str) -> Parking:
        parking = self.db.query(Parking).filter(Parking.code == parking_code).first()
        if not parking:
            raise NotFound(f"Parking with code '{parking_code}' not found")
        return parking

    def reserve(self, parking_code: str) -> None:
        """Take one space. Raises NotFound or NoCapacity."""
        parking = self._get(parking_code)
        result = self.db.execute(
            update(Parking)
            .where(Parking.code == parking_code, Parking.available_spaces > 0)
            .values(available_spaces=Parking.available_spaces - 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NoCapacity(f"No available spaces in parking '{parking.name}'")

        self.db.refresh(parking)
        logger.info(f"[LEDGER] reserve {parking_code}: {parking.available_spaces}/{parking.total_spaces}")

    def release(self, parking_code: str) -> None:
        """Give one space back. Never raises the count above total_spaces."""
        parking = self._get(parking_code)
        result = self.db.execute(
            update(Parking)
            .where(Parking.code == parking_code, Parking.available_spaces < Parking.total_spaces)
            .values(available_spaces=Parking.available_spaces + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            logger.warning(
                f"[LEDGER] release {parking_code} ignored: already at {parking.total_spaces} "
                f"available (release without matching reserve)"
            )
            return

        self.db.refresh(parking)
        logger.info(f"[LEDGER] release {parking_code}: {parking.available_spaces}/{parking.total_spaces}")
