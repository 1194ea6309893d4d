"""Unit tests for the entry/exit workflow."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timedelta
from decimal import Decimal
from parking_api.errors import NotFound, NoCapacity, Conflict, InvalidInput
from parking_api.models import ActivityLog, Entry, Parking
from parking_api.services import entry_service
from parking_api.services.notification_service import NotificationError

T = datetime(2025, 5, 20, 8, 0, 0)


class TestRegisterEntry:
    def test_creates_open_entry_and_ticket(self, db, make_parking, operator):
        parking = make_parking(total=5, fee="2.50", name="Central Parking")

        entry, ticket = entry_service.register_entry(db, "RAB123A", "P001", operator, now=T)

        assert entry.is_open
        assert entry.charged_amount is None
        assert entry.entry_date_time == T
        assert ticket.ticket_number == entry.id
        assert ticket.parking_name == "Central Parking"
        assert ticket.hourly_fee == Decimal("2.50")
        db.refresh(parking)
        assert parking.available_spaces == 4

    def test_unknown_parking(self, db, operator):
        with pytest.raises(NotFound):
            entry_service.register_entry(db, "RAB123A", "NOPE", operator)

    def test_blank_plate_rejected(self, db, make_parking, operator):
        make_parking()
        with pytest.raises(InvalidInput):
            entry_service.register_entry(db, "   ", "P001", operator)

    def test_full_parking(self, db, make_parking, operator):
        make_parking(total=1)
        entry_service.register_entry(db, "CAR1", "P001", operator)
        with pytest.raises(NoCapacity):
            entry_service.register_entry(db, "CAR2", "P001", operator)

    def test_duplicate_open_entry_conflicts(self, db, make_parking, operator):
        parking = make_parking(total=5)
        entry_service.register_entry(db, "RAB123A", "P001", operator)

        with pytest.raises(Conflict):
            entry_service.register_entry(db, "RAB123A", "P001", operator)

        db.refresh(parking)
        assert parking.available_spaces == 4
        assert db.query(Entry).count() == 1

    def test_same_plate_in_another_parking_is_allowed(self, db, make_parking, operator):
        make_parking(code="P001")
        make_parking(code="P002")
        entry_service.register_entry(db, "RAB123A", "P001", operator)
        entry, _ = entry_service.register_entry(db, "RAB123A", "P002", operator)
        assert entry.parking_code == "P002"

    def test_records_activity(self, db, make_parking, operator):
        make_parking()
        entry, _ = entry_service.register_entry(db, "RAB123A", "P001", operator)
        log = db.query(ActivityLog).one()
        assert log.user_id == operator.id
        assert entry.id in log.action


class TestRegisterExit:
    def test_closes_entry_and_bills(self, db, make_parking, operator):
        parking = make_parking(total=5, fee="2.50")
        entry, _ = entry_service.register_entry(db, "RAB123A", "P001", operator, now=T)
        notifier = MagicMock()

        closed, bill = entry_service.register_exit(
            db, entry.id, operator, now=T + timedelta(minutes=65), notifier=notifier
        )

        assert not closed.is_open
        assert closed.exit_date_time == T + timedelta(minutes=65)
        assert closed.charged_amount == Decimal("5.00")
        assert bill.duration_in_hours == 2
        assert bill.total_amount == Decimal("5.00")
        assert bill.bill_number == entry.id
        db.refresh(parking)
        assert parking.available_spaces == 5
        notifier.assert_called_once_with(operator.email, bill)

    def test_unknown_entry(self, db, operator):
        with pytest.raises(NotFound):
            entry_service.register_exit(db, "missing-id", operator, notifier=MagicMock())

    def test_already_closed_conflicts(self, db, make_parking, operator):
        parking = make_parking(total=5)
        entry, _ = entry_service.register_entry(db, "RAB123A", "P001", operator, now=T)
        entry_service.register_exit(db, entry.id, operator, now=T + timedelta(hours=1), notifier=MagicMock())

        with pytest.raises(Conflict):
            entry_service.register_exit(db, entry.id, operator, now=T + timedelta(hours=2), notifier=MagicMock())

        db.refresh(parking)
        assert parking.available_spaces == 5
        db.refresh(entry)
        assert entry.charged_amount == Decimal("2.50")

    def test_notification_failure_does_not_fail_exit(self, db, make_parking, operator):
        make_parking()
        entry, _ = entry_service.register_entry(db, "RAB123A", "P001", operator, now=T)
        notifier = MagicMock(side_effect=NotificationError("smtp down"))

        closed, bill = entry_service.register_exit(
            db, entry.id, operator, now=T + timedelta(minutes=10), notifier=notifier
        )

        notifier.assert_called_once()
        assert not closed.is_open
        assert bill.total_amount == Decimal("2.50")

    def test_plate_can_reenter_after_exit(self, db, make_parking, operator):
        make_parking()
        entry, _ = entry_service.register_entry(db, "RAB123A", "P001", operator, now=T)
        entry_service.register_exit(db, entry.id, operator, now=T + timedelta(hours=1), notifier=MagicMock())

        again, _ = entry_service.register_entry(db, "RAB123A", "P001", operator, now=T + timedelta(hours=2))
        assert again.id != entry.id


class TestCapacityRoundTrip:
    def test_fill_close_refill(self, db, make_parking, operator):
        parking = make_parking(total=50)
        assert parking.available_spaces == 50

        entries = [entry_service.register_entry(db, f"CAR{i:03d}", "P001", operator)[0] for i in range(50)]
        with pytest.raises(NoCapacity):
            entry_service.register_entry(db, "CAR050", "P001", operator)

        entry_service.register_exit(db, entries[0].id, operator, notifier=MagicMock())
        db.refresh(parking)
        assert parking.available_spaces == 1

        entry_service.register_entry(db, "CAR050", "P001", operator)
        db.refresh(parking)
        assert parking.available_spaces == 0

    def test_available_spaces_stay_within_bounds(self, db, make_parking, operator):
        parking = make_parking(total=3)
        open_ids = []
        for step in range(12):
            if step % 3 == 2 and open_ids:
                entry_service.register_exit(db, open_ids.pop(0), operator, notifier=MagicMock())
            else:
                try:
                    open_ids.append(entry_service.register_entry(db, f"CAR{step}", "P001", operator)[0].id)
                except NoCapacity:
                    pass
            db.refresh(parking)
            assert 0 <= parking.available_spaces <= parking.total_spaces
            assert parking.available_spaces == parking.total_spaces - len(open_ids)


class TestQueries:
    def test_lists_and_lookup(self, db, make_parking, operator):
        make_parking()
        first, _ = entry_service.register_entry(db, "CAR1", "P001", operator, now=T)
        second, _ = entry_service.register_entry(db, "CAR2", "P001", operator, now=T + timedelta(minutes=5))
        entry_service.register_exit(db, first.id, operator, now=T + timedelta(hours=1), notifier=MagicMock())

        assert {e.id for e in entry_service.list_entries(db)} == {first.id, second.id}
        assert [e.id for e in entry_service.list_active_entries(db)] == [second.id]
        assert entry_service.get_entry(db, second.id).plate_number == "CAR2"
        with pytest.raises(NotFound):
            entry_service.get_entry(db, "missing-id")


class TestConcurrentSessions:
    """Two sessions on one database: the second acts on a stale read."""

    def test_last_space_taken_by_other_session(self, open_session, shared_parking, operator):
        code = shared_parking(total=1)
        stale, other = open_session(), open_session()
        assert stale.query(Parking).filter(Parking.code == code).one().available_spaces == 1

        entry_service.register_entry(other, "CAR1", code, operator)

        with pytest.raises(NoCapacity):
            entry_service.register_entry(stale, "CAR2", code, operator)

        check = open_session()
        assert check.query(Parking).filter(Parking.code == code).one().available_spaces == 0
        assert [e.plate_number for e in check.query(Entry).all()] == ["CAR1"]

    def test_exit_already_registered_by_other_session(self, open_session, shared_parking, operator):
        code = shared_parking(total=5, fee="2.50")
        stale, other = open_session(), open_session()
        entry, _ = entry_service.register_entry(other, "CAR1", code, operator, now=T)
        entry_id = entry.id

        stale_entry = entry_service.get_entry(stale, entry_id)
        assert stale_entry.is_open
        assert stale_entry.parking.available_spaces == 4

        _, bill = entry_service.register_exit(
            other, entry_id, operator, now=T + timedelta(minutes=30), notifier=MagicMock()
        )

        with pytest.raises(Conflict):
            entry_service.register_exit(
                stale, entry_id, operator, now=T + timedelta(hours=3), notifier=MagicMock()
            )

        check = open_session()
        assert check.query(Parking).filter(Parking.code == code).one().available_spaces == 5
        closed = check.query(Entry).filter(Entry.id == entry_id).one()
        assert closed.charged_amount == bill.total_amount == Decimal("2.50")
        assert closed.exit_date_time == T + timedelta(minutes=30)
