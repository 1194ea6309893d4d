"""Unit tests for the report aggregator."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timedelta
from decimal import Decimal
from parking_api.errors import InvalidInput
from parking_api.services import entry_service, report_service


def visit(db, operator, plate, code, entered, minutes=None):
    entry, _ = entry_service.register_entry(db, plate, code, operator, now=entered)
    if minutes is not None:
        entry, _ = entry_service.register_exit(
            db, entry.id, operator, now=entered + timedelta(minutes=minutes), notifier=MagicMock()
        )
    return entry


class TestDateRange:
    def test_end_date_is_inclusive_to_end_of_day(self):
        start, end = report_service.parse_date_range("2025-05-01", "2025-05-02")
        assert start == datetime(2025, 5, 1, 0, 0, 0)
        assert end == datetime(2025, 5, 2, 23, 59, 59, 999999)

    def test_both_dates_required(self):
        with pytest.raises(InvalidInput):
            report_service.parse_date_range(None, "2025-05-02")
        with pytest.raises(InvalidInput):
            report_service.parse_date_range("2025-05-01", "")

    def test_unparseable_date(self):
        with pytest.raises(InvalidInput):
            report_service.parse_date_range("yesterday", "2025-05-02")


class TestOccupancyReport:
    def test_rate_from_open_entries(self, db, make_parking, operator):
        make_parking(code="P001", total=100)
        make_parking(code="P002", total=10)
        t = datetime(2025, 5, 20, 8, 0)
        for i in range(30):
            visit(db, operator, f"CAR{i}", "P001", t)
        visit(db, operator, "GONE", "P001", t, minutes=30)

        rows = {r.parking_code: r for r in report_service.occupancy_report(db)}

        assert rows["P001"].occupied_spaces == 30
        assert rows["P001"].available_spaces == 70
        assert rows["P001"].occupancy_rate == 30.0
        assert rows["P002"].occupied_spaces == 0
        assert rows["P002"].occupancy_rate == 0.0


class TestRevenueReport:
    @pytest.fixture
    def history(self, db, make_parking, operator):
        make_parking(code="P001", fee="2.00")
        make_parking(code="P002", fee="3.00")
        visit(db, operator, "A", "P001", datetime(2025, 5, 1, 9, 0), minutes=90)    # 4.00, exits 1st
        visit(db, operator, "B", "P002", datetime(2025, 5, 2, 22, 0), minutes=180)  # 9.00, exits 3rd
        visit(db, operator, "C", "P001", datetime(2025, 5, 3, 10, 0), minutes=30)   # 2.00, exits 3rd
        visit(db, operator, "D", "P001", datetime(2025, 5, 9, 10, 0), minutes=30)   # out of range
        visit(db, operator, "E", "P002", datetime(2025, 5, 2, 8, 0))                # still open

    def test_grouped_by_day(self, db, history):
        report = report_service.revenue_report(db, "2025-05-01", "2025-05-03", "day")

        assert report.total_entries == 3
        assert report.total_revenue == Decimal("15.00")
        assert report.group_by == "day"
        assert [(g.date, g.entries, g.revenue) for g in report.grouped_data] == [
            ("2025-05-01", 1, Decimal("4.00")),
            ("2025-05-03", 2, Decimal("11.00")),
        ]

    def test_grouped_by_parking(self, db, history):
        report = report_service.revenue_report(db, "2025-05-01", "2025-05-03", "parking")
        groups = {g.parking_code: g for g in report.grouped_data}
        assert groups["P001"].entries == 2
        assert groups["P001"].revenue == Decimal("6.00")
        assert groups["P002"].revenue == Decimal("9.00")

    def test_ungrouped(self, db, history):
        report = report_service.revenue_report(db, "2025-05-01", "2025-05-03")
        assert report.group_by == "none"
        assert report.grouped_data is None

    def test_invalid_group_by(self, db):
        with pytest.raises(InvalidInput):
            report_service.revenue_report(db, "2025-05-01", "2025-05-03", "week")

    def test_missing_dates_reported_before_group_by(self, db):
        with pytest.raises(InvalidInput, match="Start date and end date are required"):
            report_service.revenue_report(db, None, None, "week")


class TestIncomingOutgoing:
    def test_outgoing_ordered_by_exit_with_total(self, db, make_parking, operator):
        make_parking(fee="1.00")
        late = visit(db, operator, "LATE", "P001", datetime(2025, 5, 1, 8, 0), minutes=300)
        early = visit(db, operator, "EARLY", "P001", datetime(2025, 5, 1, 9, 0), minutes=60)
        visit(db, operator, "OPEN", "P001", datetime(2025, 5, 1, 10, 0))

        report = report_service.outgoing_report(db, "2025-05-01", "2025-05-01")

        assert [e.id for e in report.entries] == [early.id, late.id]
        assert report.total_entries == 2
        assert report.total_amount_charged == Decimal("6.00")

    def test_incoming_ordered_by_entry(self, db, make_parking, operator):
        make_parking()
        second = visit(db, operator, "B", "P001", datetime(2025, 5, 2, 9, 0))
        first = visit(db, operator, "A", "P001", datetime(2025, 5, 1, 9, 0), minutes=10)
        visit(db, operator, "C", "P001", datetime(2025, 5, 4, 9, 0))

        report = report_service.incoming_report(db, "2025-05-01", "2025-05-02")

        assert [e.id for e in report.entries] == [first.id, second.id]

    def test_entries_report_rows(self, db, make_parking, operator):
        make_parking(name="Central Parking")
        visit(db, operator, "A", "P001", datetime(2025, 5, 1, 9, 0), minutes=10)

        rows = report_service.entries_report(db, "2025-05-01", "2025-05-01")

        assert len(rows) == 1
        assert rows[0].parking_name == "Central Parking"
        assert rows[0].charged_amount == Decimal("2.50")

    def test_entries_report_rejects_reversed_range(self, db):
        with pytest.raises(InvalidInput):
            report_service.entries_report(db, "2025-05-03", "2025-05-01")
