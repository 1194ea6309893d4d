# parking_api/services/fee_calculator.py
"""
Parking fee calculation.

Charges by the started hour: the visit duration is taken in whole minutes,
rounded up to hours, and any positive stay costs at least one hour.

Malformed input (missing or non-positive fee, unparseable or missing entry
time, exit before entry) yields a zero charge instead of an error. Every
such case is logged as a warning so bad rows are visible in the logs.
"""

import math
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)

ZERO = Decimal("0")
CENTS = Decimal("0.01")

Instant = Union[datetime, str, None]


def _to_datetime(value: Instant) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _to_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def charged_hours(entry_time: Instant, exit_time: Instant) -> int:
    """Number of billable hours between two instants (0 if invalid or reversed)."""
    start = _to_datetime(entry_time)
    end = _to_datetime(exit_time)
    if start is None or end is None:
        return 0
    if (start.tzinfo is None) != (end.tzinfo is None):
        return 0

    elapsed = end - start
    if elapsed.total_seconds() <= 0:
        return 0

    minutes = int(elapsed.total_seconds() // 60)
    return max(1, math.ceil(minutes / 60))


def calculate_charge(hourly_fee, entry_time: Instant, exit_time: Instant = None,
                     now: Optional[datetime] = None) -> Decimal:
    """
    Charge for a visit. `exit_time` defaults to `now`, which defaults to the
    current UTC wall clock.
    """
    fee = _to_decimal(hourly_fee)
    if fee is None or fee <= 0:
        logger.warning(f"[FEE] Non-positive or missing hourly fee {hourly_fee!r}, charging 0")
        return ZERO

    start = _to_datetime(entry_time)
    if start is None:
        logger.warning(f"[FEE] Unparseable entry time {entry_time!r}, charging 0")
        return ZERO

    if exit_time is None:
        end = now or datetime.utcnow()
    else:
        end = _to_datetime(exit_time)
    if end is None:
        logger.warning(f"[FEE] Unparseable exit time {exit_time!r}, charging 0")
        return ZERO

    if (start.tzinfo is None) != (end.tzinfo is None) or end < start:
        logger.warning(f"[FEE] Exit {end} precedes or cannot be compared with entry {start}, charging 0")
        return ZERO

    hours = charged_hours(start, end)
    return (fee * hours).quantize(CENTS)
