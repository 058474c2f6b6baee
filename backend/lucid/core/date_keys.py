"""Date Keys — per-day storage key suffixes in zh-CN short date form.

Invariants:
    - Format is YYYY/M/D with no zero padding (2026/1/5, not 2026/01/05)
    - The local calendar date is used: a "day" ends at local midnight
    - Record timestamps are epoch milliseconds
"""

import time
from datetime import date

from lucid.core.domain_types import DateKey, EpochMillis


def date_key(day: date) -> DateKey:
    return DateKey(f"{day.year}/{day.month}/{day.day}")


def today_key() -> DateKey:
    return date_key(date.today())


def now_millis() -> EpochMillis:
    """Wall-clock time as JS-style epoch milliseconds."""
    return EpochMillis(int(time.time() * 1000))
