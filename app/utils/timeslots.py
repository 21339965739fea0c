from datetime import date, time
from enum import Enum
from typing import Iterable, List, Optional


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


WEEK_ORDER = list(Weekday)


def parse_clock(value: str) -> time:
    """
    "09:30" -> time(9, 30)
    Only 24h HH:MM is accepted; anything else raises ValueError.
    """
    s = (value or "").strip()
    parts = s.split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid time format: {value!r}")
    h, m = int(parts[0]), int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {value!r}")
    return time(h, m)


def format_clock(t: time) -> str:
    return t.strftime("%H:%M")


def normalize_days(days: Iterable) -> List[Weekday]:
    """
    ["Wednesday", "Monday", "Monday"] -> [Weekday.MONDAY, Weekday.WEDNESDAY]
    Unknown tokens (including Sunday) raise ValueError.
    """
    out = set()
    for d in days:
        out.add(d if isinstance(d, Weekday) else Weekday(str(d).strip()))
    return sorted(out, key=WEEK_ORDER.index)


def weekday_of(d: date) -> Optional[Weekday]:
    # date.weekday(): Monday == 0, Sunday == 6
    idx = d.weekday()
    if idx >= len(WEEK_ORDER):
        return None
    return WEEK_ORDER[idx]


def school_year_of(d: date) -> str:
    """School year rolls over in July: 2026-07-01 -> "2026-2027"."""
    if d.month >= 7:
        return f"{d.year}-{d.year + 1}"
    return f"{d.year - 1}-{d.year}"
