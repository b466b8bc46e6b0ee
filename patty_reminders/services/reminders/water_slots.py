"""
Clock-time helpers and the water slot distributor.

Times are "HH:MM" strings on a single day. Arithmetic saturates at the day
boundaries (00:00 / 23:59) instead of wrapping past midnight.
"""

import math
import re
from typing import List, Tuple

from ...domain.errors import InvalidTimeError
from ...models.reminder import MAX_WATER_SLOTS, WaterFrequencySettings

LAST_MINUTE_OF_DAY = 23 * 60 + 59

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")
_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{1,2})\s*$")


def _lenient_int(raw: str) -> int:
    match = _LEADING_INT_RE.match(raw)
    return int(match.group(1)) if match else 0


def parse_time(value: str) -> Tuple[int, int]:
    """Split "HH:MM" into (hour, minute).

    Lenient on purpose: a missing or non-numeric field reads as 0, so
    "7" -> (7, 0) and "" -> (0, 0). Validate user input before it gets here.
    """
    parts = (value or "").split(":")
    hour = _lenient_int(parts[0]) if len(parts) > 0 else 0
    minute = _lenient_int(parts[1]) if len(parts) > 1 else 0
    return hour, minute


def format_time(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def normalize_time(value: str) -> str:
    """Canonical "HH:MM" for a user-entered time, e.g. "8:00" -> "08:00".

    Raises InvalidTimeError for anything that is not a time of day.
    """
    match = _CLOCK_RE.match(value) if isinstance(value, str) else None
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour < 24 and minute < 60:
            return format_time(hour, minute)
    raise InvalidTimeError(value)


def to_minutes(value: str) -> int:
    hour, minute = parse_time(value)
    return hour * 60 + minute


def from_minutes(minutes: int) -> str:
    """Minutes since midnight -> "HH:MM", clamped to [00:00, 23:59]."""
    minutes = max(0, min(LAST_MINUTE_OF_DAY, int(minutes)))
    return format_time(minutes // 60, minutes % 60)


def add_minutes(value: str, delta: int) -> str:
    """Wall-clock addition that saturates: add_minutes("23:50", 30) == "23:59"."""
    return from_minutes(to_minutes(value) + delta)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def distribute(count: int, start: str, end: str) -> List[str]:
    """Spread `count` reminder times evenly over [start, end].

    For count > 1 the first time is `start` and the last is `end`; a single
    reminder lands on the midpoint. A window that ends before it starts is
    collapsed onto `start`.
    """
    if count < 1:
        return []

    s = to_minutes(start)
    e = max(to_minutes(end), s)

    if count == 1:
        return [from_minutes(_round_half_up((s + e) / 2))]

    step = (e - s) / (count - 1)
    return [from_minutes(_round_half_up(s + i * step)) for i in range(count)]


def resolve_slot_times(settings: WaterFrequencySettings) -> List[str]:
    """Times for the active slots: the manual override if set, else auto."""
    count = max(1, min(MAX_WATER_SLOTS, settings.count))
    auto = distribute(count, settings.start, settings.end)
    return [settings.slot_overrides[i] or auto[i] for i in range(count)]
