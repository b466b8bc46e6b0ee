"""
Reminder domain types.

ReminderChannel / DisplayChannel are immutable catalog entries (Pydantic,
frozen). ChannelState / WaterFrequencySettings are the mutable per-user
state the engine owns. TimeSpec / ScheduledReminder describe what is handed
to the OS scheduler.
"""

import enum
import re
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

HH_MM_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

MAX_WATER_SLOTS = 8


class Section(str, enum.Enum):
    HEALTH = "health"
    MEALS = "meals"
    PLANNING = "planning"
    ENGAGE = "engage"


class PermissionStatus(str, enum.Enum):
    """Notification permission as last observed from the gateway."""

    GRANTED = "granted"
    DENIED = "denied"
    PROMPT = "prompt"
    PROMPT_WITH_RATIONALE = "prompt-with-rationale"
    UNKNOWN = "unknown"

    @property
    def is_granted(self) -> bool:
        return self is PermissionStatus.GRANTED

    @classmethod
    def parse(cls, value: object) -> "PermissionStatus":
        """Map a raw platform answer onto the enum; anything odd is UNKNOWN."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return cls.UNKNOWN


def is_valid_time(value: Optional[str]) -> bool:
    """Strict HH:MM check (00:00-23:59)."""
    return bool(value) and HH_MM_RE.match(value) is not None


class DisplayChannel(BaseModel):
    """OS-level notification category (Android channel)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    sound: str
    importance: int = 3  # IMPORTANCE_DEFAULT
    vibration: bool = True


class ReminderChannel(BaseModel):
    """A single reminder definition from the static catalog."""

    model_config = ConfigDict(frozen=True)

    key: str
    notification_id: int
    label: str
    emoji: str
    body: str
    default_time: str
    section: Section
    display_channel: str
    weekday: Optional[int] = None  # 1 = Sunday ... 7 = Saturday
    adapts_to: Optional[str] = None

    @field_validator("default_time")
    @classmethod
    def default_time_valid(cls, v: str) -> str:
        if not is_valid_time(v):
            raise ValueError(f"default_time must be HH:MM, got '{v}'")
        return v

    @field_validator("weekday")
    @classmethod
    def weekday_in_range(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 1 <= v <= 7:
            raise ValueError(f"weekday must be 1-7, got {v}")
        return v

    @property
    def title(self) -> str:
        return f"{self.emoji} {self.label}"

    @property
    def is_engage(self) -> bool:
        return self.adapts_to is not None

    @property
    def is_weekly(self) -> bool:
        return self.weekday is not None


@dataclass
class ChannelState:
    """Per-channel user preference. For engage channels `time` is unused."""

    key: str
    enabled: bool = False
    time: str = "00:00"


def _empty_overrides() -> List[Optional[str]]:
    return [None] * MAX_WATER_SLOTS


@dataclass
class WaterFrequencySettings:
    """Hydration reminder group: `count` slots spread over [start, end]."""

    enabled: bool = False
    count: int = 4
    start: str = "07:00"
    end: str = "21:00"
    slot_overrides: List[Optional[str]] = field(default_factory=_empty_overrides)

    def copy(self) -> "WaterFrequencySettings":
        return WaterFrequencySettings(
            enabled=self.enabled,
            count=self.count,
            start=self.start,
            end=self.end,
            slot_overrides=list(self.slot_overrides),
        )


@dataclass(frozen=True)
class TimeSpec:
    """Recurring wall-clock trigger: every day, or every matching weekday."""

    hour: int
    minute: int
    weekday: Optional[int] = None

    def __str__(self) -> str:
        base = f"{self.hour:02d}:{self.minute:02d}"
        return f"{base} (weekday {self.weekday})" if self.weekday else base


@dataclass(frozen=True)
class ScheduledReminder:
    """One entry of the desired OS schedule."""

    notification_id: int
    title: str
    body: str
    time_spec: TimeSpec
    display_channel: str
