from .base import Base, TimestampMixin
from .reminder import (
    ChannelState,
    DisplayChannel,
    PermissionStatus,
    ReminderChannel,
    ScheduledReminder,
    Section,
    TimeSpec,
    WaterFrequencySettings,
)
from .setting import Setting

__all__ = [
    "Base",
    "TimestampMixin",
    "Setting",
    "ChannelState",
    "DisplayChannel",
    "PermissionStatus",
    "ReminderChannel",
    "ScheduledReminder",
    "Section",
    "TimeSpec",
    "WaterFrequencySettings",
]
