"""
Reminder scheduling.

Provides:
- Static channel catalog and display channels
- Water slot distribution and clock-time helpers
- ReminderEngine orchestrating persistence and the OS scheduler
"""

from .catalog import (
    CHANNELS,
    DISPLAY_CHANNELS,
    ENGAGE_OFFSET_MINUTES,
    WATER_NOTIFICATION_IDS,
    all_channels,
    engage_channels_for,
    find_channel,
    get_channel,
)
from .engine import ReminderEngine
from .factory import create_reminder_engine
from .water_slots import add_minutes, distribute, parse_time, resolve_slot_times

__all__ = [
    "CHANNELS",
    "DISPLAY_CHANNELS",
    "ENGAGE_OFFSET_MINUTES",
    "WATER_NOTIFICATION_IDS",
    "ReminderEngine",
    "add_minutes",
    "all_channels",
    "create_reminder_engine",
    "distribute",
    "engage_channels_for",
    "find_channel",
    "get_channel",
    "parse_time",
    "resolve_slot_times",
]
