"""
Typed reminder configuration.

Replaces raw dict access on defaults.yaml with a Pydantic-validated,
immutable ReminderDefaults object.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..models.reminder import MAX_WATER_SLOTS, is_valid_time
from .defaults_loader import load_reminders_section

logger = logging.getLogger(__name__)


class ReminderDefaults(BaseModel):
    """Fallbacks used when the settings store has no usable value."""

    model_config = ConfigDict(frozen=True)

    water_count: int = 4
    water_start: str = "07:00"
    water_end: str = "21:00"
    serialize_operations: bool = True

    @field_validator("water_count")
    @classmethod
    def count_in_range(cls, v: int) -> int:
        if not 1 <= v <= MAX_WATER_SLOTS:
            raise ValueError(f"water_count must be 1-{MAX_WATER_SLOTS}, got {v}")
        return v

    @field_validator("water_start", "water_end")
    @classmethod
    def time_valid(cls, v: str) -> str:
        if not is_valid_time(v):
            raise ValueError(f"expected HH:MM, got '{v}'")
        return v


def load_reminder_defaults(section: Optional[Dict[str, Any]] = None) -> ReminderDefaults:
    """Build ReminderDefaults from the ``reminders:`` YAML section.

    An invalid YAML value is logged and the built-in defaults are used, so a
    bad local override can never stop the engine from starting.
    """
    if section is None:
        section = load_reminders_section()

    water = section.get("water")
    if not isinstance(water, dict):
        water = {}

    raw = {
        "water_count": water.get("count"),
        "water_start": water.get("start"),
        "water_end": water.get("end"),
        "serialize_operations": section.get("serialize_operations"),
    }
    values = {k: v for k, v in raw.items() if v is not None}

    try:
        return ReminderDefaults(**values)
    except ValidationError as e:
        logger.warning("Invalid reminder defaults in config, using built-ins: %s", e)
        return ReminderDefaults()
