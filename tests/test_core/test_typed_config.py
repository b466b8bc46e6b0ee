"""Tests for reminder defaults loaded from YAML."""

import pytest
from pydantic import ValidationError

from patty_reminders.core.typed_config import ReminderDefaults, load_reminder_defaults


def test_builtin_defaults():
    d = ReminderDefaults()
    assert (d.water_count, d.water_start, d.water_end) == (4, "07:00", "21:00")
    assert d.serialize_operations is True


def test_defaults_are_frozen():
    with pytest.raises(ValidationError):
        ReminderDefaults().water_count = 5


@pytest.mark.parametrize(
    "kwargs",
    [{"water_count": 0}, {"water_count": 9}, {"water_start": "7:00"}, {"water_end": "24:00"}],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValidationError):
        ReminderDefaults(**kwargs)


def test_load_from_section():
    section = {
        "serialize_operations": False,
        "water": {"count": 6, "start": "08:00", "end": "20:00"},
    }

    d = load_reminder_defaults(section)

    assert d == ReminderDefaults(
        water_count=6, water_start="08:00", water_end="20:00", serialize_operations=False
    )


def test_partial_config_keeps_other_defaults():
    d = load_reminder_defaults({"water": {"count": 2}})
    assert d.water_count == 2
    assert d.water_start == "07:00"


def test_invalid_config_falls_back_to_builtins():
    d = load_reminder_defaults({"water": {"count": 42}})
    assert d == ReminderDefaults()


def test_shipped_defaults_yaml_is_valid():
    assert load_reminder_defaults() == ReminderDefaults()


def test_non_mapping_water_entry_is_ignored():
    d = load_reminder_defaults({"water": "lots", "serialize_operations": False})
    assert d.water_count == 4
    assert d.serialize_operations is False
