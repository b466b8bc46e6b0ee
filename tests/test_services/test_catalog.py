"""Tests for the static reminder catalog."""

import pytest

from patty_reminders.domain.errors import InvalidWaterSlotError, UnknownChannelError
from patty_reminders.models.reminder import ReminderChannel, Section
from patty_reminders.services.reminders.catalog import (
    CHANNELS,
    DISPLAY_CHANNELS,
    WATER_DISPLAY_CHANNEL,
    WATER_NOTIFICATION_IDS,
    all_channels,
    channels_in_section,
    engage_channels_for,
    find_channel,
    get_channel,
    water_notification_id,
)


def test_catalog_has_eleven_channels():
    assert len(all_channels()) == 11


def test_notification_ids_unique_and_in_range():
    ids = [ch.notification_id for ch in CHANNELS]
    assert len(set(ids)) == len(ids)
    assert all(101 <= i <= 114 for i in ids)


def test_water_ids_disjoint_from_catalog():
    catalog_ids = {ch.notification_id for ch in CHANNELS}
    assert WATER_NOTIFICATION_IDS == tuple(range(120, 128))
    assert catalog_ids.isdisjoint(WATER_NOTIFICATION_IDS)


def test_water_notification_id_bounds():
    assert water_notification_id(0) == 120
    assert water_notification_id(7) == 127
    with pytest.raises(InvalidWaterSlotError):
        water_notification_id(8)


def test_engage_channels_follow_non_engage_channels():
    engage = channels_in_section(Section.ENGAGE)
    assert {ch.key for ch in engage} == {
        "morning_boost",
        "lunch_check",
        "dinner_reflect",
        "wind_down",
    }
    for ch in engage:
        target = get_channel(ch.adapts_to)
        assert not target.is_engage
        assert ch.weekday is None


def test_engage_channels_for_weigh_in():
    assert [ch.key for ch in engage_channels_for("weigh_in")] == ["morning_boost"]
    assert engage_channels_for("progress_photo") == []


def test_weekly_channels_fire_on_sunday():
    weekly = [ch for ch in CHANNELS if ch.is_weekly]
    assert {ch.key for ch in weekly} == {"progress_photo", "meal_plan"}
    assert all(ch.weekday == 1 for ch in weekly)


def test_engage_default_time_is_offset_from_linked_default():
    assert get_channel("morning_boost").default_time == "08:00"
    assert get_channel("wind_down").default_time == "22:30"


def test_every_display_channel_referenced_exists():
    display_ids = {dc.id for dc in DISPLAY_CHANNELS}
    assert {ch.display_channel for ch in CHANNELS} <= display_ids
    assert WATER_DISPLAY_CHANNEL in display_ids


def test_lookup_helpers():
    assert find_channel("nope") is None
    assert get_channel("weigh_in").title.endswith("Weigh-in")
    with pytest.raises(UnknownChannelError) as exc:
        get_channel("nope")
    assert exc.value.key == "nope"


def test_channel_is_immutable():
    with pytest.raises(Exception):
        get_channel("weigh_in").default_time = "09:00"


def test_channel_rejects_bad_weekday_and_time():
    with pytest.raises(ValueError):
        ReminderChannel(
            key="x",
            notification_id=199,
            label="x",
            emoji="x",
            body="x",
            default_time="25:00",
            section=Section.HEALTH,
            display_channel="patty-plan",
        )
    with pytest.raises(ValueError):
        ReminderChannel(
            key="x",
            notification_id=199,
            label="x",
            emoji="x",
            body="x",
            default_time="09:00",
            section=Section.HEALTH,
            display_channel="patty-plan",
            weekday=8,
        )
