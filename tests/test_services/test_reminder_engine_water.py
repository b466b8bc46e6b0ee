"""Tests for the water frequency group of ReminderEngine."""

import pytest

from patty_reminders.domain.errors import InvalidTimeError, InvalidWaterSlotError
from patty_reminders.models.reminder import TimeSpec
from patty_reminders.services.reminders.engine import ReminderEngine
from patty_reminders.services.reminders.water_slots import distribute

ALL_WATER_IDS = list(range(120, 128))


def _scheduled_times(gateway, ids):
    return [
        f"{gateway.scheduled[i].time_spec.hour:02d}:{gateway.scheduled[i].time_spec.minute:02d}"
        for i in ids
    ]


@pytest.mark.asyncio
async def test_toggle_water_on_schedules_count_slots(loaded_engine, store, gateway):
    assert await loaded_engine.toggle_water(True) is True

    assert store.data["notif_water_enabled"] == "true"
    assert gateway.calls == [("schedule", i) for i in range(120, 124)]
    assert _scheduled_times(gateway, range(120, 124)) == [
        "07:00",
        "11:40",
        "16:20",
        "21:00",
    ]
    assert gateway.scheduled[120].display_channel == "patty-water"
    assert gateway.scheduled[120].time_spec.weekday is None


@pytest.mark.asyncio
async def test_toggle_water_off_cancels_all_eight(loaded_engine, gateway):
    await loaded_engine.toggle_water(True)
    gateway.reset_calls()

    await loaded_engine.toggle_water(False)

    assert gateway.calls == [("cancel", i) for i in ALL_WATER_IDS]
    assert gateway.scheduled == {}


@pytest.mark.asyncio
async def test_raising_count_redistributes_every_slot(loaded_engine, store, gateway):
    await loaded_engine.toggle_water(True)
    gateway.reset_calls()

    assert await loaded_engine.set_water_count(6) == 6

    assert store.data["notif_water_count"] == "6"
    assert gateway.calls[:2] == [("cancel", 126), ("cancel", 127)]
    assert _scheduled_times(gateway, range(120, 126)) == distribute(6, "07:00", "21:00")
    assert gateway.scheduled[121].time_spec == TimeSpec(hour=9, minute=48)


@pytest.mark.asyncio
async def test_lowering_count_cancels_trailing_slots(loaded_engine, gateway):
    await loaded_engine.toggle_water(True)

    await loaded_engine.set_water_count(2)

    assert set(gateway.scheduled) == {120, 121}
    assert _scheduled_times(gateway, [120, 121]) == ["07:00", "21:00"]


@pytest.mark.asyncio
@pytest.mark.parametrize("requested, expected", [(0, 1), (-3, 1), (20, 8), (5, 5)])
async def test_count_is_clamped(loaded_engine, store, requested, expected):
    assert await loaded_engine.set_water_count(requested) == expected
    assert store.data["notif_water_count"] == str(expected)
    assert loaded_engine.water.count == expected


@pytest.mark.asyncio
async def test_count_change_while_disabled_only_cancels(loaded_engine, gateway):
    await loaded_engine.set_water_count(3)

    assert gateway.calls == [("cancel", i) for i in range(123, 128)]


@pytest.mark.asyncio
async def test_slot_override_reschedules_only_that_slot(loaded_engine, store, gateway):
    await loaded_engine.toggle_water(True)
    gateway.reset_calls()

    await loaded_engine.set_water_slot_time(2, "13:15")

    assert store.data["notif_water_slot_2_time"] == "13:15"
    assert gateway.calls == [("cancel", 122), ("schedule", 122)]
    assert _scheduled_times(gateway, range(120, 124)) == [
        "07:00",
        "11:40",
        "13:15",
        "21:00",
    ]


@pytest.mark.asyncio
async def test_override_beyond_count_is_only_persisted(loaded_engine, store, gateway):
    await loaded_engine.toggle_water(True)
    gateway.reset_calls()

    await loaded_engine.set_water_slot_time(6, "20:00")

    assert store.data["notif_water_slot_6_time"] == "20:00"
    assert gateway.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("index", [-1, 8])
async def test_override_index_out_of_range(loaded_engine, store, index):
    with pytest.raises(InvalidWaterSlotError):
        await loaded_engine.set_water_slot_time(index, "10:00")
    assert store.writes == []


@pytest.mark.asyncio
async def test_reset_spacing_drops_override_after_count_change(loaded_engine, store, gateway):
    await loaded_engine.toggle_water(True)
    await loaded_engine.set_water_slot_time(2, "13:15")
    await loaded_engine.set_water_count(5)

    # Override survives the count change...
    assert loaded_engine.get_water_slot_times()[2] == "13:15"

    await loaded_engine.reset_water_spacing()

    expected = distribute(5, "07:00", "21:00")
    assert loaded_engine.get_water_slot_times() == expected
    assert loaded_engine.water.slot_overrides == [None] * 8
    assert store.data["notif_water_slot_2_time"] == ""
    assert _scheduled_times(gateway, range(120, 125)) == expected


@pytest.mark.asyncio
async def test_window_change_clears_all_overrides(loaded_engine, store, gateway):
    await loaded_engine.toggle_water(True)
    await loaded_engine.set_water_slot_time(0, "06:30")
    await loaded_engine.set_water_slot_time(3, "22:00")
    await loaded_engine.set_water_slot_time(7, "23:00")

    await loaded_engine.set_water_window("08:00", "20:00")

    assert loaded_engine.water.slot_overrides == [None] * 8
    assert all(store.data[f"notif_water_slot_{i}_time"] == "" for i in range(8))
    assert (store.data["notif_water_start"], store.data["notif_water_end"]) == (
        "08:00",
        "20:00",
    )
    assert _scheduled_times(gateway, range(120, 124)) == [
        "08:00",
        "12:00",
        "16:00",
        "20:00",
    ]


@pytest.mark.asyncio
async def test_window_change_while_disabled_schedules_nothing(loaded_engine, gateway):
    await loaded_engine.set_water_window("09:00", "17:00")

    assert gateway.calls == []
    assert loaded_engine.get_water_slot_times() == ["09:00", "11:40", "14:20", "17:00"]


@pytest.mark.asyncio
async def test_water_settings_survive_reload(loaded_engine, store, gateway, defaults):
    await loaded_engine.toggle_water(True)
    await loaded_engine.set_water_count(3)
    await loaded_engine.set_water_slot_time(1, "12:05")

    fresh = ReminderEngine(store, gateway, defaults)
    await fresh.load()

    water = fresh.water
    assert water.enabled is True
    assert water.count == 3
    assert water.slot_overrides[1] == "12:05"
    assert fresh.get_water_slot_times() == ["07:00", "12:05", "21:00"]


@pytest.mark.asyncio
async def test_unpadded_window_and_slot_survive_reload(
    loaded_engine, store, gateway, defaults
):
    await loaded_engine.toggle_water(True)
    await loaded_engine.set_water_window("6:00", "18:00")
    await loaded_engine.set_water_slot_time(1, "9:05")

    assert (store.data["notif_water_start"], store.data["notif_water_end"]) == (
        "06:00",
        "18:00",
    )
    assert store.data["notif_water_slot_1_time"] == "09:05"
    before = _scheduled_times(gateway, range(120, 124))

    gateway.wipe()
    fresh = ReminderEngine(store, gateway, defaults)
    await fresh.load()

    assert before == ["06:00", "09:05", "14:00", "18:00"]
    assert fresh.get_water_slot_times() == before
    assert _scheduled_times(gateway, range(120, 124)) == before


@pytest.mark.asyncio
async def test_invalid_window_is_rejected_before_any_write(loaded_engine, store):
    store.writes.clear()

    with pytest.raises(InvalidTimeError):
        await loaded_engine.set_water_window("07:00", "25:00")

    assert store.writes == []
    assert (loaded_engine.water.start, loaded_engine.water.end) == ("07:00", "21:00")


@pytest.mark.asyncio
async def test_invalid_slot_time_is_rejected(loaded_engine, store):
    store.writes.clear()

    with pytest.raises(InvalidTimeError):
        await loaded_engine.set_water_slot_time(2, "noon")

    assert store.writes == []
    assert loaded_engine.water.slot_overrides[2] is None
