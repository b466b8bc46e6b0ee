"""
ReminderEngine - keeps the OS notification queue in line with persisted
reminder preferences.

The settings store is the source of truth. Every mutation is written there
first; the scheduler gateway is a best-effort projection of that state and
is repaired by reconcile() on the next load or foregrounding. Android wipes
AlarmManager entries on reboot (and some OEM battery optimizers do the
same), which is why reconcile always cancels before scheduling instead of
trusting whatever the OS still holds.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from ...core.typed_config import ReminderDefaults, load_reminder_defaults
from ...domain.errors import (
    EngageTimeNotEditableError,
    EngineNotLoadedError,
    InvalidWaterSlotError,
    SettingsWriteError,
)
from ...domain.ports.scheduler_gateway import SchedulerGateway
from ...domain.ports.settings_store import SettingsStore
from ...models.reminder import (
    MAX_WATER_SLOTS,
    ChannelState,
    PermissionStatus,
    ReminderChannel,
    ScheduledReminder,
    TimeSpec,
    WaterFrequencySettings,
    is_valid_time,
)
from ...utils.keyed_lock import KeyedLock
from ...utils.logging import log_gateway_failure
from . import settings_keys as keys
from .catalog import (
    CHANNELS,
    DISPLAY_CHANNELS,
    ENGAGE_OFFSET_MINUTES,
    WATER_BODY,
    WATER_DISPLAY_CHANNEL,
    WATER_NOTIFICATION_IDS,
    WATER_TITLE,
    engage_channels_for,
    get_channel,
    water_notification_id,
)
from .water_slots import add_minutes, normalize_time, parse_time, resolve_slot_times

logger = logging.getLogger(__name__)

WATER_LOCK_KEY = "water"


class ReminderEngine:
    """Owns reminder state and reconciles it against the scheduler gateway."""

    def __init__(
        self,
        settings_store: SettingsStore,
        gateway: SchedulerGateway,
        defaults: Optional[ReminderDefaults] = None,
    ) -> None:
        self._store = settings_store
        self._gateway = gateway
        self._defaults = defaults or load_reminder_defaults()
        self._locks = KeyedLock(enabled=self._defaults.serialize_operations)
        self._permission_lock = asyncio.Lock()

        self._states: Dict[str, ChannelState] = self._default_states()
        self._water = self._default_water()
        self._permission = PermissionStatus.UNKNOWN
        self._loaded = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def permission(self) -> PermissionStatus:
        return self._permission

    @property
    def states(self) -> List[ChannelState]:
        """Copies of the channel states in catalog order."""
        return [
            ChannelState(key=s.key, enabled=s.enabled, time=s.time)
            for s in (self._states[ch.key] for ch in CHANNELS)
        ]

    @property
    def water(self) -> WaterFrequencySettings:
        return self._water.copy()

    @property
    def all_enabled(self) -> bool:
        return (
            self._loaded
            and all(s.enabled for s in self._states.values())
            and self._water.enabled
        )

    @property
    def any_enabled(self) -> bool:
        return any(s.enabled for s in self._states.values()) or self._water.enabled

    def get_state(self, key: str) -> ChannelState:
        get_channel(key)
        state = self._states[key]
        return ChannelState(key=state.key, enabled=state.enabled, time=state.time)

    def get_effective_time(self, key: str) -> str:
        """Time the channel fires at; engage channels follow their linked channel."""
        return self._effective_time(get_channel(key))

    def get_water_slot_times(self) -> List[str]:
        return resolve_slot_times(self._water)

    def desired_schedule(self) -> List[ScheduledReminder]:
        """Everything that should currently be scheduled, derived from state only."""
        desired: List[ScheduledReminder] = []
        for channel in CHANNELS:
            if self._states[channel.key].enabled:
                desired.append(self._channel_reminder(channel))
        if self._water.enabled:
            for index, time in enumerate(resolve_slot_times(self._water)):
                desired.append(self._water_reminder(index, time))
        return desired

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view for UI rendering."""
        return {
            "loaded": self._loaded,
            "permission": self._permission.value,
            "all_enabled": self.all_enabled,
            "any_enabled": self.any_enabled,
            "channels": [
                {
                    "key": ch.key,
                    "label": ch.label,
                    "emoji": ch.emoji,
                    "section": ch.section.value,
                    "weekday": ch.weekday,
                    "adapts_to": ch.adapts_to,
                    "enabled": self._states[ch.key].enabled,
                    "time": self._effective_time(ch),
                    "editable": not ch.is_engage,
                }
                for ch in CHANNELS
            ],
            "water": {
                "enabled": self._water.enabled,
                "count": self._water.count,
                "start": self._water.start,
                "end": self._water.end,
                "slot_overrides": list(self._water.slot_overrides),
                "slot_times": self.get_water_slot_times(),
            },
        }

    # ------------------------------------------------------------------
    # Startup / reconcile
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Rehydrate from the settings store and repair the OS schedule.

        Only reschedules when permission is already granted, so app launch
        never triggers a permission prompt.

        If the settings store cannot be read, the current state (defaults on
        first load) is kept, nothing is rescheduled and the engine still
        counts as loaded; call load() again to retry.
        """
        async with self._locks.hold(*self._all_lock_keys()):
            for display_channel in DISPLAY_CHANNELS:
                await self._best_effort(
                    "register_display_channel",
                    self._gateway.register_display_channel,
                    display_channel,
                    display_channel=display_channel.id,
                )

            try:
                settings = await self._store.read_all_matching(keys.PREFIX)
            except Exception as e:
                logger.error(f"Failed to read reminder settings, keeping current state: {e}")
                settings = None
            else:
                self._states = self._states_from_settings(settings)
                self._water = self._water_from_settings(settings)

            self._permission = await self._check_permission()
            if settings is None:
                logger.warning("Skipping reschedule until settings can be read")
            elif self._permission.is_granted:
                await self._reconcile()
            else:
                logger.info(
                    "Notification permission is %s; skipping reschedule",
                    self._permission.value,
                )

            self._loaded = True
            logger.info(
                "Reminder engine loaded: %d channels enabled, water %s",
                sum(1 for s in self._states.values() if s.enabled),
                "on" if self._water.enabled else "off",
            )

    async def reconcile(self) -> List[ScheduledReminder]:
        """Re-push the persisted schedule to the gateway (e.g. on foreground).

        Safe to run any number of times. Returns the desired schedule, or an
        empty list when permission is not granted.
        """
        self._require_loaded()
        async with self._locks.hold(*self._all_lock_keys()):
            self._permission = await self._check_permission()
            if not self._permission.is_granted:
                return []
            return await self._reconcile()

    async def _reconcile(self) -> List[ScheduledReminder]:
        for channel in CHANNELS:
            if self._states[channel.key].enabled:
                await self._cancel(channel.notification_id)
                await self._schedule_channel(channel)

        if self._water.enabled:
            for notification_id in WATER_NOTIFICATION_IDS:
                await self._cancel(notification_id)
            await self._schedule_water_slots(range(self._water.count))

        desired = self.desired_schedule()
        logger.debug("Reconciled %d reminders", len(desired))
        return desired

    # ------------------------------------------------------------------
    # Permission
    # ------------------------------------------------------------------

    async def request_permission(self) -> PermissionStatus:
        """Ask the gateway for permission; a failing gateway leaves status as is."""
        result = await self._best_effort(
            "request_permission", self._gateway.request_permission
        )
        if result is not None:
            self._permission = PermissionStatus.parse(result)
        return self._permission

    async def ensure_granted(self) -> bool:
        """Request permission unless already granted. Used by every enabling path."""
        async with self._permission_lock:
            if self._permission.is_granted:
                return True
            status = await self.request_permission()
            if not status.is_granted:
                logger.info("Notification permission not granted (%s)", status.value)
            return status.is_granted

    async def _check_permission(self) -> PermissionStatus:
        result = await self._best_effort(
            "check_permission", self._gateway.check_permission
        )
        return PermissionStatus.parse(result) if result is not None else PermissionStatus.UNKNOWN

    # ------------------------------------------------------------------
    # Channel operations
    # ------------------------------------------------------------------

    async def toggle_channel(self, key: str, enabled: bool) -> bool:
        """Enable or disable one channel. Returns False if permission was refused."""
        channel = get_channel(key)
        self._require_loaded()

        async with self._locks.hold(*self._channel_lock_keys(channel)):
            if enabled and not await self.ensure_granted():
                return False

            await self._persist(keys.channel_enabled_key(key), keys.encode_bool(enabled))
            self._states[key].enabled = enabled

            if enabled:
                await self._schedule_channel(channel)
            else:
                await self._cancel(channel.notification_id)

        logger.info("Reminder %s %s", key, "enabled" if enabled else "disabled")
        return True

    async def set_channel_time(self, key: str, time: str) -> None:
        """Change a channel's time and move every engage channel that follows it."""
        channel = get_channel(key)
        if channel.is_engage:
            raise EngageTimeNotEditableError(key, channel.adapts_to)
        time = normalize_time(time)
        self._require_loaded()

        dependents = engage_channels_for(key)
        async with self._locks.hold(key, *(d.key for d in dependents)):
            await self._persist(keys.channel_time_key(key), time)
            state = self._states[key]
            state.time = time

            if state.enabled:
                await self._cancel(channel.notification_id)
                await self._schedule_channel(channel)

            for dependent in dependents:
                if self._states[dependent.key].enabled:
                    await self._cancel(dependent.notification_id)
                    await self._schedule_channel(dependent)

        logger.info("Reminder %s moved to %s", key, time)

    # ------------------------------------------------------------------
    # Water operations
    # ------------------------------------------------------------------

    async def toggle_water(self, enabled: bool) -> bool:
        """Enable or disable the water group. Returns False if permission was refused."""
        self._require_loaded()
        async with self._locks.hold(WATER_LOCK_KEY):
            if enabled and not await self.ensure_granted():
                return False

            await self._persist(keys.WATER_ENABLED, keys.encode_bool(enabled))
            self._water.enabled = enabled

            if enabled:
                await self._schedule_water_slots(range(self._water.count))
            else:
                await self._cancel_water_slots(range(MAX_WATER_SLOTS))

        logger.info("Water reminders %s", "enabled" if enabled else "disabled")
        return True

    async def set_water_count(self, count: int) -> int:
        """Set how many water reminders fire per day (clamped to 1-8)."""
        self._require_loaded()
        count = max(1, min(MAX_WATER_SLOTS, int(count)))

        async with self._locks.hold(WATER_LOCK_KEY):
            await self._persist(keys.WATER_COUNT, str(count))
            self._water.count = count

            await self._cancel_water_slots(range(count, MAX_WATER_SLOTS))
            if self._water.enabled:
                # Auto-distributed times move for every slot when count changes.
                await self._reschedule_water_slots(range(count))

        logger.info("Water reminder count set to %d", count)
        return count

    async def set_water_window(self, start: str, end: str) -> None:
        """Move the water window. Clears every per-slot override."""
        start, end = normalize_time(start), normalize_time(end)
        self._require_loaded()
        async with self._locks.hold(WATER_LOCK_KEY):
            await self._persist(keys.WATER_START, start)
            await self._persist(keys.WATER_END, end)
            await self._persist_cleared_overrides()

            self._water.start = start
            self._water.end = end
            self._water.slot_overrides = [None] * MAX_WATER_SLOTS

            if self._water.enabled:
                await self._reschedule_water_slots(range(self._water.count))

        logger.info("Water window set to %s-%s", start, end)

    async def set_water_slot_time(self, index: int, time: str) -> None:
        """Pin one slot to a manual time. Other slots are left alone."""
        if not 0 <= index < MAX_WATER_SLOTS:
            raise InvalidWaterSlotError(index)
        time = normalize_time(time)
        self._require_loaded()

        async with self._locks.hold(WATER_LOCK_KEY):
            await self._persist(keys.water_slot_key(index), time)
            self._water.slot_overrides[index] = time

            if self._water.enabled and index < self._water.count:
                await self._reschedule_water_slots([index])

        logger.info("Water slot %d pinned to %s", index, time)

    async def reset_water_spacing(self) -> None:
        """Drop all overrides and go back to even spacing."""
        self._require_loaded()
        async with self._locks.hold(WATER_LOCK_KEY):
            await self._persist_cleared_overrides()
            self._water.slot_overrides = [None] * MAX_WATER_SLOTS

            if self._water.enabled:
                await self._reschedule_water_slots(range(self._water.count))

        logger.info("Water spacing reset")

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    async def enable_all(self) -> bool:
        """Enable every channel and the water group, asking for permission once."""
        self._require_loaded()
        async with self._locks.hold(*self._all_lock_keys()):
            if not await self.ensure_granted():
                return False

            for channel in CHANNELS:
                state = self._states[channel.key]
                if state.enabled:
                    continue
                await self._persist(keys.channel_enabled_key(channel.key), keys.TRUE)
                state.enabled = True
                await self._schedule_channel(channel)

            if not self._water.enabled:
                await self._persist(keys.WATER_ENABLED, keys.TRUE)
                self._water.enabled = True
                await self._schedule_water_slots(range(self._water.count))

        logger.info("All reminders enabled")
        return True

    async def disable_all(self) -> None:
        """Disable every channel and the water group."""
        self._require_loaded()
        async with self._locks.hold(*self._all_lock_keys()):
            for channel in CHANNELS:
                await self._persist(keys.channel_enabled_key(channel.key), keys.FALSE)
                self._states[channel.key].enabled = False
                await self._cancel(channel.notification_id)

            await self._persist(keys.WATER_ENABLED, keys.FALSE)
            self._water.enabled = False
            await self._cancel_water_slots(range(MAX_WATER_SLOTS))

        logger.info("All reminders disabled")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise EngineNotLoadedError()

    def _all_lock_keys(self) -> List[str]:
        return [ch.key for ch in CHANNELS] + [WATER_LOCK_KEY]

    def _channel_lock_keys(self, channel: ReminderChannel) -> List[str]:
        lock_keys = [channel.key]
        if channel.adapts_to:
            lock_keys.append(channel.adapts_to)
        return lock_keys

    def _effective_time(self, channel: ReminderChannel) -> str:
        if channel.adapts_to:
            linked = self._states[channel.adapts_to].time
            return add_minutes(linked, ENGAGE_OFFSET_MINUTES)
        return self._states[channel.key].time

    def _channel_reminder(self, channel: ReminderChannel) -> ScheduledReminder:
        hour, minute = parse_time(self._effective_time(channel))
        return ScheduledReminder(
            notification_id=channel.notification_id,
            title=channel.title,
            body=channel.body,
            time_spec=TimeSpec(hour=hour, minute=minute, weekday=channel.weekday),
            display_channel=channel.display_channel,
        )

    def _water_reminder(self, index: int, time: str) -> ScheduledReminder:
        hour, minute = parse_time(time)
        return ScheduledReminder(
            notification_id=water_notification_id(index),
            title=WATER_TITLE,
            body=WATER_BODY,
            time_spec=TimeSpec(hour=hour, minute=minute),
            display_channel=WATER_DISPLAY_CHANNEL,
        )

    async def _persist(self, key: str, value: str) -> None:
        try:
            await self._store.write(key, value)
        except Exception as e:
            logger.error(f"Failed to persist {key}: {e}")
            raise SettingsWriteError(key, str(e)) from e

    async def _persist_cleared_overrides(self) -> None:
        for index in range(MAX_WATER_SLOTS):
            await self._persist(keys.water_slot_key(index), "")

    async def _best_effort(
        self,
        operation: str,
        call: Callable[..., Awaitable[Any]],
        *args: Any,
        **context: Any,
    ) -> Any:
        """Run one gateway call; on failure log it and return None.

        Persisted state is never rolled back because of a gateway error.
        """
        try:
            return await call(*args)
        except Exception as e:
            log_gateway_failure(operation, e, context)
            return None

    async def _schedule(self, reminder: ScheduledReminder) -> None:
        await self._best_effort(
            "schedule",
            self._gateway.schedule,
            reminder.notification_id,
            reminder.title,
            reminder.body,
            reminder.time_spec,
            reminder.display_channel,
            notification_id=reminder.notification_id,
        )

    async def _cancel(self, notification_id: int) -> None:
        await self._best_effort(
            "cancel",
            self._gateway.cancel,
            notification_id,
            notification_id=notification_id,
        )

    async def _schedule_channel(self, channel: ReminderChannel) -> None:
        await self._schedule(self._channel_reminder(channel))

    async def _schedule_water_slots(self, indexes: Iterable[int]) -> None:
        times = resolve_slot_times(self._water)
        for index in indexes:
            await self._schedule(self._water_reminder(index, times[index]))

    async def _cancel_water_slots(self, indexes: Iterable[int]) -> None:
        for index in indexes:
            await self._cancel(water_notification_id(index))

    async def _reschedule_water_slots(self, indexes: Iterable[int]) -> None:
        times = resolve_slot_times(self._water)
        for index in indexes:
            await self._cancel(water_notification_id(index))
            await self._schedule(self._water_reminder(index, times[index]))

    # ------------------------------------------------------------------
    # Rehydration
    # ------------------------------------------------------------------

    def _default_states(self) -> Dict[str, ChannelState]:
        return {
            ch.key: ChannelState(key=ch.key, enabled=False, time=ch.default_time)
            for ch in CHANNELS
        }

    def _default_water(self) -> WaterFrequencySettings:
        return WaterFrequencySettings(
            enabled=False,
            count=self._defaults.water_count,
            start=self._defaults.water_start,
            end=self._defaults.water_end,
        )

    def _states_from_settings(self, settings: Dict[str, str]) -> Dict[str, ChannelState]:
        states: Dict[str, ChannelState] = {}
        for channel in CHANNELS:
            time = channel.default_time
            if not channel.is_engage:
                stored = settings.get(keys.channel_time_key(channel.key))
                if is_valid_time(stored):
                    time = stored
                elif stored is not None:
                    logger.warning(
                        "Ignoring malformed time %r for %s, using %s",
                        stored,
                        channel.key,
                        channel.default_time,
                    )
            states[channel.key] = ChannelState(
                key=channel.key,
                enabled=keys.decode_bool(settings.get(keys.channel_enabled_key(channel.key))),
                time=time,
            )
        return states

    def _water_from_settings(self, settings: Dict[str, str]) -> WaterFrequencySettings:
        water = self._default_water()
        water.enabled = keys.decode_bool(settings.get(keys.WATER_ENABLED))

        raw_count = settings.get(keys.WATER_COUNT)
        if raw_count is not None:
            try:
                count = int(raw_count)
            except ValueError:
                count = 0
            if 1 <= count <= MAX_WATER_SLOTS:
                water.count = count
            else:
                logger.warning(
                    "Ignoring malformed water count %r, using %d",
                    raw_count,
                    water.count,
                )

        start = settings.get(keys.WATER_START)
        end = settings.get(keys.WATER_END)
        if is_valid_time(start) and is_valid_time(end):
            water.start, water.end = start, end
        elif start is not None or end is not None:
            logger.warning(
                "Ignoring malformed water window %r-%r, using %s-%s",
                start,
                end,
                water.start,
                water.end,
            )

        for index in range(MAX_WATER_SLOTS):
            stored = settings.get(keys.water_slot_key(index))
            if is_valid_time(stored):
                water.slot_overrides[index] = stored
            elif stored:
                logger.warning("Ignoring malformed override %r for water slot %d", stored, index)

        return water
