import asyncio
import logging
import os
from typing import Dict, List, Optional, Set, Tuple

import pytest

# Set test environment variables
os.environ["PATTY_LOG_LEVEL"] = "WARNING"
os.environ["PATTY_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from patty_reminders.core.typed_config import ReminderDefaults
from patty_reminders.infrastructure.gateways import InMemorySchedulerGateway
from patty_reminders.models.reminder import PermissionStatus
from patty_reminders.services.reminders.engine import ReminderEngine


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


# ---------------------------------------------------------------------------
# In-memory fakes
# ---------------------------------------------------------------------------


class FakeSettingsStore:
    """In-memory SettingsStore with failure and latency injection."""

    def __init__(
        self,
        data: Optional[Dict[str, str]] = None,
        events: Optional[List[Tuple[str, object]]] = None,
    ):
        self.data: Dict[str, str] = dict(data or {})
        self.writes: List[Tuple[str, str]] = []
        self.events = events if events is not None else []
        self.fail_keys: Set[str] = set()
        self.fail_reads = False
        self.write_delays: List[float] = []

    async def read_all_matching(self, prefix: str) -> Dict[str, str]:
        if self.fail_reads:
            raise OSError("disk I/O error")
        return {k: v for k, v in self.data.items() if k.startswith(prefix)}

    async def write(self, key: str, value: str) -> None:
        if self.write_delays:
            await asyncio.sleep(self.write_delays.pop(0))
        if key in self.fail_keys:
            raise OSError(f"cannot write {key}")
        self.data[key] = value
        self.writes.append((key, value))
        self.events.append(("write", key))


class RecordingGateway(InMemorySchedulerGateway):
    """InMemorySchedulerGateway that also logs into a shared event list."""

    def __init__(self, events: List[Tuple[str, object]], **kwargs):
        super().__init__(**kwargs)
        self.events = events

    async def schedule(self, notification_id, title, body, time_spec, display_channel):
        self.events.append(("schedule", notification_id))
        await super().schedule(notification_id, title, body, time_spec, display_channel)

    async def cancel(self, notification_id):
        self.events.append(("cancel", notification_id))
        await super().cancel(notification_id)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def events() -> List[Tuple[str, object]]:
    return []


@pytest.fixture
def store(events) -> FakeSettingsStore:
    return FakeSettingsStore(events=events)


@pytest.fixture
def gateway(events) -> RecordingGateway:
    return RecordingGateway(events, permission=PermissionStatus.GRANTED)


@pytest.fixture
def defaults() -> ReminderDefaults:
    return ReminderDefaults()


@pytest.fixture
def engine(store, gateway, defaults) -> ReminderEngine:
    return ReminderEngine(store, gateway, defaults)


@pytest.fixture
async def loaded_engine(engine, gateway) -> ReminderEngine:
    """Engine after load() with a clean call log."""
    await engine.load()
    gateway.reset_calls()
    gateway.events.clear()
    return engine


