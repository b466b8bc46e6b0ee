"""Wiring helper: build a ReminderEngine on top of the application database."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from ...core.database import get_session_factory
from ...core.typed_config import ReminderDefaults
from ...domain.ports.scheduler_gateway import SchedulerGateway
from ...infrastructure.repositories.sqlalchemy_settings_store import (
    SqlAlchemySettingsStore,
)
from .engine import ReminderEngine

logger = logging.getLogger(__name__)


async def create_reminder_engine(
    gateway: SchedulerGateway,
    session_factory: Optional[async_sessionmaker] = None,
    defaults: Optional[ReminderDefaults] = None,
    load: bool = True,
) -> ReminderEngine:
    """Create an engine persisting to the `settings` table and load it.

    Args:
        gateway: Platform scheduler (see infrastructure.gateways)
        session_factory: Async session factory; defaults to core.database's
        defaults: Reminder defaults; defaults to config/defaults.yaml
        load: Run ReminderEngine.load() before returning
    """
    if session_factory is None:
        session_factory = await get_session_factory()

    engine = ReminderEngine(SqlAlchemySettingsStore(session_factory), gateway, defaults)
    if load:
        await engine.load()
    return engine
