"""SQLAlchemy implementation of SettingsStore."""

import logging
from typing import Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...models.setting import Setting

logger = logging.getLogger(__name__)


class SqlAlchemySettingsStore:
    """Concrete SettingsStore backed by the `settings` table.

    Each write commits in its own session, so a returned write is durable.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def read_all_matching(self, prefix: str) -> Dict[str, str]:
        """Return every setting whose key starts with `prefix`."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(Setting.key, Setting.value).where(
                    Setting.key.startswith(prefix, autoescape=True)
                )
            )
            return {key: value for key, value in result.all()}

    async def write(self, key: str, value: str) -> None:
        """Insert or replace one setting."""
        async with self._session_factory() as session:
            await self._upsert(session, key, value)
            await session.commit()
        logger.debug("Persisted setting %s=%r", key, value)

    async def _upsert(self, session: AsyncSession, key: str, value: str) -> None:
        existing = await session.get(Setting, key)
        if existing is None:
            session.add(Setting(key=key, value=value))
        else:
            existing.value = value
