"""SettingsStore port -- durable string key/value persistence."""

from typing import Dict, Protocol, runtime_checkable


@runtime_checkable
class SettingsStore(Protocol):
    """Key/value store the reminder engine reads and writes through."""

    async def read_all_matching(self, prefix: str) -> Dict[str, str]:
        """Return every stored key starting with ``prefix`` mapped to its value."""
        ...

    async def write(self, key: str, value: str) -> None:
        """Insert or replace ``key``. Raises on failure."""
        ...
