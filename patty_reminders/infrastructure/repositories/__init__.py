"""Concrete repository implementations."""

from .sqlalchemy_settings_store import SqlAlchemySettingsStore

__all__ = ["SqlAlchemySettingsStore"]
