"""Ports: external collaborators the reminder engine depends on."""

from .scheduler_gateway import SchedulerGateway
from .settings_store import SettingsStore

__all__ = ["SchedulerGateway", "SettingsStore"]
