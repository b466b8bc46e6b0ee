"""SchedulerGateway port -- the OS facility for recurring local alerts.

The gateway has no query API: callers can only schedule, cancel, ask for
permission and register display channels. Implementations may lose every
scheduled alert on reboot, so callers treat it as a best-effort projection
of persisted intent.
"""

from typing import Protocol, runtime_checkable

from ...models.reminder import DisplayChannel, PermissionStatus, TimeSpec


@runtime_checkable
class SchedulerGateway(Protocol):
    """Schedules and cancels recurring local notifications by numeric id."""

    async def check_permission(self) -> PermissionStatus:
        """Return the current permission without prompting the user."""
        ...

    async def request_permission(self) -> PermissionStatus:
        """Prompt the user (if the platform allows) and return the outcome."""
        ...

    async def register_display_channel(self, channel: DisplayChannel) -> None:
        """Create or update a notification category. Idempotent."""
        ...

    async def schedule(
        self,
        notification_id: int,
        title: str,
        body: str,
        time_spec: TimeSpec,
        display_channel: str,
    ) -> None:
        """Schedule a recurring alert firing at ``time_spec`` wall-clock time."""
        ...

    async def cancel(self, notification_id: int) -> None:
        """Cancel an alert. Cancelling an unknown id is not an error."""
        ...
