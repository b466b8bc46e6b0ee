"""In-memory SchedulerGateway.

Keeps the schedule in a dict keyed by notification id and records every
call in order. Used for previews, development shells and tests.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ...models.reminder import (
    DisplayChannel,
    PermissionStatus,
    ScheduledReminder,
    TimeSpec,
)

logger = logging.getLogger(__name__)


class InMemorySchedulerGateway:
    """SchedulerGateway that schedules into a dict instead of the OS."""

    def __init__(
        self,
        permission: PermissionStatus = PermissionStatus.PROMPT,
        request_result: Optional[PermissionStatus] = PermissionStatus.GRANTED,
    ) -> None:
        self.permission = permission
        # What the simulated user answers to a prompt; None keeps the status.
        self.request_result = request_result
        self.scheduled: Dict[int, ScheduledReminder] = {}
        self.display_channels: Dict[str, DisplayChannel] = {}
        self.calls: List[Tuple[str, Any]] = []
        self.permission_requests = 0

    async def check_permission(self) -> PermissionStatus:
        return self.permission

    async def request_permission(self) -> PermissionStatus:
        self.permission_requests += 1
        if self.request_result is not None:
            self.permission = self.request_result
        return self.permission

    async def register_display_channel(self, channel: DisplayChannel) -> None:
        self.display_channels[channel.id] = channel

    async def schedule(
        self,
        notification_id: int,
        title: str,
        body: str,
        time_spec: TimeSpec,
        display_channel: str,
    ) -> None:
        self.calls.append(("schedule", notification_id))
        self.scheduled[notification_id] = ScheduledReminder(
            notification_id=notification_id,
            title=title,
            body=body,
            time_spec=time_spec,
            display_channel=display_channel,
        )
        logger.debug("Scheduled %d at %s", notification_id, time_spec)

    async def cancel(self, notification_id: int) -> None:
        self.calls.append(("cancel", notification_id))
        self.scheduled.pop(notification_id, None)

    def reset_calls(self) -> None:
        self.calls.clear()

    def wipe(self) -> None:
        """Drop every scheduled alert, like an OS reboot does."""
        self.scheduled.clear()
