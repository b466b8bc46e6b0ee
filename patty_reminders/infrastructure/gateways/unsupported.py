"""SchedulerGateway for platforms without local notifications (web preview)."""

from ...domain.errors import GatewayUnavailableError
from ...models.reminder import DisplayChannel, PermissionStatus, TimeSpec


class UnsupportedSchedulerGateway:
    """Reports `denied` and raises GatewayUnavailableError for everything else."""

    async def check_permission(self) -> PermissionStatus:
        return PermissionStatus.DENIED

    async def request_permission(self) -> PermissionStatus:
        return PermissionStatus.DENIED

    async def register_display_channel(self, channel: DisplayChannel) -> None:
        raise GatewayUnavailableError("Display channels are not supported here")

    async def schedule(
        self,
        notification_id: int,
        title: str,
        body: str,
        time_spec: TimeSpec,
        display_channel: str,
    ) -> None:
        raise GatewayUnavailableError("Local notifications are not supported here")

    async def cancel(self, notification_id: int) -> None:
        raise GatewayUnavailableError("Local notifications are not supported here")
