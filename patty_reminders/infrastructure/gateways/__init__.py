from .in_memory import InMemorySchedulerGateway
from .unsupported import UnsupportedSchedulerGateway

__all__ = ["InMemorySchedulerGateway", "UnsupportedSchedulerGateway"]
