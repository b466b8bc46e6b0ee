"""
Typed domain errors for the reminder engine.

Callers can tell a programming mistake (unknown channel, editing a derived
time) apart from an operational failure (settings write failed, gateway
unavailable) and react to each accordingly.
"""


class DomainError(Exception):
    """Base class for all domain-specific errors."""


# ---------------------------------------------------------------------------
# Catalog / input errors
# ---------------------------------------------------------------------------


class UnknownChannelError(DomainError):
    """No reminder channel with the given key exists in the catalog."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown reminder channel: {key}")


class EngageTimeNotEditableError(DomainError):
    """Engage channels derive their time from another channel."""

    def __init__(self, key: str, adapts_to: str) -> None:
        self.key = key
        self.adapts_to = adapts_to
        super().__init__(
            f"Channel {key} follows {adapts_to}; its time cannot be set directly"
        )


class InvalidTimeError(DomainError):
    """A reminder time that is not a wall-clock HH:MM value."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid reminder time: {value!r}")


class InvalidWaterSlotError(DomainError):
    """Water slot index outside 0..7."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Water slot index out of range: {index}")


# ---------------------------------------------------------------------------
# Operational errors
# ---------------------------------------------------------------------------


class EngineNotLoadedError(DomainError):
    """A mutating operation was called before load() completed."""

    def __init__(self) -> None:
        super().__init__("Reminder engine has not finished loading")


class SettingsWriteError(DomainError):
    """The settings store rejected a write; in-memory state was not changed."""

    def __init__(self, key: str, reason: str = "") -> None:
        self.key = key
        message = f"Failed to persist setting {key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class GatewayUnavailableError(DomainError):
    """The OS notification scheduler is not available on this platform."""
