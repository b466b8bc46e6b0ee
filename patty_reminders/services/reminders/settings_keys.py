"""Settings store key layout for reminder preferences.

Every key lives under the ``notif_`` prefix so a single prefix read
rehydrates the whole engine.
"""

PREFIX = "notif_"

WATER_ENABLED = "notif_water_enabled"
WATER_COUNT = "notif_water_count"
WATER_START = "notif_water_start"
WATER_END = "notif_water_end"

TRUE = "true"
FALSE = "false"


def channel_enabled_key(channel_key: str) -> str:
    return f"{PREFIX}{channel_key}_enabled"


def channel_time_key(channel_key: str) -> str:
    return f"{PREFIX}{channel_key}_time"


def water_slot_key(index: int) -> str:
    return f"{PREFIX}water_slot_{index}_time"


def encode_bool(value: bool) -> str:
    return TRUE if value else FALSE


def decode_bool(value: object) -> bool:
    return value == TRUE
