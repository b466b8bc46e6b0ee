"""
Static reminder catalog.

Channels (11 total):
  Health Tracking  -- weigh_in, sleep_log
  Meal Logging     -- breakfast_log, lunch_log, dinner_log
  Planning         -- progress_photo, meal_plan (weekly, Sundays)
  Engage           -- morning_boost, lunch_check, dinner_reflect, wind_down
                      (each follows another channel by ENGAGE_OFFSET_MINUTES)

Notification ids 101-114 belong to this catalog; 102-104 are retired (the
old fixed-time water channels) and stay unused. Water slots use 120-127.
"""

from typing import Dict, List, Optional, Tuple

from ...domain.errors import InvalidWaterSlotError, UnknownChannelError
from ...models.reminder import (
    MAX_WATER_SLOTS,
    DisplayChannel,
    ReminderChannel,
    Section,
)
from .water_slots import add_minutes

ENGAGE_OFFSET_MINUTES = 30

CATALOG_ID_RANGE = range(101, 115)
WATER_ID_BASE = 120
WATER_NOTIFICATION_IDS: Tuple[int, ...] = tuple(
    WATER_ID_BASE + i for i in range(MAX_WATER_SLOTS)
)

WATER_DISPLAY_CHANNEL = "patty-water"
WATER_TITLE = "\U0001F4A7 Hydration check"
WATER_BODY = "Time for a glass of water — log it in Patty."

# id, name, description, sound file (res/raw/<sound>.wav on Android)
DISPLAY_CHANNELS: Tuple[DisplayChannel, ...] = (
    DisplayChannel(
        id="patty-weighin",
        name="Weigh-in",
        description="Daily weigh-in reminder",
        sound="patty_weighin",
    ),
    DisplayChannel(
        id="patty-water",
        name="Hydration",
        description="Daily water intake reminders",
        sound="patty_water",
    ),
    DisplayChannel(
        id="patty-sleep",
        name="Sleep",
        description="Daily sleep log reminder",
        sound="patty_sleep",
    ),
    DisplayChannel(
        id="patty-food",
        name="Meals",
        description="Meal logging reminders",
        sound="patty_food",
    ),
    DisplayChannel(
        id="patty-plan",
        name="Planning",
        description="Weekly planning reminders",
        sound="patty_plan",
    ),
    DisplayChannel(
        id="patty-engage",
        name="Nudges",
        description="Follow-up nudges after your routine reminders",
        sound="patty_engage",
    ),
)


def _engage(
    key: str,
    notification_id: int,
    label: str,
    emoji: str,
    body: str,
    adapts_to: ReminderChannel,
) -> ReminderChannel:
    return ReminderChannel(
        key=key,
        notification_id=notification_id,
        label=label,
        emoji=emoji,
        body=body,
        default_time=add_minutes(adapts_to.default_time, ENGAGE_OFFSET_MINUTES),
        section=Section.ENGAGE,
        display_channel="patty-engage",
        adapts_to=adapts_to.key,
    )


# -- Health Tracking ---------------------------------------------------------

_WEIGH_IN = ReminderChannel(
    key="weigh_in",
    notification_id=101,
    label="Weigh-in",
    emoji="⚖️",
    default_time="07:30",
    body="Time to step on the scale — log your weight in Patty.",
    section=Section.HEALTH,
    display_channel="patty-weighin",
)
_SLEEP_LOG = ReminderChannel(
    key="sleep_log",
    notification_id=105,
    label="Sleep log reminder",
    emoji="\U0001F634",
    default_time="22:00",
    body="Time for bed soon — log last night’s sleep first.",
    section=Section.HEALTH,
    display_channel="patty-sleep",
)

# -- Meal Logging ------------------------------------------------------------

_BREAKFAST_LOG = ReminderChannel(
    key="breakfast_log",
    notification_id=106,
    label="Breakfast log",
    emoji="\U0001F373",
    default_time="08:30",
    body="Log your breakfast in Patty.",
    section=Section.MEALS,
    display_channel="patty-food",
)
_LUNCH_LOG = ReminderChannel(
    key="lunch_log",
    notification_id=107,
    label="Lunch log",
    emoji="\U0001F957",
    default_time="13:00",
    body="Don’t forget to log your lunch!",
    section=Section.MEALS,
    display_channel="patty-food",
)
_DINNER_LOG = ReminderChannel(
    key="dinner_log",
    notification_id=108,
    label="Dinner log",
    emoji="\U0001F37D️",
    default_time="19:00",
    body="Time to log dinner — what did you eat tonight?",
    section=Section.MEALS,
    display_channel="patty-food",
)

# -- Planning (weekly, Sundays) ----------------------------------------------

_PROGRESS_PHOTO = ReminderChannel(
    key="progress_photo",
    notification_id=109,
    label="Weekly progress photo",
    emoji="\U0001F4F8",
    default_time="09:00",
    body="Take your weekly progress photo in Patty.",
    section=Section.PLANNING,
    display_channel="patty-plan",
    weekday=1,
)
_MEAL_PLAN = ReminderChannel(
    key="meal_plan",
    notification_id=110,
    label="Weekly meal plan",
    emoji="\U0001F4C5",
    default_time="18:00",
    body="Plan your meals for the week ahead.",
    section=Section.PLANNING,
    display_channel="patty-plan",
    weekday=1,
)

CHANNELS: Tuple[ReminderChannel, ...] = (
    _WEIGH_IN,
    _SLEEP_LOG,
    _BREAKFAST_LOG,
    _LUNCH_LOG,
    _DINNER_LOG,
    _PROGRESS_PHOTO,
    _MEAL_PLAN,
    # -- Engage ----------------------------------------------------------------
    _engage(
        "morning_boost",
        111,
        "Morning boost",
        "☀️",
        "Weighed in? Start the day with a glass of water and a short walk.",
        _WEIGH_IN,
    ),
    _engage(
        "lunch_check",
        112,
        "Lunch check-in",
        "\U0001F44D",
        "How was lunch? A quick log keeps your streak alive.",
        _LUNCH_LOG,
    ),
    _engage(
        "dinner_reflect",
        113,
        "Evening reflection",
        "\U0001F319",
        "Dinner logged — take a moment to review today’s totals.",
        _DINNER_LOG,
    ),
    _engage(
        "wind_down",
        114,
        "Wind down",
        "\U0001F6CC",
        "Screens off soon. A good night’s sleep helps tomorrow’s weigh-in.",
        _SLEEP_LOG,
    ),
)

_BY_KEY: Dict[str, ReminderChannel] = {ch.key: ch for ch in CHANNELS}


def _validate_catalog() -> None:
    """Fail fast on a broken catalog; these are programming errors."""
    if len(_BY_KEY) != len(CHANNELS):
        raise ValueError("Duplicate channel key in reminder catalog")

    ids = [ch.notification_id for ch in CHANNELS]
    if len(set(ids)) != len(ids):
        raise ValueError("Duplicate notification_id in reminder catalog")

    display_ids = {dc.id for dc in DISPLAY_CHANNELS}
    for ch in CHANNELS:
        if ch.notification_id not in CATALOG_ID_RANGE:
            raise ValueError(f"{ch.key}: notification_id {ch.notification_id} out of range")
        if ch.display_channel not in display_ids:
            raise ValueError(f"{ch.key}: unknown display channel {ch.display_channel}")
        if ch.adapts_to is None:
            continue
        target = _BY_KEY.get(ch.adapts_to)
        if target is None or target.is_engage:
            raise ValueError(f"{ch.key}: adapts_to must name a non-engage channel")
        if ch.section is not Section.ENGAGE:
            raise ValueError(f"{ch.key}: engage channels belong to the engage section")


_validate_catalog()


def all_channels() -> Tuple[ReminderChannel, ...]:
    return CHANNELS


def find_channel(key: str) -> Optional[ReminderChannel]:
    return _BY_KEY.get(key)


def get_channel(key: str) -> ReminderChannel:
    """Look up a channel by key, raising UnknownChannelError if absent."""
    channel = _BY_KEY.get(key)
    if channel is None:
        raise UnknownChannelError(key)
    return channel


def engage_channels_for(key: str) -> List[ReminderChannel]:
    """Channels whose time follows `key`."""
    return [ch for ch in CHANNELS if ch.adapts_to == key]


def channels_in_section(section: Section) -> List[ReminderChannel]:
    return [ch for ch in CHANNELS if ch.section is section]


def water_notification_id(index: int) -> int:
    if not 0 <= index < MAX_WATER_SLOTS:
        raise InvalidWaterSlotError(index)
    return WATER_ID_BASE + index
