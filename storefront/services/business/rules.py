"""
Shared building blocks for the ordering window logic.

All wall-clock reasoning happens in the restaurant's own civil time zone, which
is a business constant rather than configuration.
"""
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from storefront.schemas.business_rules import BusinessRules, SpecialClosing, TimeRange

RESTAURANT_TZ = ZoneInfo("Europe/Paris")

# 0=Sunday .. 6=Saturday
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


class ReasonCode(str, Enum):
    OPEN = "OPEN"
    OK = "OK"
    MANUAL_OVERRIDE = "MANUAL_OVERRIDE"
    SPECIAL_CLOSING = "SPECIAL_CLOSING"
    WEEKLY_CLOSED_DAY = "WEEKLY_CLOSED_DAY"
    BEFORE_SERVICE = "BEFORE_SERVICE"
    BETWEEN_SERVICES = "BETWEEN_SERVICES"
    AFTER_SERVICE = "AFTER_SERVICE"
    PICKUP_IN_PAST = "PICKUP_IN_PAST"
    AFTER_CLOSING = "AFTER_CLOSING"
    INVALID_PICKUP_TIME = "INVALID_PICKUP_TIME"


@dataclass(frozen=True)
class ServiceWindow:
    """one service span of a day, in whole minutes since midnight."""
    name: str
    opening: int
    closing: int
    effective_open: int
    effective_close: int

    @property
    def never_open(self) -> bool:
        # buffers larger than the window invert it
        return self.effective_open > self.effective_close

    def contains(self, minute: int) -> bool:
        return not self.never_open and self.effective_open <= minute <= self.effective_close


def to_local(value: datetime) -> datetime:
    """restaurant-local aware datetime; naive values are taken as already local."""
    if value.tzinfo is None:
        return value.replace(tzinfo=RESTAURANT_TZ)
    return value.astimezone(RESTAURANT_TZ)


def now_local() -> datetime:
    return datetime.now(RESTAURANT_TZ)


def day_of_week(day: date) -> int:
    """0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def minute_of_day(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def hours_to_minutes(hours: float) -> int:
    return int(round(hours * 60))


def format_clock(minutes: int) -> str:
    """minutes since midnight as HH:MM."""
    minutes = max(0, minutes)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _window(name: str, time_range: TimeRange, rules: BusinessRules) -> ServiceWindow:
    opening = hours_to_minutes(time_range.opening)
    closing = hours_to_minutes(time_range.closing)
    return ServiceWindow(
        name=name,
        opening=opening,
        closing=closing,
        effective_open=opening - rules.preorder_minutes,
        effective_close=closing - rules.last_order_minutes,
    )


def service_windows(rules: BusinessRules, day: date) -> List[ServiceWindow]:
    """windows for the weekly schedule of a day, ignoring overrides."""
    dow = day_of_week(day)
    if dow in rules.closed_weekdays:
        return []
    if dow == 0:
        return [_window("sunday", rules.sunday_schedule, rules)]
    return [
        _window("lunch", rules.weekday_schedule.lunch, rules),
        _window("dinner", rules.weekday_schedule.dinner, rules),
    ]


def special_closing_for(rules: BusinessRules, day: date) -> Optional[SpecialClosing]:
    for closing in rules.special_closings:
        if closing.date == day:
            return closing
    return None


def day_closure(rules: BusinessRules, day: date) -> Optional[Tuple[ReasonCode, str]]:
    """day-level checks in priority order: force close, special closing, weekly closed day."""
    if rules.force_close:
        return ReasonCode.MANUAL_OVERRIDE, rules.closed_message or "The restaurant is temporarily closed."

    closing = special_closing_for(rules, day)
    if closing is not None:
        message = f"The restaurant is exceptionally closed on {day.strftime('%d/%m/%Y')}"
        message += f": {closing.reason}." if closing.reason else "."
        return ReasonCode.SPECIAL_CLOSING, message

    dow = day_of_week(day)
    if dow in rules.closed_weekdays:
        return ReasonCode.WEEKLY_CLOSED_DAY, f"The restaurant is closed on {DAY_NAMES[dow]}s."

    return None


def _format_hour(hours: float) -> str:
    h, m = divmod(hours_to_minutes(hours), 60)
    return f"{h}h{m:02d}" if m else f"{h}h"


def _format_range(time_range: TimeRange) -> str:
    return f"{_format_hour(time_range.opening)}-{_format_hour(time_range.closing)}"


def _day_runs(days: List[int]) -> str:
    """[2, 3, 4, 6] -> 'Tuesday-Thursday, Saturday'."""
    runs: List[List[int]] = []
    for d in days:
        if runs and d == runs[-1][-1] + 1:
            runs[-1].append(d)
        else:
            runs.append([d])
    return ", ".join(
        DAY_NAMES[run[0]] if len(run) == 1 else f"{DAY_NAMES[run[0]]}-{DAY_NAMES[run[-1]]}"
        for run in runs
    )


def format_business_hours(rules: BusinessRules) -> str:
    """standard opening hours text shown to customers."""
    parts = []
    service_days = [d for d in range(1, 7) if d not in rules.closed_weekdays]
    if service_days:
        parts.append(
            f"{_day_runs(service_days)}: "
            f"{_format_range(rules.weekday_schedule.lunch)} / {_format_range(rules.weekday_schedule.dinner)}"
        )
    if 0 not in rules.closed_weekdays:
        parts.append(f"Sunday: {_format_range(rules.sunday_schedule)}")

    # list closed days Monday first
    closed = [d for d in (1, 2, 3, 4, 5, 6, 0) if d in rules.closed_weekdays]
    if closed:
        parts.append("Closed: " + ", ".join(DAY_NAMES[d] for d in closed))
    return " | ".join(parts)
