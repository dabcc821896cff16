from datetime import date, datetime, time
from typing import List

from storefront.schemas.business_rules import BusinessRules
from .rules import day_closure, minute_of_day, service_windows, to_local


def generate_slots(
    rules: BusinessRules,
    day: date,
    now: datetime,
    step_minutes: int = 15,
    min_prep_minutes: int = 30,
) -> List[time]:
    """
    Legal pickup times for a calendar day.

    Slots sit on a grid of step_minutes anchored at midnight, from each
    window's opening to its closing inclusive. For today, anything earlier
    than now + min_prep_minutes is dropped.
    """
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")
    if min_prep_minutes < 0:
        raise ValueError("min_prep_minutes must not be negative")

    local = to_local(now)
    today = local.date()
    if day < today:
        return []
    if day_closure(rules, day) is not None:
        return []

    earliest = None
    if day == today:
        earliest = minute_of_day(local) + min_prep_minutes
        # a started minute counts as gone
        if local.second or local.microsecond:
            earliest += 1

    points = set()
    for window in service_windows(rules, day):
        if window.never_open:
            continue
        first = -(-window.opening // step_minutes) * step_minutes
        last = (window.closing // step_minutes) * step_minutes
        for minute in range(first, last + 1, step_minutes):
            if earliest is not None and minute < earliest:
                continue
            points.add(minute)

    return [time(m // 60, m % 60) for m in sorted(points)]
