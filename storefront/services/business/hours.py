"""
Ordering eligibility evaluation.
Decides whether the restaurant accepts orders at a given moment and why not.
"""
from datetime import datetime, time, timedelta
from typing import Optional
from dataclasses import dataclass

from storefront.schemas.business_rules import BusinessRules
from .rules import (
    RESTAURANT_TZ,
    ReasonCode,
    day_closure,
    format_business_hours,
    format_clock,
    minute_of_day,
    service_windows,
    to_local,
)

# how far ahead next_open_time looks
LOOKAHEAD_DAYS = 14

SERVICE_LABELS = {
    "lunch": "lunch",
    "dinner": "dinner",
    "sunday": "Sunday",
}


@dataclass
class OpenStatus:
    """result of an eligibility check."""
    is_open: bool
    reason: ReasonCode
    message: str
    checked_at: datetime
    next_open_time: Optional[datetime] = None


def next_open_time(rules: BusinessRules, now: datetime) -> Optional[datetime]:
    """first moment after now when ordering opens again."""
    if rules.force_close:
        return None

    local = to_local(now)
    for offset in range(LOOKAHEAD_DAYS + 1):
        day = local.date() + timedelta(days=offset)
        if day_closure(rules, day) is not None:
            continue
        windows = sorted(
            (w for w in service_windows(rules, day) if not w.never_open),
            key=lambda w: w.effective_open,
        )
        for window in windows:
            start = max(window.effective_open, 0)
            candidate = datetime.combine(day, time(start // 60, start % 60), RESTAURANT_TZ)
            if candidate > local:
                return candidate
    return None


def _closed(rules: BusinessRules, local: datetime, reason: ReasonCode, message: str) -> OpenStatus:
    reopen = next_open_time(rules, local)
    message = f"{message} Opening hours: {format_business_hours(rules)}."
    if reopen is not None:
        message += f" Orders reopen on {reopen.strftime('%d/%m/%Y at %H:%M')}."
    return OpenStatus(
        is_open=False,
        reason=reason,
        message=message,
        checked_at=local,
        next_open_time=reopen,
    )


def evaluate(rules: BusinessRules, now: datetime) -> OpenStatus:
    """check whether orders may be placed at now."""
    if not isinstance(now, datetime):
        raise ValueError("now must be a datetime")

    local = to_local(now)
    today = local.date()

    closure = day_closure(rules, today)
    if closure is not None:
        reason, message = closure
        return _closed(rules, local, reason, message)

    minute = minute_of_day(local)
    windows = service_windows(rules, today)
    for window in windows:
        if window.contains(minute):
            label = SERVICE_LABELS.get(window.name, window.name)
            return OpenStatus(
                is_open=True,
                reason=ReasonCode.OPEN,
                message=f"Open for {label} service. Orders are being accepted.",
                checked_at=local,
            )

    # closed for the rest of the day if nothing usable is left
    usable = [w for w in windows if not w.never_open]
    if not usable or minute > max(w.effective_close for w in usable):
        return _closed(rules, local, ReasonCode.AFTER_SERVICE, "Service has ended for today.")

    first_open = min(w.effective_open for w in usable)
    if minute < first_open:
        return _closed(
            rules, local, ReasonCode.BEFORE_SERVICE,
            f"We are not taking orders yet. Ordering opens at {format_clock(first_open)}.",
        )

    upcoming = min(w.effective_open for w in usable if w.effective_open > minute)
    return _closed(
        rules, local, ReasonCode.BETWEEN_SERVICES,
        f"We are between services. Ordering reopens at {format_clock(upcoming)}.",
    )

