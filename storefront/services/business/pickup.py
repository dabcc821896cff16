"""
Server-side authority on requested pickup times.

The slot list shown in the UI is advisory; this check runs again when a payment
session is created so a stale cart cannot buy outside the legal window.
"""
import re
from datetime import datetime, time, timedelta, timezone
from dataclasses import dataclass
from typing import Optional, Union

from storefront.core.errors import ValidationError
from storefront.schemas.business_rules import BusinessRules
from .rules import (
    RESTAURANT_TZ,
    ReasonCode,
    day_closure,
    format_business_hours,
    minute_of_day,
    service_windows,
    to_local,
)

DEFAULT_GRACE_MINUTES = 30
DEFAULT_ASAP_LEAD_MINUTES = 15

_RELATIVE_RE = re.compile(r"^(\d{1,4})\s*min$", re.IGNORECASE)
_CLOCK_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")

PickupRequest = Union[str, datetime]


@dataclass
class PickupDecision:
    accepted: bool
    reason: ReasonCode
    message: str
    pickup_at: Optional[datetime] = None


def _shift(moment: datetime, minutes: int) -> datetime:
    # add elapsed time, not wall-clock time, across DST changes
    return (moment.astimezone(timezone.utc) + timedelta(minutes=minutes)).astimezone(RESTAURANT_TZ)


def resolve_pickup(
    requested: PickupRequest,
    now: datetime,
    asap_lead_minutes: int = DEFAULT_ASAP_LEAD_MINUTES,
) -> datetime:
    """turn ASAP, '<N>min', 'HH:MM' or an ISO date-time into a local timestamp."""
    local_now = to_local(now)
    if isinstance(requested, datetime):
        return to_local(requested)
    if not isinstance(requested, str) or not requested.strip():
        raise ValidationError("A pickup time is required.", reason=ReasonCode.INVALID_PICKUP_TIME.value)

    text = requested.strip()
    if text.upper() == "ASAP":
        return _shift(local_now, asap_lead_minutes)

    match = _RELATIVE_RE.match(text)
    if match:
        return _shift(local_now, int(match.group(1)))

    match = _CLOCK_RE.match(text)
    if match:
        return datetime.combine(local_now.date(), time(int(match.group(1)), int(match.group(2))), RESTAURANT_TZ)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(
            f"Invalid pickup time '{text}'. Use ASAP, '<N>min', HH:MM or YYYY-MM-DDTHH:MM.",
            reason=ReasonCode.INVALID_PICKUP_TIME.value,
        )
    return to_local(parsed)


def _reject(rules: BusinessRules, reason: ReasonCode, message: str, pickup_at: datetime) -> PickupDecision:
    return PickupDecision(
        accepted=False,
        reason=reason,
        message=f"{message} Opening hours: {format_business_hours(rules)}.",
        pickup_at=pickup_at,
    )


def validate_pickup(
    rules: BusinessRules,
    requested: PickupRequest,
    now: datetime,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
    asap_lead_minutes: int = DEFAULT_ASAP_LEAD_MINUTES,
) -> PickupDecision:
    """accept or reject a requested pickup time against the day's service windows."""
    local_now = to_local(now)
    pickup_at = resolve_pickup(requested, local_now, asap_lead_minutes)

    closure = day_closure(rules, pickup_at.date())
    if closure is not None:
        reason, message = closure
        return _reject(rules, reason, message, pickup_at)

    if pickup_at < local_now.replace(second=0, microsecond=0):
        return _reject(rules, ReasonCode.PICKUP_IN_PAST, "The requested pickup time has already passed.", pickup_at)

    minute = minute_of_day(pickup_at)
    started = [
        w for w in service_windows(rules, pickup_at.date())
        if not w.never_open and w.effective_open <= minute
    ]
    if not started:
        return _reject(rules, ReasonCode.BEFORE_SERVICE, "The kitchen is not open yet at that time.", pickup_at)

    # nearest window is the latest one that has already opened
    nearest = max(started, key=lambda w: w.effective_open)
    latest = nearest.effective_close + rules.last_order_minutes + grace_minutes
    if minute > latest:
        return _reject(
            rules, ReasonCode.AFTER_CLOSING,
            "The requested pickup time is too long after closing.", pickup_at,
        )

    return PickupDecision(
        accepted=True,
        reason=ReasonCode.OK,
        message="Pickup time accepted.",
        pickup_at=pickup_at,
    )


def require_pickup_window(
    rules: BusinessRules,
    requested: PickupRequest,
    now: datetime,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
    asap_lead_minutes: int = DEFAULT_ASAP_LEAD_MINUTES,
) -> PickupDecision:
    """like validate_pickup, but raises ValidationError on rejection."""
    decision = validate_pickup(rules, requested, now, grace_minutes, asap_lead_minutes)
    if not decision.accepted:
        raise ValidationError(
            decision.message,
            reason=decision.reason.value,
            details={"pickup_at": decision.pickup_at.isoformat() if decision.pickup_at else None},
        )
    return decision
