from typing import Dict

from storefront.core.errors import ConfigurationError
from storefront.schemas.business_rules import BusinessRules, TimeRange

MAX_BUFFER_MINUTES = 120


def _check_range(name: str, time_range: TimeRange, errors: Dict[str, str]) -> None:
    for field in ("opening", "closing"):
        value = getattr(time_range, field)
        if not 0 <= value < 24:
            errors[f"{name}.{field}"] = "must be within [0, 24) hours"
    if f"{name}.opening" in errors or f"{name}.closing" in errors:
        return
    # overnight windows are not supported
    if time_range.opening >= time_range.closing:
        errors[name] = "opening must be before closing"


def validate_rules(rules: BusinessRules) -> None:
    """reject out-of-range rules; nothing is clamped."""
    errors: Dict[str, str] = {}

    for name in ("preorder_minutes", "last_order_minutes"):
        value = getattr(rules, name)
        if not 0 <= value <= MAX_BUFFER_MINUTES:
            errors[name] = f"must be between 0 and {MAX_BUFFER_MINUTES} minutes"

    _check_range("weekday_schedule.lunch", rules.weekday_schedule.lunch, errors)
    _check_range("weekday_schedule.dinner", rules.weekday_schedule.dinner, errors)
    _check_range("sunday_schedule", rules.sunday_schedule, errors)

    bad_days = [d for d in rules.closed_weekdays if d not in range(7)]
    if bad_days:
        errors["closed_weekdays"] = "days must be between 0 (Sunday) and 6 (Saturday)"

    if errors:
        raise ConfigurationError("Invalid business rules", details=errors)
