"""
Authenticated mutations of the business rules.

Callers always hand over a full BusinessRules value; the helpers below merge a
single change into the current rules first and then go through update_rules.
"""
import logging
from datetime import date, datetime, timezone
from typing import Optional

from storefront.core.errors import StorageUnavailable
from storefront.schemas.business_rules import BusinessRules, SpecialClosing
from .store import ConfigurationStore
from .validation import validate_rules

logger = logging.getLogger(__name__)


def update_rules(
    store: ConfigurationStore,
    rules: BusinessRules,
    updated_by: str,
    now: Optional[datetime] = None,
) -> BusinessRules:
    """validate, stamp and persist a whole rules value, returning what was stored."""
    validate_rules(rules)
    stamped = rules.model_copy(update={
        "last_updated": now or datetime.now(timezone.utc),
        "updated_by": updated_by,
    })
    persisted = store.save(stamped)
    logger.info(f"Business rules updated by {updated_by}")
    return persisted


def _current_rules(store: ConfigurationStore) -> BusinessRules:
    """freshly read rules to merge a change into; stale fallbacks are refused."""
    snapshot = store.snapshot(use_cache=False)
    if snapshot.stale:
        raise StorageUnavailable("Cannot read current business rules, nothing was changed")
    return snapshot.rules


def with_special_closing(rules: BusinessRules, day: date, reason: Optional[str] = None) -> BusinessRules:
    """copy of rules closed on day; a date already present is left untouched."""
    if any(c.date == day for c in rules.special_closings):
        return rules
    closings = sorted([*rules.special_closings, SpecialClosing(date=day, reason=reason)], key=lambda c: c.date)
    return rules.model_copy(update={"special_closings": closings})


def without_special_closing(rules: BusinessRules, day: date) -> BusinessRules:
    closings = [c for c in rules.special_closings if c.date != day]
    return rules.model_copy(update={"special_closings": closings})


def set_force_close(
    store: ConfigurationStore,
    closed: bool,
    updated_by: str,
    closed_message: Optional[str] = None,
) -> BusinessRules:
    current = _current_rules(store)
    message = (closed_message or "") if closed else ""
    return update_rules(
        store,
        current.model_copy(update={"force_close": closed, "closed_message": message}),
        updated_by,
    )


def add_special_closing(
    store: ConfigurationStore,
    day: date,
    updated_by: str,
    reason: Optional[str] = None,
) -> BusinessRules:
    current = _current_rules(store)
    updated = with_special_closing(current, day, reason)
    if updated is current:
        return current
    return update_rules(store, updated, updated_by)


def remove_special_closing(store: ConfigurationStore, day: date, updated_by: str) -> BusinessRules:
    current = _current_rules(store)
    if not any(c.date == day for c in current.special_closings):
        return current
    return update_rules(store, without_special_closing(current, day), updated_by)
