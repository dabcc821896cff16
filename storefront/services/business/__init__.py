"""
Business logic services package.

This package contains the ordering window logic:
- Eligibility evaluation (is the restaurant taking orders now, and why not)
- Pickup slot generation for a calendar day
- Pickup time validation at checkout
"""

from .rules import (
    RESTAURANT_TZ,
    ReasonCode,
    ServiceWindow,
    day_closure,
    format_business_hours,
    now_local,
    service_windows,
    to_local,
)
from .hours import OpenStatus, evaluate, next_open_time
from .slots import generate_slots
from .pickup import PickupDecision, resolve_pickup, validate_pickup, require_pickup_window

__all__ = [
    'RESTAURANT_TZ',
    'ReasonCode',
    'ServiceWindow',
    'day_closure',
    'format_business_hours',
    'now_local',
    'service_windows',
    'to_local',
    'OpenStatus',
    'evaluate',
    'next_open_time',
    'generate_slots',
    'PickupDecision',
    'resolve_pickup',
    'validate_pickup',
    'require_pickup_window',
]
