from datetime import date as date_type
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.api.deps import get_store
from storefront.core.config import settings
from storefront.core.errors import ValidationError
from storefront.schemas.business_rules import BusinessRulesOut
from storefront.schemas.restaurant import (
    RestaurantStatusOut,
    SlotsOut,
    PickupValidateRequest,
    PickupValidateOut,
)
from storefront.services.business import (
    evaluate,
    format_business_hours,
    generate_slots,
    now_local,
    validate_pickup,
)
from storefront.services.settings import ConfigurationStore

router = APIRouter(prefix="/restaurant", tags=["restaurant"])


@router.get("/config", response_model=BusinessRulesOut)
def get_public_config(store: ConfigurationStore = Depends(get_store)):
    """current business rules; public on purpose."""
    snapshot = store.snapshot()
    return BusinessRulesOut(**snapshot.rules.model_dump(), cached_data=snapshot.stale)


@router.get("/status", response_model=RestaurantStatusOut)
def get_status(store: ConfigurationStore = Depends(get_store)):
    """whether orders are accepted right now."""
    snapshot = store.snapshot()
    result = evaluate(snapshot.rules, now_local())

    return RestaurantStatusOut(
        is_open=result.is_open,
        reason=result.reason.value,
        message=result.message,
        current_time=result.checked_at.strftime('%Y-%m-%d %H:%M:%S %Z'),
        next_open_time=result.next_open_time.strftime('%Y-%m-%d %H:%M:%S %Z') if result.next_open_time else None,
        hours_text=format_business_hours(snapshot.rules),
        cached_data=snapshot.stale,
    )


@router.get("/slots", response_model=SlotsOut)
def get_slots(
    date: Optional[date_type] = Query(None, description="Pickup day, defaults to today"),
    step_minutes: int = Query(settings.SLOT_STEP_MINUTES, ge=5, le=120),
    min_prep_minutes: int = Query(settings.MIN_PREP_MINUTES, ge=0, le=240),
    store: ConfigurationStore = Depends(get_store),
):
    """selectable pickup times for a day."""
    now = now_local()
    day = date or now.date()
    slots = generate_slots(
        store.get(), day, now,
        step_minutes=step_minutes,
        min_prep_minutes=min_prep_minutes,
    )
    return SlotsOut(date=day, slots=[s.strftime('%H:%M') for s in slots])


@router.post("/pickup/validate", response_model=PickupValidateOut)
def validate_pickup_time(payload: PickupValidateRequest, store: ConfigurationStore = Depends(get_store)):
    """dry-run of the checkout pickup check."""
    try:
        decision = validate_pickup(
            store.get(), payload.pickup_time, now_local(),
            grace_minutes=settings.PICKUP_GRACE_MINUTES,
            asap_lead_minutes=settings.ASAP_LEAD_MINUTES,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"reason": e.reason, "message": e.message})

    return PickupValidateOut(
        accepted=decision.accepted,
        reason=decision.reason.value,
        message=decision.message,
        pickup_at=decision.pickup_at.isoformat() if decision.pickup_at else None,
    )
