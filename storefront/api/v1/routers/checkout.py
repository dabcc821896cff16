import json
import logging
import random
from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from pydantic import ValidationError as SchemaError

from storefront.api.deps import get_store
from storefront.core.config import settings
from storefront.core.errors import ValidationError
from storefront.schemas.payments import (
    CheckoutSessionRequest,
    CheckoutSessionResponse,
    PaymentCallback,
    PaymentCallbackResponse,
)
from storefront.services.business import now_local, require_pickup_window
from storefront.services.payments import get_payments_provider
from storefront.services.settings import ConfigurationStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkout", tags=["checkout"])


def _gen_reference() -> str:
    # include timestamp and random suffix to avoid collisions
    return "ORD-" + datetime.utcnow().strftime("%y%m%d%H%M%S") + f"{random.randint(0, 999):03d}"


@router.post("/session", response_model=CheckoutSessionResponse)
def create_checkout_session(payload: CheckoutSessionRequest, store: ConfigurationStore = Depends(get_store)):
    if not payload.items:
        raise HTTPException(status_code=400, detail="Items required")

    # the slot list in the UI is advisory, check the pickup time again here
    try:
        decision = require_pickup_window(
            store.get(), payload.pickup_time, now_local(),
            grace_minutes=settings.PICKUP_GRACE_MINUTES,
            asap_lead_minutes=settings.ASAP_LEAD_MINUTES,
        )
    except ValidationError as e:
        logger.info(f"Checkout refused ({e.reason}) for pickup '{payload.pickup_time}'")
        raise HTTPException(status_code=400, detail={"reason": e.reason, "message": e.message})

    total = sum(
        (Decimal(str(it.unit_price)) * it.qty for it in payload.items),
        Decimal('0.0'),
    ).quantize(Decimal('0.01'))

    reference = _gen_reference()
    res = get_payments_provider().init(reference=reference, amount=total)
    if res.get("status") != "ok" or "checkout_url" not in res:
        logger.error(f"Payment init failed for {reference}: {res.get('reason')}")
        raise HTTPException(status_code=400, detail="Unable to init payment")

    return CheckoutSessionResponse(
        reference=reference,
        checkout_url=res["checkout_url"],
        amount=float(total),
        pickup_at=decision.pickup_at.isoformat(),
    )


@router.post("/callback", response_model=PaymentCallbackResponse)
async def callback(request: Request, x_signature: str | None = Header(None)):
    body = await request.body()
    if not get_payments_provider().verify_signature(body, x_signature):
        raise HTTPException(status_code=401, detail="Invalid signature")

    try:
        event = PaymentCallback.model_validate(json.loads(body or b"{}"))
    except (ValueError, SchemaError):
        raise HTTPException(status_code=400, detail="Malformed callback payload")

    logger.info(f"Payment {event.reference} reported {'paid' if event.paid else 'unpaid'}")
    return PaymentCallbackResponse(status="ok", reference=event.reference, paid=event.paid)
