from typing import List, Optional
from pydantic import BaseModel, Field


class CheckoutItem(BaseModel):
    name: str = Field(..., max_length=255)
    unit_price: float = Field(..., ge=0)
    qty: int = Field(..., gt=0)


class CustomerInfo(BaseModel):
    name: str = Field(..., max_length=255)
    phone: str = Field(..., max_length=32)
    email: Optional[str] = Field(None, max_length=255)


class CheckoutSessionRequest(BaseModel):
    items: List[CheckoutItem]
    pickup_time: str = Field("ASAP", description="ASAP, '<N>min', HH:MM or ISO date-time")
    customer: CustomerInfo
    notes: Optional[str] = Field(None, max_length=1000)


class CheckoutSessionResponse(BaseModel):
    reference: str
    checkout_url: str
    amount: float
    pickup_at: str


class PaymentCallback(BaseModel):
    reference: str
    paid: bool


class PaymentCallbackResponse(BaseModel):
    status: str
    reference: str
    paid: bool
