from typing import List, Optional
from datetime import date
from pydantic import BaseModel, Field


class RestaurantStatusOut(BaseModel):
    is_open: bool = Field(..., description="Whether orders are accepted right now")
    reason: str
    message: str
    current_time: str = Field(..., description="Current time in restaurant timezone")
    next_open_time: Optional[str] = Field(None, description="Next ordering opening if closed")
    hours_text: str
    cached_data: bool = False


class SlotsOut(BaseModel):
    date: date
    slots: List[str] = Field(default_factory=list, description="Pickup times as HH:MM")


class PickupValidateRequest(BaseModel):
    pickup_time: str = Field(..., description="ASAP, '<N>min', HH:MM or ISO date-time")


class PickupValidateOut(BaseModel):
    accepted: bool
    reason: str
    message: str
    pickup_at: Optional[str] = None
