from typing import List, Optional
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator


class TimeRange(BaseModel):
    """a service window in decimal hours, e.g. 12.5 for 12:30."""
    opening: float = Field(..., description="Opening time in decimal hours")
    closing: float = Field(..., description="Closing time in decimal hours")


class WeekdaySchedule(BaseModel):
    lunch: TimeRange
    dinner: TimeRange


class SpecialClosing(BaseModel):
    date: date
    reason: Optional[str] = None


class BusinessRules(BaseModel):
    """whole restaurant ordering configuration, persisted and replaced as one value."""
    force_close: bool = False
    closed_message: str = ""
    special_closings: List[SpecialClosing] = Field(default_factory=list)
    weekday_schedule: WeekdaySchedule
    sunday_schedule: TimeRange
    closed_weekdays: List[int] = Field(default_factory=list, description="0=Sunday .. 6=Saturday")
    preorder_minutes: int = 30
    last_order_minutes: int = 30
    last_updated: Optional[datetime] = None
    updated_by: str = "system"

    @field_validator("special_closings")
    @classmethod
    def _unique_closing_dates(cls, value: List[SpecialClosing]) -> List[SpecialClosing]:
        # first entry for a date wins
        seen = set()
        unique = []
        for closing in value:
            if closing.date in seen:
                continue
            seen.add(closing.date)
            unique.append(closing)
        return sorted(unique, key=lambda c: c.date)

    @field_validator("closed_weekdays")
    @classmethod
    def _sorted_weekdays(cls, value: List[int]) -> List[int]:
        return sorted(set(value))


class BusinessRulesOut(BusinessRules):
    cached_data: bool = Field(False, description="True when served from a stale cache")


class ForceCloseRequest(BaseModel):
    closed_message: Optional[str] = Field(None, max_length=500)


class SpecialClosingRequest(BaseModel):
    date: date
    reason: Optional[str] = Field(None, max_length=200)
