from pydantic import BaseModel
from typing import List
from datetime import date


class TimeIntervalOut(BaseModel):
    start: str
    end: str


class SlotOut(BaseModel):
    time: str
    stylistIds: List[str] = []


class AvailabilityResponse(BaseModel):
    date: date
    serviceId: str
    stylistId: str  # "none" when any stylist may serve the slot
    slotIntervalMinutes: int
    slots: List[SlotOut] = []


class IntervalsResponse(BaseModel):
    date: date
    dayOfWeek: int
    stylistId: str
    intervals: List[TimeIntervalOut] = []
