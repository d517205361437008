from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date

from salon_booking.scheduling.timeutils import ParseError, minutes_to_time, time_to_minutes


def _check_clock(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        minutes = time_to_minutes(value)
    except ParseError as e:
        raise ValueError(str(e))
    return minutes_to_time(minutes)


class SalonHourBlock(BaseModel):
    dayOfWeek: int = Field(..., ge=0, le=6)  # 0 = Sunday
    openTime: Optional[str] = None  # Format: "09:00"
    closeTime: Optional[str] = None  # Format: "18:00"
    isClosed: bool = False

    @field_validator("openTime", "closeTime")
    @classmethod
    def check_clock(cls, value):
        return _check_clock(value)

    @model_validator(mode="after")
    def check_open_before_close(self):
        if self.isClosed:
            return self
        if not self.openTime or not self.closeTime:
            raise ValueError("openTime and closeTime are required when the day is open")
        if time_to_minutes(self.openTime) >= time_to_minutes(self.closeTime):
            raise ValueError("openTime must be before closeTime")
        return self


class StylistHourBlock(BaseModel):
    dayOfWeek: int = Field(..., ge=0, le=6)
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    isAvailable: bool = True

    @field_validator("startTime", "endTime")
    @classmethod
    def check_clock(cls, value):
        return _check_clock(value)

    @model_validator(mode="after")
    def check_start_before_end(self):
        if not self.isAvailable:
            return self
        if not self.startTime or not self.endTime:
            raise ValueError("startTime and endTime are required when the stylist is available")
        if time_to_minutes(self.startTime) >= time_to_minutes(self.endTime):
            raise ValueError("startTime must be before endTime")
        return self


class SalonHours(BaseModel):
    hours: List[SalonHourBlock] = []


class StylistHours(BaseModel):
    hours: List[StylistHourBlock] = []


class ClosureCreate(BaseModel):
    date: date
    stylistId: Optional[str] = None  # None = whole salon
    startTime: Optional[str] = None  # None with endTime None = full day
    endTime: Optional[str] = None
    label: str = ""

    @field_validator("startTime", "endTime")
    @classmethod
    def check_clock(cls, value):
        return _check_clock(value)

    @model_validator(mode="after")
    def check_range(self):
        if self.startTime and self.endTime:
            if time_to_minutes(self.startTime) >= time_to_minutes(self.endTime):
                raise ValueError("startTime must be before endTime")
        return self


class ClosureResponse(ClosureCreate):
    id: str
    salonId: str
