from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum

class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "noShow"

class AppointmentCreate(BaseModel):
    salonId: str
    serviceId: str
    stylistId: str = "none"  # "none" lets the salon assign an available stylist
    start: datetime  # Naive values are salon wall-clock time
    clientName: str
    clientPhone: Optional[str] = None
    clientEmail: Optional[str] = None
    notes: Optional[str] = None

class AppointmentResponse(BaseModel):
    id: str
    salonId: str
    serviceId: str
    stylistId: str
    start: datetime
    end: datetime
    duration: int = Field(..., gt=0)
    status: AppointmentStatus
    clientName: str
    clientPhone: Optional[str] = None
    clientEmail: Optional[str] = None
    notes: Optional[str] = None
    createdAt: datetime

    class Config:
        populate_by_name = True
        json_encoders = {
            datetime: lambda dt: dt.isoformat()
        }
