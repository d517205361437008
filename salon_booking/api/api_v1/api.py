from fastapi import APIRouter
from salon_booking.api.api_v1.endpoints import availability, appointments, hours

router = APIRouter()

# Include all routers
router.include_router(availability.router, prefix="/availability", tags=["Availability"])
router.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
router.include_router(hours.router, tags=["Hours & Closures"])
