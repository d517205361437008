from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from salon_booking.core.config import settings
from salon_booking.core.exceptions import (
    BookingError, InvalidRequestError, NotFoundError, SlotConflictError, SlotUnavailableError
)
from salon_booking.core.logging_config import setup_logging
from salon_booking.api.api_v1.api import router as api_router
from salon_booking.db.mongodb import connect_to_mongo, close_mongo_connection
from salon_booking.scheduling.timeutils import ParseError

setup_logging()

app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="Salon booking availability API"
)

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(api_router, prefix="/api/v1")

ERROR_STATUS = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
    SlotUnavailableError: status.HTTP_400_BAD_REQUEST,
    SlotConflictError: status.HTTP_409_CONFLICT,
}

@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=status_code, content={"detail": exc.detail})

@app.exception_handler(ParseError)
async def parse_error_handler(request: Request, exc: ParseError):
    # Malformed stored hours or closures; the request cannot be answered
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)}
    )

# MongoDB connection events
@app.on_event("startup")
async def startup_db_client():
    await connect_to_mongo()

@app.on_event("shutdown")
async def shutdown_db_client():
    await close_mongo_connection()

@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.APP_NAME} API"}
