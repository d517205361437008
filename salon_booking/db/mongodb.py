from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from salon_booking.core.config import settings
import logging

logger = logging.getLogger(__name__)

class Database:
    client: AsyncIOMotorClient = None
    db = None

db = Database()

async def connect_to_mongo():
    """Connect to MongoDB."""
    try:
        logger.info("Connecting to MongoDB...")
        db.client = AsyncIOMotorClient(settings.MONGO_URI)
        db.db = db.client[settings.DB_NAME]
        logger.info("Connected to MongoDB.")

        # Create indexes for collections
        await create_indexes()

    except Exception as e:
        logger.error(f"Could not connect to MongoDB: {e}")
        raise e

async def close_mongo_connection():
    """Close MongoDB connection."""
    if db.client:
        logger.info("Closing MongoDB connection...")
        db.client.close()
        logger.info("MongoDB connection closed.")

async def create_indexes():
    """Create indexes for collections."""
    try:
        # Weekly hours, one row per (owner, weekday, block)
        await db.db.salon_hours.create_index([("salon_id", ASCENDING), ("day_of_week", ASCENDING)])
        await db.db.stylist_hours.create_index([("stylist_id", ASCENDING), ("day_of_week", ASCENDING)])

        # Closures are always queried for a single date
        await db.db.closures.create_index([("salon_id", ASCENDING), ("date", ASCENDING)])

        # Stylists and services
        await db.db.stylists.create_index([("salon_id", ASCENDING), ("is_active", ASCENDING)])
        await db.db.services.create_index("salon_id")

        # Appointments
        await db.db.appointments.create_index([("stylist_id", ASCENDING), ("start", ASCENDING)])
        await db.db.appointments.create_index([("salon_id", ASCENDING), ("start", ASCENDING)])

        logger.info("MongoDB indexes created successfully.")
    except Exception as e:
        logger.error(f"Failed to create MongoDB indexes: {e}")
