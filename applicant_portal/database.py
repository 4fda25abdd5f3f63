import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING

from applicant_portal.config import DATABASE_NAME, MONGO_URI
from applicant_portal.services.application_store import MongoApplicationStore

logger = logging.getLogger(__name__)

client = None
db = None


async def connect_to_mongo():
    global client, db

    if not MONGO_URI:
        raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")

    if "localhost" in MONGO_URI or "127.0.0.1" in MONGO_URI:
        logger.warning("Connecting to LOCAL MongoDB")

    # tz_aware so cooldown arithmetic compares aware datetimes
    client = AsyncIOMotorClient(MONGO_URI, tz_aware=True)
    db = client[DATABASE_NAME]
    await client.admin.command('ping')

    await db.applications.create_index([("user_id", ASCENDING)])
    await db.applications.create_index([("status", ASCENDING)])

    logger.info("Connected to MongoDB database %s", DATABASE_NAME)


async def close_mongo_connection():
    if client:
        client.close()
        logger.info("MongoDB connection closed")


def get_db():
    return db


def get_application_store():
    return MongoApplicationStore(get_db())
