from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import MongoClient
import os
from dotenv import load_dotenv

from logging_config import logger

# Load environment variables
load_dotenv()

# MongoDB connection settings; credentials belong in the environment or .env
MONGO_CONNECTION_STRING = os.getenv("MONGO_CONNECTION_STRING", "mongodb://localhost:27017")
DATABASE_NAME = os.getenv("DATABASE_NAME", "pantry_tracker")
INVENTORY_COLLECTION = "inventory"

# Async client for API operations
async_client = AsyncIOMotorClient(MONGO_CONNECTION_STRING)
async_db = async_client[DATABASE_NAME]

# Collections
inventory_collection = async_db[INVENTORY_COLLECTION]

# Sync client for scripts that need synchronous access
_sync_client = None

def get_sync_db():
    global _sync_client
    if _sync_client is None:
        _sync_client = MongoClient(MONGO_CONNECTION_STRING)
    return _sync_client[DATABASE_NAME]

# Create indexes for better performance
async def create_indexes():
    # Documents are keyed by item name, so only the category filter needs an index
    await inventory_collection.create_index("category")

# Initialize database
async def init_db():
    try:
        await create_indexes()
        logger.info(f"Database '{DATABASE_NAME}' initialized successfully")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
