"""
MongoDB Connection Utility

MongoDB is the portal's document store. It holds:
- users (profile, role, block flag; _id is the auth uid)
- jobs, internships, courses (admin-managed catalog)
- events (public submissions gated by moderation status)
- user_interactions (apply / register / waitlist history)
- user_resumes (resume builder content, one per user)
- ai_purchases (unlocked AI tools)
"""
import logging

from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.collection import Collection
from career_portal.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a collection by its real name (see COLLECTIONS)."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "jobs": "jobs",
    "internships": "internships",
    "events": "events",
    "courses": "courses",
    "interactions": "user_interactions",
    "resumes": "user_resumes",
    "purchases": "ai_purchases"
}


def init_mongo_indexes():
    """
    Create indexes for the default listing orders and lookups.
    Call this once during app startup.
    """
    db = get_mongo_db()

    for name in ("jobs", "internships", "courses"):
        db[COLLECTIONS[name]].create_index([("created_at", DESCENDING)])

    # Public listing and moderation queue both filter on status
    db[COLLECTIONS["events"]].create_index([
        ("status", ASCENDING),
        ("created_at", DESCENDING)
    ])

    db[COLLECTIONS["users"]].create_index("email")
    db[COLLECTIONS["interactions"]].create_index([("user_id", ASCENDING), ("timestamp", DESCENDING)])
    db[COLLECTIONS["interactions"]].create_index("type")

    # One resume per user is a convention, not a constraint
    db[COLLECTIONS["resumes"]].create_index("user_id")

    db[COLLECTIONS["purchases"]].create_index([
        ("user_id", ASCENDING),
        ("tool_id", ASCENDING)
    ], unique=True)

    logger.info("MongoDB indexes created")
