"""
Database module - MongoDB document store and the auth credential store.
"""
from career_portal.db.postgres import get_db_session, init_auth_schema, test_postgres_connection
from career_portal.db.mongodb import get_mongo_db, get_collection, init_mongo_indexes, test_mongo_connection

__all__ = [
    "get_db_session",
    "init_auth_schema",
    "test_postgres_connection",
    "get_mongo_db",
    "get_collection",
    "init_mongo_indexes",
    "test_mongo_connection"
]
