"""
Auth provider credential store.

Holds one row per account in `auth_accounts` (uid, e-mail, bcrypt hash,
sign-in provider). Profiles, roles and block flags live in the MongoDB
`users` collection keyed by the same uid.
"""
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from contextlib import contextmanager
from career_portal.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

engine_kwargs = {"echo": settings.sql_echo}
if settings.auth_database_url.startswith("sqlite"):
    # Request handlers run in a thread pool
    engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    # pool_size=5: maintain 5 connections ready
    # max_overflow=10: allow 10 extra connections under load
    engine_kwargs.update(pool_size=5, max_overflow=10, pool_pre_ping=True)

engine = create_engine(settings.auth_database_url, **engine_kwargs)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


AUTH_SCHEMA = """
    CREATE TABLE IF NOT EXISTS auth_accounts (
        uid VARCHAR(64) PRIMARY KEY,
        email VARCHAR(255) NOT NULL UNIQUE,
        password_hash VARCHAR(255),
        provider VARCHAR(32) NOT NULL DEFAULT 'password',
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        last_sign_in_at TIMESTAMP
    )
"""


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM auth_accounts"))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_auth_schema() -> None:
    """Create the credential table if it does not exist yet."""
    with get_db_session() as db:
        db.execute(text(AUTH_SCHEMA))
    logger.info("Auth schema ready")


def test_postgres_connection() -> bool:
    """
    Test if the credential store is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.warning("Auth database connection failed: %s", e)
        return False
