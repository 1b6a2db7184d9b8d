"""
Authentication Utility - JWT, password handling and the credential store.

Provides:
- Password hashing with bcrypt
- JWT session tokens and single-use password reset tokens
- auth_accounts lookups (raw SQL, like the rest of the SQL layer)
- FastAPI dependencies for protected routes
"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import text

from career_portal.core.config import get_settings
from career_portal.db.postgres import get_db_session
from career_portal.schemas.schemas import UserRole
from career_portal.services.document_service import UserService

settings = get_settings()
logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor; missing credentials are handled by the dependencies
bearer_scheme = HTTPBearer(auto_error=False)

RESET_PURPOSE = "password_reset"


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify password against hash. Accounts without a password never match."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def new_uid() -> str:
    return uuid.uuid4().hex


def role_for_email(email: str) -> str:
    """Role given to a profile at first sign-in."""
    if email.lower() in settings.admin_email_list:
        return UserRole.admin.value
    return UserRole.user.value


# ============================================================
# PASSWORD RESET TOKENS
# ============================================================

def _hash_fragment(password_hash: Optional[str]) -> str:
    return (password_hash or "")[-8:]


def create_password_reset_token(uid: str, password_hash: Optional[str]) -> str:
    """
    Reset token bound to the current password hash.
    Once the password changes the fragment no longer matches, so the token is single-use.
    """
    return create_access_token(
        data={"sub": uid, "purpose": RESET_PURPOSE, "pwd": _hash_fragment(password_hash)},
        expires_delta=timedelta(minutes=settings.password_reset_expire_minutes)
    )


def verify_password_reset_token(token: str) -> Optional[dict]:
    """Return the account the token was issued for, or None if invalid/expired/used."""
    payload = decode_token(token)
    if not payload or payload.get("purpose") != RESET_PURPOSE:
        return None
    account = get_account_by_uid(payload.get("sub") or "")
    if not account or _hash_fragment(account["password_hash"]) != payload.get("pwd"):
        return None
    return account


# ============================================================
# CREDENTIAL STORE (auth_accounts)
# ============================================================

_ACCOUNT_COLUMNS = "uid, email, password_hash, provider, created_at, last_sign_in_at"


def _row_to_account(row) -> Optional[dict]:
    if row is None:
        return None
    return dict(row._mapping)


def get_account_by_email(email: str) -> Optional[dict]:
    with get_db_session() as db:
        result = db.execute(
            text(f"SELECT {_ACCOUNT_COLUMNS} FROM auth_accounts WHERE email = :email"),
            {"email": email.lower()}
        )
        return _row_to_account(result.fetchone())


def get_account_by_uid(uid: str) -> Optional[dict]:
    with get_db_session() as db:
        result = db.execute(
            text(f"SELECT {_ACCOUNT_COLUMNS} FROM auth_accounts WHERE uid = :uid"),
            {"uid": uid}
        )
        return _row_to_account(result.fetchone())


def create_account(email: str, password: Optional[str] = None, provider: str = "password") -> dict:
    """Insert a credential row. Caller checks the e-mail is free."""
    now = datetime.utcnow()
    account = {
        "uid": new_uid(),
        "email": email.lower(),
        "password_hash": hash_password(password) if password else None,
        "provider": provider,
        "created_at": now,
        "last_sign_in_at": now
    }
    with get_db_session() as db:
        db.execute(
            text("""
                INSERT INTO auth_accounts (uid, email, password_hash, provider, created_at, last_sign_in_at)
                VALUES (:uid, :email, :password_hash, :provider, :created_at, :last_sign_in_at)
            """),
            account
        )
    logger.info("Account created: %s (%s)", account["uid"], provider)
    return account


def touch_sign_in(uid: str) -> None:
    with get_db_session() as db:
        db.execute(
            text("UPDATE auth_accounts SET last_sign_in_at = :now WHERE uid = :uid"),
            {"now": datetime.utcnow(), "uid": uid}
        )


def set_account_password(uid: str, new_password: str) -> None:
    with get_db_session() as db:
        db.execute(
            text("UPDATE auth_accounts SET password_hash = :hash WHERE uid = :uid"),
            {"hash": hash_password(new_password), "uid": uid}
        )


def delete_account(uid: str) -> bool:
    with get_db_session() as db:
        result = db.execute(text("DELETE FROM auth_accounts WHERE uid = :uid"), {"uid": uid})
        return result.rowcount > 0


# ============================================================
# DEPENDENCIES
# ============================================================

def _user_from_token(token: str) -> Optional[dict]:
    payload = decode_token(token)
    if not payload or payload.get("purpose"):
        return None
    uid = payload.get("sub")
    if not uid:
        return None
    return UserService().get(uid)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> dict:
    """
    FastAPI dependency - Get current signed-in user's profile.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    user = _user_from_token(credentials.credentials)
    if not user:
        raise credentials_exception

    if user.get("is_blocked"):
        raise HTTPException(status_code=403, detail="Your account has been blocked.")

    return user


async def get_current_admin(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require admin role."""
    if user.get("role") != UserRole.admin.value:
        raise HTTPException(status_code=403, detail="Admins only")
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[dict]:
    """Dependency - the signed-in user if a valid token was sent, else None."""
    if credentials is None:
        return None
    user = _user_from_token(credentials.credentials)
    if not user or user.get("is_blocked"):
        return None
    return user
