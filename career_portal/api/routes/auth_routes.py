"""
Authentication Routes

POST /auth/register - Register with e-mail and password, get JWT token
POST /auth/login - Login and get JWT token
POST /auth/google - Sign in with a Google ID token
GET /auth/me - Get current user's profile
POST /auth/password-reset - Mail a password reset link
POST /auth/password-reset/confirm - Set a new password from a reset link
"""

import logging

from fastapi import APIRouter, HTTPException, Depends

from career_portal.core.auth import (
    create_access_token, get_current_user, role_for_email, verify_password,
    get_account_by_email, create_account, touch_sign_in, set_account_password,
    create_password_reset_token, verify_password_reset_token
)
from career_portal.core.config import get_settings
from career_portal.core.google_auth import verify_google_id_token, GoogleAuthError
from career_portal.services.document_service import UserService
from career_portal.services.mail_service import send_password_reset_email
from career_portal.schemas.schemas import (
    RegisterRequest, LoginRequest, GoogleSignInRequest, PasswordResetRequest,
    PasswordResetConfirm, TokenResponse, UserResponse, MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
settings = get_settings()
logger = logging.getLogger(__name__)


def _session_for(uid: str, email: str, display_name: str = None) -> TokenResponse:
    """Make sure the profile exists, refuse blocked users, then issue a token."""
    user = UserService().ensure_user(uid, email, display_name, role_for_email(email))
    if user.get("is_blocked"):
        raise HTTPException(status_code=403, detail="Your account has been blocked.")
    touch_sign_in(uid)
    token = create_access_token(data={"sub": uid, "role": user["role"]})
    logger.info("User signed in: %s", uid)
    return TokenResponse(access_token=token, user_id=uid, role=user["role"])


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new account and sign in straight away.

    Include token in requests: Authorization: Bearer <token>
    """
    if get_account_by_email(request.email):
        raise HTTPException(
            status_code=409,
            detail="This email is already registered. Please login instead."
        )

    account = create_account(request.email, request.password)
    return _session_for(account["uid"], account["email"], request.display_name)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """Login and receive JWT access token."""
    account = get_account_by_email(request.email)
    if not account or not verify_password(request.password, account["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password.")

    return _session_for(account["uid"], account["email"])


@router.post("/google", response_model=TokenResponse)
async def google_sign_in(request: GoogleSignInRequest):
    """
    Sign in with Google.

    An existing account with the same e-mail is reused; otherwise a new
    federated account is created.
    """
    if not settings.google_client_id:
        raise HTTPException(status_code=503, detail="Google sign-in is not configured")

    try:
        claims = verify_google_id_token(request.id_token)
    except GoogleAuthError as e:
        raise HTTPException(status_code=401, detail=str(e))

    account = get_account_by_email(claims["email"])
    if account is None:
        account = create_account(claims["email"], provider="google")

    return _session_for(account["uid"], account["email"], claims.get("name"))


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's profile."""
    return UserResponse(**user)


@router.post("/password-reset", response_model=MessageResponse)
async def request_password_reset(request: PasswordResetRequest):
    """
    Mail a reset link. The answer is the same whether or not the e-mail is
    registered.
    """
    account = get_account_by_email(request.email)
    if account:
        token = create_password_reset_token(account["uid"], account["password_hash"])
        await send_password_reset_email(account["email"], token)

    return MessageResponse(message="If an account exists for this email, a reset link has been sent.")


@router.post("/password-reset/confirm", response_model=MessageResponse)
async def confirm_password_reset(request: PasswordResetConfirm):
    account = verify_password_reset_token(request.token)
    if not account:
        raise HTTPException(status_code=400, detail="Invalid or expired reset link.")

    set_account_password(account["uid"], request.new_password)
    logger.info("Password reset for %s", account["uid"])
    return MessageResponse(message="Password updated. Please login.")
