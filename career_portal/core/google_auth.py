"""
Google federated sign-in - verifies Google ID tokens.

The token's signature is checked against Google's published JWKS (fetched
with httpx and cached in-process), the audience against GOOGLE_CLIENT_ID,
and the issuer against Google's two issuer names.
"""

import logging
from typing import Optional

import httpx
from jose import JWTError, jwt

from career_portal.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")

_jwks_cache: Optional[dict] = None


class GoogleAuthError(Exception):
    """The ID token could not be verified."""


def fetch_google_jwks(force: bool = False) -> dict:
    """Get Google's signing keys (cached after first fetch)."""
    global _jwks_cache
    if _jwks_cache is None or force:
        try:
            response = httpx.get(settings.google_certs_url, timeout=10.0)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Could not fetch Google signing keys: %s", e)
            raise GoogleAuthError("Could not verify Google sign-in right now.") from e
        _jwks_cache = response.json()
    return _jwks_cache


def verify_google_id_token(id_token: str) -> dict:
    """
    Verify a Google ID token and return its claims.

    Raises GoogleAuthError when the token is invalid, expired, issued for
    another client, or the e-mail is not verified.
    """
    try:
        claims = jwt.decode(
            id_token,
            fetch_google_jwks(),
            algorithms=["RS256"],
            audience=settings.google_client_id,
            options={"verify_at_hash": False}
        )
    except JWTError as e:
        logger.info("Rejected Google ID token: %s", e)
        raise GoogleAuthError("Invalid Google sign-in token.") from e

    if claims.get("iss") not in GOOGLE_ISSUERS:
        raise GoogleAuthError("Invalid Google sign-in token.")
    if not claims.get("email") or not claims.get("email_verified", False):
        raise GoogleAuthError("Google account e-mail is not verified.")
    return claims
