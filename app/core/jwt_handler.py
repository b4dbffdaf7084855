"""
JWT utility functions for token generation, validation and cookie refresh
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from starlette.responses import Response
from app.core.config import settings


@dataclass(frozen=True)
class IssuedToken:
    value: str
    expires_in: int  # seconds


def create_access_token(user_id: str, username: str) -> IssuedToken:
    """
    Create a JWT access token

    Args:
        user_id: User's ID
        username: User's username

    Returns:
        IssuedToken: Encoded JWT token and its lifetime in seconds
    """
    now = datetime.now(timezone.utc)
    lifetime = timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    payload = {
        "sub": str(user_id),
        "username": username,
        "iss": settings.JWT_ISSUER,
        "iat": now,
        "nbf": now,
        "exp": now + lifetime,
    }

    token = jwt.encode(
        payload,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )
    return IssuedToken(value=token, expires_in=int(lifetime.total_seconds()))


def verify_token(token: str) -> dict:
    """
    Verify and decode JWT token

    Args:
        token: JWT token to verify

    Returns:
        dict: Decoded token payload

    Raises:
        jwt.InvalidTokenError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
            options={"require": ["exp", "sub"]},
        )
        return payload
    except jwt.ExpiredSignatureError:
        raise jwt.InvalidTokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise jwt.InvalidTokenError(f"Invalid token: {str(e)}")


def token_needs_refresh(payload: dict, now: Optional[datetime] = None) -> bool:
    """True when the token's remaining validity is under the refresh threshold."""
    now = now or datetime.now(timezone.utc)
    expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    threshold = timedelta(minutes=settings.JWT_REFRESH_THRESHOLD_MINUTES)
    return expires_at - now < threshold


def refresh_access_token(payload: dict) -> IssuedToken:
    """Issue a new token for the subject of an already validated payload."""
    return create_access_token(user_id=payload["sub"], username=payload.get("username", ""))


def set_auth_cookie(response: Response, token: IssuedToken) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token.value,
        max_age=token.expires_in,
        path="/",
        domain=settings.COOKIE_DOMAIN,
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        domain=settings.COOKIE_DOMAIN,
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )
