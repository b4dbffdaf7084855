from typing import Iterable, Optional, Tuple
from uuid import UUID

import jwt

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from app.core.config import settings
from app.core.exceptions import ResponseBody
from app.core.jwt_handler import (
    clear_auth_cookie,
    refresh_access_token,
    set_auth_cookie,
    token_needs_refresh,
    verify_token,
)
from app.core.logger import get_logger
from app.core.templates import TEMPLATES, is_htmx_request, templates
from fastapi.responses import JSONResponse
from fastapi import status

logger = get_logger(__name__)

protected_prefixes = [
    "/house",
    "/home",
    "/car",
    "/api/profile",
]

LOGIN_PATH = "/login"


def extract_bearer_token(auth_header: Optional[str]) -> Optional[str]:
    """Return the token of an `Authorization: Bearer <token>` header, None when malformed."""
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def extract_token(request: Request) -> Tuple[Optional[str], bool]:
    """Token from the auth cookie first, then the Authorization header.

    Returns the token and whether it came from the cookie.
    """
    cookie_token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if cookie_token:
        return cookie_token, True
    header = request.headers.get("authorization") or request.headers.get("Authorization")
    return extract_bearer_token(header), False


def optional_user(request: Request) -> Optional[dict]:
    """Claims of the cookie token if it is present and valid, otherwise None."""
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        return None
    try:
        return verify_token(token)
    except jwt.InvalidTokenError:
        return None


def _is_protected(path: str, prefixes: Iterable[str]) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in prefixes)


class TokenAuthMiddleware(BaseHTTPMiddleware):
    """Middleware to validate the JWT token on protected route groups.

    The token is taken from the auth cookie (browser) or an Authorization
    bearer header (API clients). Cookie tokens close to expiry are reissued
    on the way out.
    """

    def __init__(self, app, prefixes: Optional[Iterable[str]] = None):
        super().__init__(app)
        self.protected_prefixes = tuple(prefixes or protected_prefixes)

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if not _is_protected(path, self.protected_prefixes):
            return await call_next(request)

        token, from_cookie = extract_token(request)
        if not token:
            logger.info("Rejected %s %s: no token", request.method, path)
            return self._reject(request, "Authentication required", clear_cookie=False)

        try:
            payload = verify_token(token)
            user_id = UUID(payload["sub"])
        except (jwt.InvalidTokenError, ValueError) as e:
            # verify_token raises JWT errors for invalid/expired tokens
            logger.info("Rejected %s %s: %s", request.method, path, e)
            return self._reject(request, str(e), clear_cookie=from_cookie)

        # Attach user info to request.state for downstream handlers
        request.state.user = payload
        request.state.user_id = user_id

        response = await call_next(request)

        if from_cookie and token_needs_refresh(payload):
            logger.info("Refreshing auth cookie for user %s", user_id)
            set_auth_cookie(response, refresh_access_token(payload))

        return response

    def _reject(self, request: Request, message: str, clear_cookie: bool) -> Response:
        if request.url.path.startswith("/api/"):
            response = JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content=ResponseBody(
                    message=message,
                    errors=[],
                    data=None,
                ).model_dump(),
            )
        elif is_htmx_request(request):
            response = templates.TemplateResponse(
                request,
                TEMPLATES.components.modal_error,
                {"title": "Session expired", "message": f"401: {message}"},
                status_code=status.HTTP_401_UNAUTHORIZED,
                headers={"HX-Redirect": LOGIN_PATH},
            )
        else:
            response = RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)

        if clear_cookie:
            clear_auth_cookie(response)
        return response
