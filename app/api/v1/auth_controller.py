from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status

from app.api.v1.forms import build_schema
from app.core.dependencies import get_auth_service
from app.core.exceptions import (
    ConflictException,
    InternalServerErrorException,
    UnauthorizedException,
)
from app.core.jwt_handler import clear_auth_cookie, create_access_token, set_auth_cookie
from app.core.logger import get_logger
from app.core.middleware import optional_user
from app.core.templates import TEMPLATES, HeaderOptions, render, render_page
from app.schemas.auth_schema import LoginRequest, RegisterRequest
from app.services.auth_service import AuthService, UserAlreadyExistsError

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/register", summary="Registration form")
def get_register(request: Request):
    return render_page(
        request,
        TEMPLATES.pages.register,
        is_logged_in=optional_user(request) is not None,
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="User Registration",
    description="Register a new user from the HTML form and start a session",
)
def register(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form(""),
    email: Optional[str] = Form(None),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user and set the auth cookie.

    Raises:
        UnprocessableEntityException 422: If the form fields are invalid
        ConflictException 409: If the username or email already exists
    """
    registration = build_schema(
        RegisterRequest,
        "Invalid request data",
        username=username,
        password=password,
        confirm_password=confirm_password,
        email=email or None,
    )

    try:
        user = auth_service.register(
            username=registration.username,
            password=registration.password,
            email=registration.email,
        )
    except UserAlreadyExistsError as e:
        raise ConflictException(message=str(e))
    except ValueError as e:
        raise InternalServerErrorException(message=str(e))

    token = create_access_token(user_id=str(user.id), username=user.username)
    response = render(
        request,
        TEMPLATES.responses.register_success,
        {"user": user, "header": HeaderOptions(is_logged_in=True, is_oob=True)},
        status_code=status.HTTP_201_CREATED,
    )
    set_auth_cookie(response, token)
    return response


@router.get("/login", summary="Login form")
def get_login(request: Request):
    return render_page(
        request,
        TEMPLATES.pages.login,
        is_logged_in=optional_user(request) is not None,
    )


@router.post(
    "/login",
    summary="User Login",
    description="Authenticate with username and password and start a session",
)
def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate the user and set the auth cookie.

    Raises:
        UnauthorizedException 401: If credentials are invalid
    """
    credentials = build_schema(LoginRequest, "Invalid request data", username=username, password=password)

    try:
        user = auth_service.login(username=credentials.username, password=credentials.password)
    except ValueError as e:
        raise UnauthorizedException(message=str(e))

    token = create_access_token(user_id=str(user.id), username=user.username)
    logger.info("User %s logged in", user.username)

    response = render(
        request,
        TEMPLATES.responses.login_success,
        {"user": user, "header": HeaderOptions(is_logged_in=True, is_oob=True)},
    )
    set_auth_cookie(response, token)
    return response


@router.get("/logout", summary="Logout")
def logout(request: Request):
    response = render(
        request,
        TEMPLATES.responses.login_success,
        {"user": None, "header": HeaderOptions(is_logged_in=False, is_oob=True)},
    )
    clear_auth_cookie(response)
    return response
