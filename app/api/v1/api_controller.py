from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.dependencies import get_auth_service, get_current_user_id
from app.core.exceptions import (
    ConflictException,
    InternalServerErrorException,
    NotFoundException,
    ResponseBody,
    UnauthorizedException,
)
from app.core.jwt_handler import create_access_token
from app.core.logger import get_logger
from app.schemas.auth_schema import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from app.services.auth_service import AuthService, UserAlreadyExistsError

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


def _token_body(user) -> dict:
    token = create_access_token(user_id=str(user.id), username=user.username)
    return TokenResponse(
        token=token.value,
        expires_in=token.expires_in,
        user=UserResponse.model_validate(user),
    ).model_dump(mode="json")


@router.post(
    "/register",
    response_model=ResponseBody,
    status_code=status.HTTP_201_CREATED,
    summary="User Signup",
    description="Register a new user and receive a bearer token",
)
def api_register(
    signup_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user.

    Args:
        signup_data: RegisterRequest containing username, password and optional email
        auth_service: Injected authentication service

    Returns:
        ResponseBody with the token and the created user

    Raises:
        HTTPException 409: If username or email already exists
    """
    try:
        user = auth_service.register(
            username=signup_data.username,
            password=signup_data.password,
            email=signup_data.email,
        )
    except UserAlreadyExistsError as e:
        raise ConflictException(message=str(e))
    except ValueError as e:
        raise InternalServerErrorException(message=str(e))

    resp = ResponseBody(message="User registered successfully", data=_token_body(user))
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=resp.model_dump())


@router.post(
    "/login",
    response_model=ResponseBody,
    status_code=status.HTTP_200_OK,
    summary="User Login",
    description="Authenticate with username and password and receive a bearer token",
)
def api_login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Authenticate user by username.

    Raises:
        HTTPException 401: If credentials are invalid
    """
    try:
        user = auth_service.login(username=login_data.username, password=login_data.password)
    except ValueError as e:
        raise UnauthorizedException(message=str(e))

    logger.info("User %s logged in via API", user.username)
    resp = ResponseBody(message="Login successful", data=_token_body(user))
    return JSONResponse(status_code=status.HTTP_200_OK, content=resp.model_dump())


@router.get(
    "/profile",
    response_model=ResponseBody,
    summary="Current user",
    description="Profile of the authenticated user (bearer header or auth cookie)",
)
def api_profile(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
):
    user_id = get_current_user_id(request)
    user = auth_service.get_user_by_id(user_id)
    if user is None:
        raise NotFoundException(message="User not found")

    resp = ResponseBody(
        message="Profile retrieved successfully",
        data=UserResponse.model_validate(user).model_dump(mode="json"),
    )
    return JSONResponse(status_code=status.HTTP_200_OK, content=resp.model_dump())
