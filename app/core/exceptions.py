"""
Common response models and exceptions for the application
"""
from typing import Any, Optional, List
from fastapi import status
from pydantic import BaseModel, Field


class ResponseBody(BaseModel):
    """Common API response structure"""
    message: str = Field(..., description="Response message")
    errors: List[str] = Field(default_factory=list, description="List of error messages")
    data: Optional[Any] = Field(default=None, description="Response data")

    class Config:
        from_attributes = True


class AppException(Exception):
    """Base for errors that map onto an HTTP status"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(self.message)


class BadRequestException(AppException):
    """Exception for bad request (400)"""
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedException(AppException):
    """Exception for missing or invalid credentials (401)"""
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundException(AppException):
    """Exception for missing resources (404)"""
    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(AppException):
    """Exception for uniqueness violations (409)"""
    status_code = status.HTTP_409_CONFLICT


class UnprocessableEntityException(AppException):
    """Exception for unprocessable entity (422)"""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class InternalServerErrorException(AppException):
    """Exception for internal server error (500); the detail is kept for the log only"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.detail = message
        super().__init__("Sorry something went wrong", errors)
