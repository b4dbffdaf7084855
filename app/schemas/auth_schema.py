from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from app.core.exceptions import UnprocessableEntityException


class RegisterRequest(BaseModel):
    """Schema for user registration (form or JSON)"""
    username: str = Field(..., description="Unique username")
    password: str = Field(..., description="User's password")
    confirm_password: Optional[str] = Field(None, description="Repeated password, required for the HTML form")
    email: Optional[EmailStr] = Field(None, description="Optional email address")

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        """Username must be 3 to 50 characters"""
        v = v.strip()
        if not 3 <= len(v) <= 50:
            raise UnprocessableEntityException(
                'Invalid username',
                ['Username must be between 3 and 50 characters long']
            )
        return v

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        if len(v) < 6:
            raise UnprocessableEntityException(
                'Invalid password',
                ['Password must be at least 6 characters long']
            )
        return v

    @model_validator(mode='after')
    def validate_confirmation(self):
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise UnprocessableEntityException(
                'Invalid password',
                ['Passwords do not match']
            )
        return self


class LoginRequest(BaseModel):
    """Schema for user login"""
    username: str = Field(..., description="Username")
    password: str = Field(..., description="User's password")

    @field_validator('username', 'password')
    @classmethod
    def validate_not_empty(cls, v):
        if not v or not v.strip():
            raise UnprocessableEntityException(
                'Invalid credentials',
                ['Username and password cannot be empty']
            )
        return v

    @field_validator('username')
    @classmethod
    def strip_username(cls, v):
        """Same normalization as registration"""
        return v.strip()


class UserResponse(BaseModel):
    """Public view of a user"""
    id: UUID = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: Optional[str] = Field(None, description="Email address")

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """Schema for login/register API response"""
    token: str = Field(..., description="JWT access token")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse
