"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """Response model for a user (never carries the password hash)."""
    id: str = Field(..., description="User ID")
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    registered_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    language: str = "en"
    avatar: Optional[str] = None
    enabled: bool = False


class LoginRequest(BaseModel):
    """Request model for user login."""
    username: str
    password: str
    remember_me: bool = False


class RegisterRequest(BaseModel):
    """Request model for user registration.

    Field rules are checked by the registration flow so that violations come
    back as localized field errors.
    """
    username: str
    email: str
    password: Optional[str] = None
    password_confirm: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class AuthResponse(BaseModel):
    """Response model for authentication."""
    token: Optional[str] = Field(None, description="Session token")
    user: UserResponse


class ValidationErrorResponse(BaseModel):
    """Field errors of a rejected registration, keyed by field name."""
    errors: dict[str, list[str]]


class OnlineUsersResponse(BaseModel):
    """Usernames that logged in since the server started."""
    usernames: list[str]
