"""Authentication Pydantic schemas for API validation."""

from .auth import (
    AuthData,
    AuthResponse,
    ProfileData,
    ProfileResponse,
    TokenInfo,
    TokenPayload,
    UserLogin,
    UserProfile,
    UserRegister,
    UserResponse,
)

__all__ = [
    "AuthData",
    "AuthResponse",
    "ProfileData",
    "ProfileResponse",
    "TokenInfo",
    "TokenPayload",
    "UserLogin",
    "UserProfile",
    "UserRegister",
    "UserResponse",
]
