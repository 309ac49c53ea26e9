"""Authentication request, response and token schemas.

Request models accept absent fields (None) on purpose: presence, password
strength and email shape are checked in a fixed order by the auth service
so the first failing rule decides the error code. Pydantic only rejects
values of the wrong type here.

Response models use camelCase aliases on the wire; dump them with
model_dump(by_alias=True).
"""

import sqlite3

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Requests
# ============================================================================


class UserRegister(BaseModel):
    """Registration request body."""

    username: str | None = None
    email: str | None = None
    password: str | None = None


class UserLogin(BaseModel):
    """Login request body."""

    email: str | None = None
    password: str | None = None


# ============================================================================
# Users
# ============================================================================


class UserResponse(BaseModel):
    """Public user fields. Never carries the password hash."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    username: str
    email: str
    member_since: str = Field(alias="memberSince")

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "UserResponse":
        return cls(
            user_id=row["id"],
            username=row["username"],
            email=row["email"],
            member_since=row["created_at"],
        )


class UserProfile(UserResponse):
    """Public user fields plus last update time, as shown on /me."""

    last_updated: str = Field(alias="lastUpdated")

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "UserProfile":
        return cls(
            user_id=row["id"],
            username=row["username"],
            email=row["email"],
            member_since=row["created_at"],
            last_updated=row["updated_at"],
        )


# ============================================================================
# Tokens
# ============================================================================


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    username: str
    email: str
    iat: int
    exp: int


class TokenInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(default=True, alias="isValid")
    expires_in: str = Field(alias="expiresIn")


# ============================================================================
# Response envelopes
# ============================================================================


class AuthData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: UserResponse
    token: str
    token_expires: str = Field(alias="tokenExpires")


class AuthResponse(BaseModel):
    """Body returned by register and login."""

    success: bool = True
    message: str
    data: AuthData


class ProfileData(BaseModel):
    user: UserProfile
    token: TokenInfo


class ProfileResponse(BaseModel):
    """Body returned by /me."""

    success: bool = True
    message: str
    data: ProfileData
