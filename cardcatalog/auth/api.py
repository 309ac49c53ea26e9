"""Authentication API endpoints for Card Catalog Core.

Mounted under settings.auth_prefix (default /api/auth):
- POST /register - Create an account and return a JWT token
- POST /login    - Authenticate by email and password, return a JWT token
- GET  /me       - Current user's profile (requires Bearer token)
- POST /logout   - Stateless acknowledgement; the client discards its token

All endpoints return JSON. Failures are raised as CardCatalogError
subclasses and rendered by the app's error handlers.
"""

import logging

from flask import Blueprint, current_app, g, jsonify

from ..api.validation import validate_request
from ..config import get_settings
from ..db import get_core
from . import service
from .decorators import auth_required
from .schemas import AuthResponse, ProfileData, ProfileResponse, TokenInfo, UserLogin, UserRegister
from .token import TokenIssuer

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__)


def get_token_issuer() -> TokenIssuer:
    """Return the TokenIssuer registered on the current app."""
    return current_app.extensions["token_issuer"]


# ============================================================================
# Registration and Login
# ============================================================================


@auth_bp.post("/register")
@validate_request
def register(data: UserRegister):
    """
    Register a new user.

    Example request:
    ```json
    {"username": "kim", "email": "kim@x.com", "password": "secret1"}
    ```

    Example response (201):
    ```json
    {
        "success": true,
        "message": "Welcome to the card catalog, kim!",
        "data": {
            "user": {
                "userId": "550e8400-e29b-41d4-a716-446655440000",
                "username": "kim",
                "email": "kim@x.com",
                "memberSince": "2026-01-01T10:30:00Z"
            },
            "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            "tokenExpires": "24h"
        }
    }
    ```

    Error Responses:
        400: VALIDATION_MISSING_FIELD, VALIDATION_WEAK_PASSWORD, VALIDATION_BAD_EMAIL
        409: CONFLICT (details.conflicts names username and/or email)
    """
    with get_core() as core:
        auth_data = service.register_user(
            core,
            data,
            get_token_issuer(),
            work_factor=get_settings().bcrypt_work_factor,
        )

    return jsonify(
        AuthResponse(
            message=f"Welcome to the card catalog, {auth_data.user.username}!",
            data=auth_data,
        ).model_dump(by_alias=True)
    ), 201


@auth_bp.post("/login")
@validate_request
def login(data: UserLogin):
    """
    Authenticate by email and password.

    Example request:
    ```json
    {"email": "kim@x.com", "password": "secret1"}
    ```

    Returns the same body shape as /register with status 200.

    Error Responses:
        400: VALIDATION_MISSING_FIELD
        401: AUTH_INVALID_CREDENTIALS (identical for unknown email and wrong password)
    """
    with get_core() as core:
        auth_data = service.login_user(core, data, get_token_issuer())

    return jsonify(
        AuthResponse(
            message=f"Welcome back, {auth_data.user.username}!",
            data=auth_data,
        ).model_dump(by_alias=True)
    ), 200


# ============================================================================
# Profile and Logout
# ============================================================================


@auth_bp.get("/me")
@auth_required
def me():
    """
    Get the current user's profile.

    Requires: Authorization: Bearer <token>

    The user row is re-read by the token's userId; only the id is trusted
    from the token.

    Error Responses:
        401: AUTH_MISSING, AUTH_INVALID
        404: NOT_FOUND (account deleted after the token was issued)
    """
    with get_core() as core:
        profile = service.get_profile(core, g.user_id)

    return jsonify(
        ProfileResponse(
            message="User profile retrieved successfully",
            data=ProfileData(
                user=profile,
                token=TokenInfo(is_valid=True, expires_in=get_token_issuer().expires_in),
            ),
        ).model_dump(by_alias=True)
    ), 200


@auth_bp.post("/logout")
def logout():
    """
    Log out (stateless).

    Tokens are self-validating and never stored, so there is nothing to
    revoke server-side. The token stays valid until it expires; the client
    must delete it.
    """
    expires_in = get_token_issuer().expires_in
    return jsonify({
        "success": True,
        "message": "Logout successful",
        "instructions": {
            "clientAction": "Delete the JWT token from your client-side storage",
            "tokenStorage": "Remove from localStorage, sessionStorage, or cookies",
            "nextLogin": f"Use POST {get_settings().auth_prefix}/login to get a new token",
        },
        "securityNote": f"Your token will automatically expire in {expires_in}",
    }), 200
