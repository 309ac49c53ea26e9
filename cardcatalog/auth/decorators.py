"""Authentication decorator for protected endpoints.

@auth_required runs the auth gate before the wrapped view:

- no Authorization header, or one not prefixed "Bearer "  -> AUTH_MISSING
- bad signature, missing claims or expired token          -> AUTH_INVALID
- valid token -> identity stored in flask.g, view runs

The gate is stateless: there is no session store and no revocation check.
"""

import logging
from functools import wraps

import jwt
from flask import current_app, g, request

from ..exceptions import AuthenticationError
from .token import TokenVerifier

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_token_verifier() -> TokenVerifier:
    """Return the TokenVerifier registered on the current app."""
    return current_app.extensions["token_verifier"]


def _authenticate_request():
    """
    Verify the bearer token on the current request.

    Stores authenticated user information in flask.g:
    - g.user_id: User ID (UUID)
    - g.username: Username
    - g.email: Email
    - g.token_payload: Full decoded TokenPayload

    Raises:
        AuthenticationError: AUTH_MISSING or AUTH_INVALID
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith(BEARER_PREFIX):
        logger.warning(f"Unauthenticated request to {request.path}")
        raise AuthenticationError(
            "Access token required",
            {"format": "Authorization: Bearer <token>"},
            code="AUTH_MISSING",
        )

    token_str = auth_header[len(BEARER_PREFIX):]
    try:
        payload = get_token_verifier().verify(token_str)
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token expired")
        raise AuthenticationError(
            "Invalid or expired token",
            {"reason": "expired"},
            code="AUTH_INVALID",
        )
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT token: {e}")
        raise AuthenticationError(
            "Invalid or expired token",
            {"reason": "invalid"},
            code="AUTH_INVALID",
        )

    g.user_id = payload.user_id
    g.username = payload.username
    g.email = payload.email
    g.token_payload = payload

    logger.debug(f"JWT authentication successful for user {g.username}")


def auth_required(f):
    """
    Decorator to require a valid bearer token for endpoint access.

    Example:
    ```python
    @auth_bp.get("/me")
    @auth_required
    def me():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        _authenticate_request()
        return f(*args, **kwargs)

    return wrapper
