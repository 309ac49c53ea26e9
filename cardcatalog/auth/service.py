"""Authentication service: password hashing and the auth flows.

Flows:
- register_user: validate, reject duplicates, hash, insert, issue token
- login_user: look up by email, verify password, issue token
- get_profile: re-read the user behind a verified token

Each flow raises CardCatalogError subclasses; the API layer only
translates successful results into responses.
"""

import logging
import re
import sqlite3

import bcrypt

from ..db import Core
from ..exceptions import (
    AuthenticationError,
    ConflictError,
    PasswordHashingError,
    ResourceNotFound,
    ValidationError,
)
from .schemas import AuthData, UserLogin, UserProfile, UserRegister, UserResponse
from .token import TokenIssuer

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
MIN_PASSWORD_LENGTH = 6
# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72
DEFAULT_WORK_FACTOR = 12

# Same message for unknown email and wrong password
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


# ============================================================================
# Password Hashing
# ============================================================================


def hash_password(password: str, work_factor: int = DEFAULT_WORK_FACTOR) -> str:
    """
    Hash a password with bcrypt using a random salt.

    Args:
        password: Plain text password
        work_factor: bcrypt cost factor

    Returns:
        60-character bcrypt hash string

    Raises:
        PasswordHashingError: If bcrypt rejects the input
    """
    try:
        salt = bcrypt.gensalt(rounds=work_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
    except (ValueError, TypeError) as e:
        logger.error(f"Password hashing failed: {e}")
        raise PasswordHashingError("Password hashing failed")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a password against a bcrypt hash (constant-time compare).

    A password longer than MAX_PASSWORD_BYTES can never have been stored,
    so it is a mismatch rather than an error.

    Raises:
        PasswordHashingError: If the stored hash is malformed
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False

    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except (ValueError, TypeError) as e:
        logger.error(f"Password verification failed: {e}")
        raise PasswordHashingError("Password verification failed")


# ============================================================================
# Registration
# ============================================================================


def validate_registration(data: UserRegister) -> None:
    """
    Validate a registration request. The first failing rule wins.

    1. username, email and password are all present and non-empty
    2. password is at least MIN_PASSWORD_LENGTH characters
    3. email has a local@domain.tld shape
    4. password is at most MAX_PASSWORD_BYTES bytes as UTF-8

    Raises:
        ValidationError: With code VALIDATION_MISSING_FIELD,
            VALIDATION_WEAK_PASSWORD or VALIDATION_BAD_EMAIL
    """
    missing = {
        field: f"{field.capitalize()} is required"
        for field in ("username", "email", "password")
        if not getattr(data, field)
    }
    if missing:
        raise ValidationError(
            "All fields are required: username, email, password",
            {"fields": missing},
            code="VALIDATION_MISSING_FIELD",
        )

    if len(data.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            {"min_length": MIN_PASSWORD_LENGTH},
            code="VALIDATION_WEAK_PASSWORD",
        )

    if not EMAIL_PATTERN.fullmatch(data.email):
        raise ValidationError(
            "Please provide a valid email address",
            {"example": "user@example.com"},
            code="VALIDATION_BAD_EMAIL",
        )

    if len(data.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
            {"max_bytes": MAX_PASSWORD_BYTES},
            code="VALIDATION_WEAK_PASSWORD",
        )


def register_user(
    core: Core,
    data: UserRegister,
    issuer: TokenIssuer,
    work_factor: int = DEFAULT_WORK_FACTOR,
) -> AuthData:
    """
    Register a new user and issue their first token.

    The duplicate pre-check names the colliding field(s). A concurrent
    registration that slips past it is still stopped by the store's unique
    constraints, which UserOperations.create maps to ConflictError.

    Args:
        core: Database Core
        data: Registration request
        issuer: Token issuer
        work_factor: bcrypt cost factor

    Returns:
        AuthData with the public user fields and token

    Raises:
        ValidationError: If the request fails validation
        ConflictError: If the username or email is taken
        PasswordHashingError: If hashing fails
    """
    validate_registration(data)

    existing = core.user.find_conflicting(data.username, data.email)
    if existing is not None:
        conflicts = {}
        if existing["username"] == data.username:
            conflicts["username"] = "Username is already taken"
        if existing["email"] == data.email:
            conflicts["email"] = "Email is already registered"
        logger.warning(f"Registration conflict on {', '.join(conflicts)}")
        raise ConflictError("User already exists", {"conflicts": conflicts})

    password_hash = hash_password(data.password, work_factor)
    row = core.user.create(data.username, data.email, password_hash)

    logger.info(f"User registered: {row['username']}")

    return AuthData(
        user=UserResponse.from_row(row),
        token=issuer.issue(row["id"], row["username"], row["email"]),
        token_expires=issuer.expires_in,
    )


# ============================================================================
# Login
# ============================================================================


def verify_credentials(core: Core, email: str, password: str) -> sqlite3.Row | None:
    """
    Verify an email/password pair.

    Returns:
        The user row if the credentials match, None otherwise (whether the
        email is unknown or the password is wrong)
    """
    row = core.user.get_by_email(email)
    if row is None:
        return None

    if not verify_password(password, row["password_hash"]):
        return None

    return row


def login_user(core: Core, data: UserLogin, issuer: TokenIssuer) -> AuthData:
    """
    Authenticate a user by email and password and issue a token.

    Raises:
        ValidationError: If email or password is missing
        AuthenticationError: AUTH_INVALID_CREDENTIALS for an unknown email
            or a wrong password, with no details to tell them apart
    """
    missing = {
        field: f"{field.capitalize()} is required"
        for field in ("email", "password")
        if not getattr(data, field)
    }
    if missing:
        raise ValidationError(
            "Email and password are required",
            {"fields": missing},
            code="VALIDATION_MISSING_FIELD",
        )

    row = verify_credentials(core, data.email, data.password)
    if row is None:
        logger.warning("Failed login attempt")
        raise AuthenticationError(
            INVALID_CREDENTIALS_MESSAGE,
            code="AUTH_INVALID_CREDENTIALS",
        )

    logger.info(f"Successful login: {row['username']}")

    return AuthData(
        user=UserResponse.from_row(row),
        token=issuer.issue(row["id"], row["username"], row["email"]),
        token_expires=issuer.expires_in,
    )


# ============================================================================
# Profile
# ============================================================================


def get_profile(core: Core, user_id: str) -> UserProfile:
    """
    Load the current profile for an authenticated user id.

    Raises:
        ResourceNotFound: If the account was deleted after the token was issued
    """
    row = core.user.get_by_id(user_id)
    if row is None:
        raise ResourceNotFound(
            "User not found",
            {"possible_cause": "User account may have been deleted since token was issued"}
        )

    return UserProfile.from_row(row)
