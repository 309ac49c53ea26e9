"""Custom exceptions for Card Catalog Core.

Every exception raised on purpose by the application derives from
CardCatalogError. Each class carries the HTTP status it maps to and a
default machine-readable error code; the Flask error handlers in main.py
turn them into the structured JSON error body:

    {"success": false, "error": {"code": ..., "type": ..., "message": ..., "details": ...}}
"""


class CardCatalogError(Exception):
    """Base exception for all Card Catalog errors."""

    status_code = 500
    default_code = "INTERNAL"

    def __init__(self, message: str, details: dict | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.code = code or self.default_code


class ValidationError(CardCatalogError):
    """Raised when request input is missing or malformed."""

    status_code = 400
    default_code = "VALIDATION_INVALID_BODY"


class AuthenticationError(CardCatalogError):
    """Raised when a request cannot be authenticated."""

    status_code = 401
    default_code = "AUTH_INVALID"


class ResourceNotFound(CardCatalogError):
    """Raised when a requested resource does not exist."""

    status_code = 404
    default_code = "NOT_FOUND"


class ConflictError(CardCatalogError):
    """Raised when a create would violate a uniqueness rule."""

    status_code = 409
    default_code = "CONFLICT"


class DatabaseError(CardCatalogError):
    """Raised when the store fails for reasons other than a conflict."""


class PasswordHashingError(CardCatalogError):
    """Raised when bcrypt fails to hash or verify a password."""


class ConfigurationError(CardCatalogError):
    """Raised at startup when required settings are missing or invalid.

    Never reaches a request handler: create_app() raises it before the app
    exists, and the entry point decides whether to abort.
    """
