"""Path parameter parsing shared by the catalog endpoints."""

from ..exceptions import ValidationError


def parse_positive_int(value: str, label: str) -> int:
    """
    Parse a path segment as a positive integer.

    Args:
        value: Raw path segment
        label: Human-readable name for error messages (e.g. "card ID")

    Raises:
        ValidationError: VALIDATION_INVALID_PARAMETER if not a positive integer
    """
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        parsed = 0

    if parsed <= 0:
        raise ValidationError(
            f"Invalid {label}. Must be a positive number.",
            {"value": value},
            code="VALIDATION_INVALID_PARAMETER",
        )

    return parsed
