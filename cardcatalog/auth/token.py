"""JWT token issuing and verification.

Tokens are stateless: they are never stored server-side and are valid
purely by signature and expiry. Logging out does not invalidate a token.

Claims:
    userId    user UUID
    username  username at issue time
    email     email at issue time
    iat       issued-at, Unix seconds
    exp       expiry, Unix seconds (iat + configured lifetime)

The signing secret lives in a TokenConfig handed to the issuer and
verifier constructors, so every app instance (and every test) can use its
own secret.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..config import Settings
from ..exceptions import ConfigurationError
from ..utils import isodatetime
from .schemas import TokenPayload

REQUIRED_CLAIMS = ["userId", "username", "email", "iat", "exp"]


@dataclass(frozen=True)
class TokenConfig:
    """Signing configuration shared by TokenIssuer and TokenVerifier."""

    secret: str | None
    expires_in: str = "24h"
    algorithm: str = "HS256"

    def __post_init__(self):
        if not self.secret or not self.secret.strip():
            raise ConfigurationError(
                "JWT secret is required",
                {"setting": "JWT_SECRET"}
            )
        try:
            isodatetime.parse_duration(self.expires_in)
        except ValueError:
            raise ConfigurationError(
                f"Invalid token lifetime: {self.expires_in!r}",
                {"setting": "JWT_EXPIRES_IN"}
            )

    @property
    def lifetime(self) -> timedelta:
        return isodatetime.parse_duration(self.expires_in)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(
            secret=settings.jwt_secret,
            expires_in=settings.jwt_expires_in,
            algorithm=settings.jwt_algorithm,
        )


class TokenIssuer:
    """Creates signed, time-limited access tokens."""

    def __init__(self, config: TokenConfig):
        self._config = config

    @property
    def expires_in(self) -> str:
        """Configured lifetime string, echoed to clients as tokenExpires."""
        return self._config.expires_in

    def issue(
        self,
        user_id: str,
        username: str,
        email: str,
        now: datetime | None = None,
    ) -> str:
        """
        Issue an access token for a user.

        Args:
            user_id: User UUID
            username: Username
            email: Email address
            now: Issue time; defaults to the current UTC time

        Returns:
            Encoded JWT string
        """
        issued_at = int((now or datetime.now(UTC)).timestamp())
        expires_at = issued_at + int(self._config.lifetime.total_seconds())

        payload = {
            "userId": user_id,
            "username": username,
            "email": email,
            "iat": issued_at,
            "exp": expires_at,
        }
        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)


class TokenVerifier:
    """Validates access tokens issued with the same TokenConfig."""

    def __init__(self, config: TokenConfig):
        self._config = config

    def verify(self, token: str) -> TokenPayload:
        """
        Verify signature and expiry and decode the claims.

        Args:
            token: Encoded JWT string

        Returns:
            TokenPayload with the identity claims

        Raises:
            jwt.ExpiredSignatureError: If the token has expired
            jwt.InvalidTokenError: If the token is malformed, forged or
                missing required claims
        """
        payload = jwt.decode(
            token,
            self._config.secret,
            algorithms=[self._config.algorithm],
            options={"require": REQUIRED_CLAIMS},
        )

        try:
            return TokenPayload.model_validate(payload)
        except PydanticValidationError as e:
            raise jwt.InvalidTokenError(f"Invalid token claims: {e.error_count()} error(s)")
