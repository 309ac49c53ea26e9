"""Tests for auth service module.

Tests password hashing, the registration / login / profile flows and the
ordering of their validation rules.
"""

import pytest

from cardcatalog.auth import service
from cardcatalog.auth.schemas import UserLogin, UserRegister
from cardcatalog.exceptions import (
    AuthenticationError,
    ConflictError,
    PasswordHashingError,
    ResourceNotFound,
    ValidationError,
)

FAST_WORK_FACTOR = 4


def _register(core, issuer, username="kim", email="kim@x.com", password="secret1"):
    data = UserRegister(username=username, email=email, password=password)
    return service.register_user(core, data, issuer, work_factor=FAST_WORK_FACTOR)


# ============================================================================
# Password Hashing and Verification Tests
# ============================================================================


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_password_returns_bcrypt_string(self):
        """Hashing should return a 60-character bcrypt string."""
        hashed = service.hash_password("SecurePass123", FAST_WORK_FACTOR)
        assert isinstance(hashed, str)
        assert len(hashed) == 60
        assert hashed.startswith("$2b$")

    def test_hash_password_uses_work_factor(self):
        """Cost factor should be encoded in the hash."""
        hashed = service.hash_password("SecurePass123", 5)
        assert hashed.startswith("$2b$05$")

    def test_hash_password_different_hashes(self):
        """Same password should produce different hashes (due to salt)."""
        hash1 = service.hash_password("SecurePass123", FAST_WORK_FACTOR)
        hash2 = service.hash_password("SecurePass123", FAST_WORK_FACTOR)
        assert hash1 != hash2

    def test_verify_password_valid(self):
        """Verification should succeed for correct password."""
        hashed = service.hash_password("SecurePass123", FAST_WORK_FACTOR)
        assert service.verify_password("SecurePass123", hashed) is True

    def test_verify_password_invalid(self):
        """Verification should fail for incorrect password."""
        hashed = service.hash_password("SecurePass123", FAST_WORK_FACTOR)
        assert service.verify_password("WrongPass456", hashed) is False

    def test_verify_password_case_sensitive(self):
        """Passwords are case-sensitive."""
        hashed = service.hash_password("SecurePass123", FAST_WORK_FACTOR)
        assert service.verify_password("securepass123", hashed) is False

    def test_verify_password_unicode(self):
        """Verification should handle unicode characters."""
        hashed = service.hash_password("SecurePass123é", FAST_WORK_FACTOR)
        assert service.verify_password("SecurePass123é", hashed) is True
        assert service.verify_password("SecurePass123", hashed) is False

    def test_verify_overlong_password_is_mismatch(self):
        """Passwords bcrypt cannot hash never match, and never raise."""
        hashed = service.hash_password("SecurePass123", FAST_WORK_FACTOR)
        assert service.verify_password("y" * 100, hashed) is False

    def test_verify_against_malformed_hash_is_internal_error(self):
        """A corrupt stored hash is an internal error, not a failed login."""
        with pytest.raises(PasswordHashingError):
            service.verify_password("SecurePass123", "not-a-bcrypt-hash")


# ============================================================================
# Registration Validation Tests
# ============================================================================


class TestValidateRegistration:
    """Tests for the ordered registration rules."""

    def test_valid_registration_passes(self):
        """All rules satisfied raises nothing."""
        service.validate_registration(
            UserRegister(username="kim", email="kim@x.com", password="secret1")
        )

    def test_missing_fields_named(self):
        """Every missing field is named in the details."""
        with pytest.raises(ValidationError) as exc_info:
            service.validate_registration(UserRegister(username="kim"))

        error = exc_info.value
        assert error.code == "VALIDATION_MISSING_FIELD"
        assert set(error.details["fields"]) == {"email", "password"}

    def test_empty_string_counts_as_missing(self):
        """Empty strings are treated as absent."""
        with pytest.raises(ValidationError) as exc_info:
            service.validate_registration(
                UserRegister(username="", email="kim@x.com", password="secret1")
            )

        assert exc_info.value.code == "VALIDATION_MISSING_FIELD"
        assert list(exc_info.value.details["fields"]) == ["username"]

    def test_short_password_is_weak(self):
        """Passwords under six characters are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            service.validate_registration(
                UserRegister(username="kim", email="kim@x.com", password="12345")
            )

        assert exc_info.value.code == "VALIDATION_WEAK_PASSWORD"
        assert exc_info.value.details["min_length"] == 6

    def test_six_character_password_accepted(self):
        """Exactly six characters is enough."""
        service.validate_registration(
            UserRegister(username="kim", email="kim@x.com", password="123456")
        )

    @pytest.mark.parametrize("email", ["kim", "kim@x", "kim@@x.com", "kim x@x.com", "@x.com", "kim@.com", "kim@x.com\n"])
    def test_bad_email_shape(self, email):
        """Emails must look like local@domain.tld."""
        with pytest.raises(ValidationError) as exc_info:
            service.validate_registration(
                UserRegister(username="kim", email=email, password="secret1")
            )

        assert exc_info.value.code == "VALIDATION_BAD_EMAIL"

    def test_overlong_password_rejected(self):
        """Passwords over 72 bytes are a client error."""
        with pytest.raises(ValidationError) as exc_info:
            service.validate_registration(
                UserRegister(username="kim", email="kim@x.com", password="y" * 100)
            )

        assert exc_info.value.code == "VALIDATION_WEAK_PASSWORD"
        assert exc_info.value.details["max_bytes"] == 72

    def test_password_limit_counts_utf8_bytes(self):
        """40 two-byte characters exceed the limit; 72 ASCII characters do not."""
        with pytest.raises(ValidationError):
            service.validate_registration(
                UserRegister(username="kim", email="kim@x.com", password="é" * 40)
            )

        service.validate_registration(
            UserRegister(username="kim", email="kim@x.com", password="y" * 72)
        )

    def test_bad_email_reported_before_overlong_password(self):
        """Rule 3 short-circuits rule 4."""
        with pytest.raises(ValidationError) as exc_info:
            service.validate_registration(
                UserRegister(username="kim", email="bad", password="y" * 100)
            )

        assert exc_info.value.code == "VALIDATION_BAD_EMAIL"

    def test_missing_field_reported_before_weak_password(self):
        """Rule 1 short-circuits rule 2."""
        with pytest.raises(ValidationError) as exc_info:
            service.validate_registration(UserRegister(email="bad", password="1"))

        assert exc_info.value.code == "VALIDATION_MISSING_FIELD"

    def test_weak_password_reported_before_bad_email(self):
        """Rule 2 short-circuits rule 3."""
        with pytest.raises(ValidationError) as exc_info:
            service.validate_registration(
                UserRegister(username="kim", email="bad", password="1")
            )

        assert exc_info.value.code == "VALIDATION_WEAK_PASSWORD"


# ============================================================================
# Registration Flow Tests
# ============================================================================


class TestRegisterUser:
    """Tests for register_user."""

    def test_register_returns_public_fields_and_token(self, memory_core, issuer, verifier):
        """Registration returns the new user and a token for them."""
        result = _register(memory_core, issuer)

        assert result.user.username == "kim"
        assert result.user.email == "kim@x.com"
        assert result.user.user_id
        assert result.user.member_since
        assert result.token_expires == "24h"
        assert verifier.verify(result.token).user_id == result.user.user_id

    def test_register_stores_hash_not_password(self, memory_core, issuer, test_db):
        """Password is stored as a bcrypt hash."""
        _register(memory_core, issuer)

        row = test_db.execute(
            "SELECT password_hash FROM users WHERE username = ?", ("kim",)
        ).fetchone()
        assert row["password_hash"].startswith("$2b$")
        assert row["password_hash"] != "secret1"

    def test_response_excludes_password_hash(self, memory_core, issuer):
        """The public user model has no password hash."""
        result = _register(memory_core, issuer)
        assert "password_hash" not in result.user.model_dump()

    def test_duplicate_email_conflict(self, memory_core, issuer, test_db):
        """Same email twice is a conflict and only one row remains."""
        _register(memory_core, issuer)

        with pytest.raises(ConflictError) as exc_info:
            _register(memory_core, issuer, username="kim2")

        assert exc_info.value.details["conflicts"] == {"email": "Email is already registered"}
        count = test_db.execute(
            "SELECT COUNT(*) FROM users WHERE email = ?", ("kim@x.com",)
        ).fetchone()[0]
        assert count == 1

    def test_duplicate_username_conflict(self, memory_core, issuer):
        """Same username with a new email names only the username."""
        _register(memory_core, issuer)

        with pytest.raises(ConflictError) as exc_info:
            _register(memory_core, issuer, email="other@x.com")

        assert exc_info.value.details["conflicts"] == {"username": "Username is already taken"}

    def test_duplicate_both_conflict(self, memory_core, issuer):
        """Same username and email names both."""
        _register(memory_core, issuer)

        with pytest.raises(ConflictError) as exc_info:
            _register(memory_core, issuer)

        assert set(exc_info.value.details["conflicts"]) == {"username", "email"}

    def test_username_comparison_is_case_sensitive(self, memory_core, issuer):
        """KIM and kim are different usernames."""
        _register(memory_core, issuer)
        result = _register(memory_core, issuer, username="KIM", email="KIM@x.com")

        assert result.user.username == "KIM"

    def test_validation_runs_before_store_access(self, memory_core, issuer, test_db):
        """Invalid requests never touch the store."""
        with pytest.raises(ValidationError):
            _register(memory_core, issuer, password="123")

        assert test_db.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 0


# ============================================================================
# Login Flow Tests
# ============================================================================


class TestLoginUser:
    """Tests for login_user and verify_credentials."""

    def test_login_success(self, memory_core, issuer, verifier):
        """Correct credentials return user and token."""
        registered = _register(memory_core, issuer)

        result = service.login_user(
            memory_core, UserLogin(email="kim@x.com", password="secret1"), issuer
        )

        assert result.user.user_id == registered.user.user_id
        assert verifier.verify(result.token).username == "kim"

    def test_login_missing_fields(self, memory_core, issuer):
        """Both email and password are required."""
        with pytest.raises(ValidationError) as exc_info:
            service.login_user(memory_core, UserLogin(email="kim@x.com"), issuer)

        assert exc_info.value.code == "VALIDATION_MISSING_FIELD"
        assert list(exc_info.value.details["fields"]) == ["password"]

    def test_wrong_password_and_unknown_email_indistinguishable(self, memory_core, issuer):
        """Both failures raise the same code, message and details."""
        _register(memory_core, issuer)

        with pytest.raises(AuthenticationError) as wrong_password:
            service.login_user(
                memory_core, UserLogin(email="kim@x.com", password="wrong"), issuer
            )
        with pytest.raises(AuthenticationError) as unknown_email:
            service.login_user(
                memory_core, UserLogin(email="nobody@x.com", password="secret1"), issuer
            )

        for exc_info in (wrong_password, unknown_email):
            assert exc_info.value.code == "AUTH_INVALID_CREDENTIALS"
            assert exc_info.value.message == service.INVALID_CREDENTIALS_MESSAGE
            assert exc_info.value.details == {}

    def test_verify_credentials_returns_none_on_mismatch(self, memory_core, issuer):
        """verify_credentials hides which part failed."""
        _register(memory_core, issuer)

        assert service.verify_credentials(memory_core, "kim@x.com", "wrong") is None
        assert service.verify_credentials(memory_core, "nobody@x.com", "secret1") is None
        assert service.verify_credentials(memory_core, "kim@x.com", "secret1") is not None


# ============================================================================
# Profile Flow Tests
# ============================================================================


class TestGetProfile:
    """Tests for get_profile."""

    def test_profile_for_existing_user(self, memory_core, issuer):
        """Profile reflects the stored row."""
        registered = _register(memory_core, issuer)

        profile = service.get_profile(memory_core, registered.user.user_id)

        assert profile.username == "kim"
        assert profile.email == "kim@x.com"
        assert profile.last_updated == profile.member_since

    def test_profile_for_deleted_user(self, memory_core, issuer):
        """A deleted account is NOT_FOUND."""
        registered = _register(memory_core, issuer)
        memory_core.user.delete(registered.user.user_id)

        with pytest.raises(ResourceNotFound) as exc_info:
            service.get_profile(memory_core, registered.user.user_id)

        assert exc_info.value.code == "NOT_FOUND"
