"""
Pytest Configuration and Shared Fixtures
=========================================

Common fixtures used across all test modules.

For Developers:
    - Import fixtures by name in test files (pytest auto-discovers conftest.py)
    - Token helpers live here so middleware and account tests sign tokens
      the same way
    - Tests explicitly assert on expected logs using caplog
"""

import logging
import os
from datetime import UTC, datetime, timedelta

import jwt
import pytest

from src.scheduler.shared.auth.claims import ClaimsSnapshot
from src.scheduler.shared.auth.enums import PrimaryRole
from src.scheduler.shared.auth.passwords import hash_password
from src.scheduler.shared.middleware.auth_middleware import JWTConfig
from src.scheduler.shared.models.user import User

TEST_SECRET = "test-secret-key-do-not-use-in-production"  # pragma: allowlist secret
TEST_ISSUER = "mow-scheduler"
TEST_AUDIENCE = "mow-scheduler-client"
TEST_PASSWORD = "correct-horse-battery"  # pragma: allowlist secret

# Hashed once; argon2 is deliberately slow
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)

# Set default test environment variables at module load time
os.environ.setdefault("JWT_SECRET", TEST_SECRET)
os.environ.setdefault("ENVIRONMENT", "test")


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    Ensures tests don't pollute each other's environment.
    """
    original_env = os.environ.copy()

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def jwt_config() -> JWTConfig:
    """JWTConfig matching the test environment."""
    return JWTConfig(secret=TEST_SECRET)


def make_token(
    operational_roles: str | None = "",
    is_staff: str | bool | None = "false",
    subject: str = "jdoe",
    secret: str = TEST_SECRET,
    expires_in: timedelta = timedelta(hours=8),
    issuer: str | None = TEST_ISSUER,
    audience: str | None = TEST_AUDIENCE,
    extra: dict | None = None,
) -> str:
    """Sign a scheduler access token.

    Pass ``operational_roles=None`` or ``is_staff=None`` to leave the claim
    out of the token entirely.
    """
    now = datetime.now(UTC)
    payload = {
        "sub": subject,
        "id": "42",
        "role": "Volunteer",
        "iat": now,
        "exp": now + expires_in,
    }
    if operational_roles is not None:
        payload["operationalRoles"] = operational_roles
    if is_staff is not None:
        payload["isStaff"] = is_staff
    if issuer:
        payload["iss"] = issuer
    if audience:
        payload["aud"] = audience
    if extra:
        payload.update(extra)

    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(token: str) -> dict[str, str]:
    """Authorization header dict for a token."""
    return {"Authorization": f"Bearer {token}"}


def make_claims(
    operational_roles: str | None = "",
    is_staff: str | None = None,
    is_authenticated: bool = True,
) -> ClaimsSnapshot:
    """Build a ClaimsSnapshot directly, bypassing token validation."""
    return ClaimsSnapshot(
        is_authenticated=is_authenticated,
        is_staff_claim=is_staff,
        operational_roles=operational_roles,
        subject="jdoe" if is_authenticated else None,
    )


@pytest.fixture
def volunteer_user() -> User:
    """A non-staff volunteer who drives and packs."""
    return User(
        user_id=42,
        username="jdoe",
        email="jdoe@example.org",
        first_name="Jane",
        last_name="Doe",
        password_hash=TEST_PASSWORD_HASH,
        role=PrimaryRole.VOLUNTEER,
        operational_roles="Driver,Packer",
        created_at=datetime(2025, 5, 14, 9, 0, tzinfo=UTC),
    )


@pytest.fixture
def staff_user() -> User:
    """A staff coordinator with no operational roles."""
    return User(
        user_id=7,
        username="coord",
        email="coord@example.org",
        first_name="Casey",
        last_name="Ortiz",
        password_hash=TEST_PASSWORD_HASH,
        role=PrimaryRole.COORDINATOR,
        is_staff=True,
        created_at=datetime(2025, 5, 14, 9, 0, tzinfo=UTC),
    )


# =============================================================================
# Log Validation Helpers
# =============================================================================


def assert_warning_logged(caplog, pattern: str):
    """
    Helper to assert a WARNING log was captured.

    Args:
        caplog: pytest caplog fixture
        pattern: String pattern to search for in log messages

    Raises:
        AssertionError: If no WARNING log matches the pattern
    """
    assert any(
        pattern in record.message
        for record in caplog.records
        if record.levelno == logging.WARNING
    ), f"Expected WARNING log matching '{pattern}' not found"
