"""Account role management for the scheduler.

These functions compute new account state; persisting the returned User
(a single write of the operational_roles field) is up to the caller.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from src.scheduler.shared.auth.enums import VALID_OPERATIONAL_ROLES
from src.scheduler.shared.auth.passwords import hash_password, verify_password
from src.scheduler.shared.errors.auth_errors import (
    InvalidCredentialsError,
    InvalidRoleError,
)
from src.scheduler.shared.logging_utils import sanitize_for_log
from src.scheduler.shared.middleware.auth_middleware import JWTConfig, issue_access_token
from src.scheduler.shared.models.user import LoginResponse, User, UserRegistration

logger = logging.getLogger(__name__)


def _require_operational_role_name(role: str) -> None:
    if role not in VALID_OPERATIONAL_ROLES:
        raise InvalidRoleError(role, VALID_OPERATIONAL_ROLES)


def create_user(
    registration: UserRegistration,
    user_id: int,
    now: datetime | None = None,
) -> User:
    """Build the account record for a registration.

    The password is stored as an argon2 hash. The operational roles string
    is stored exactly as submitted.

    Args:
        registration: Validated registration request
        user_id: Identifier assigned by storage
        now: Creation time, defaults to the current UTC time

    Returns:
        The new User
    """
    user = User(
        user_id=user_id,
        username=registration.username,
        email=registration.email,
        first_name=registration.first_name,
        last_name=registration.last_name,
        phone_number=registration.phone_number,
        password_hash=hash_password(registration.password),
        role=registration.role,
        is_staff=registration.is_staff,
        operational_roles=registration.operational_roles,
        created_at=now or datetime.now(UTC),
    )

    logger.info(
        "Registered user",
        extra={
            "username": sanitize_for_log(user.username),
            "primary_role": user.role.value,
            "is_staff": user.is_staff,
            "operational_roles": sanitize_for_log(user.operational_roles),
        },
    )
    return user


def assign_operational_role(user: User, role: str) -> User:
    """Grant an operational role.

    Raises:
        InvalidRoleError: If ``role`` is not in the role catalog
    """
    _require_operational_role_name(role)

    updated = user.with_operational_role(role)
    if updated.operational_roles == user.operational_roles:
        logger.debug(f"User {user.user_id} already has operational role {role}")
    else:
        logger.info(
            "Assigned operational role",
            extra={"target_user_id": user.user_id, "operational_role": role},
        )
    return updated


def revoke_operational_role(user: User, role: str) -> User:
    """Withdraw an operational role.

    Raises:
        InvalidRoleError: If ``role`` is not in the role catalog
    """
    _require_operational_role_name(role)

    if not user.has_stored_operational_role(role):
        logger.debug(f"User {user.user_id} does not hold operational role {role}")
        return user

    logger.info(
        "Revoked operational role",
        extra={"target_user_id": user.user_id, "operational_role": role},
    )
    return user.without_operational_role(role)


def record_login(user: User, now: datetime | None = None) -> User:
    """Copy of ``user`` with ``last_login`` set."""
    return user.model_copy(update={"last_login": now or datetime.now(UTC)})


def complete_login(
    user: User,
    config: JWTConfig | None = None,
    now: datetime | None = None,
) -> tuple[User, LoginResponse]:
    """Stamp the login time and issue the user's access token.

    Callers must run verify_credentials first; login() does both.

    Returns:
        The updated User to persist and the response body for the client
    """
    user = record_login(user, now)
    token = issue_access_token(user, config)

    logger.info(
        "User logged in",
        extra={"username": sanitize_for_log(user.username), "is_staff": user.is_staff},
    )
    return user, LoginResponse(
        token=token,
        user_id=user.user_id,
        username=user.username,
        role=user.role,
    )


def verify_credentials(user: User | None, password: str) -> User:
    """Check a login attempt against the stored password hash.

    Args:
        user: The account looked up by username, None if there is none
        password: Password submitted by the client

    Returns:
        The user, when the password matches

    Raises:
        InvalidCredentialsError: Unknown user or wrong password
    """
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Rejected login attempt")
        raise InvalidCredentialsError()

    return user


def login(
    user: User | None,
    password: str,
    config: JWTConfig | None = None,
    now: datetime | None = None,
) -> tuple[User, LoginResponse]:
    """Verify credentials, then stamp the login and issue a token.

    Raises:
        InvalidCredentialsError: Unknown user or wrong password
    """
    return complete_login(verify_credentials(user, password), config, now)
