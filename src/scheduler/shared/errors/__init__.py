"""Shared error types for the scheduler."""

from src.scheduler.shared.errors.auth_errors import (
    AuthenticationRequiredError,
    AuthorizationError,
    EmptyRoleRequirementError,
    InsufficientRoleError,
    InvalidCredentialsError,
    InvalidRoleError,
)

__all__ = [
    "AuthenticationRequiredError",
    "AuthorizationError",
    "EmptyRoleRequirementError",
    "InsufficientRoleError",
    "InvalidCredentialsError",
    "InvalidRoleError",
]
