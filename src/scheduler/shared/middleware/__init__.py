"""Shared middleware for scheduler endpoints."""

from src.scheduler.shared.middleware.auth_middleware import (
    JWTConfig,
    extract_claims,
    issue_access_token,
    validate_jwt,
)
from src.scheduler.shared.middleware.require_role import (
    AuthorizationDecision,
    EndpointRoleRequirement,
    OperationalRoleGuard,
    allow_anonymous,
    authorize,
    decide,
    require_operational_role,
)

__all__ = [
    "AuthorizationDecision",
    "EndpointRoleRequirement",
    "JWTConfig",
    "OperationalRoleGuard",
    "allow_anonymous",
    "authorize",
    "decide",
    "extract_claims",
    "issue_access_token",
    "require_operational_role",
    "validate_jwt",
]
