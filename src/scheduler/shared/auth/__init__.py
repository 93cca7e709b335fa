"""Operational role catalog, role-list codec and claim queries."""

from src.scheduler.shared.auth.claims import (
    ClaimsSnapshot,
    build_token_claims,
    parse_staff_flag,
)
from src.scheduler.shared.auth.enums import (
    VALID_OPERATIONAL_ROLES,
    VALID_PRIMARY_ROLES,
    OperationalRole,
    PrimaryRole,
)
from src.scheduler.shared.auth.roles import (
    get_operational_roles,
    has_any_operational_role,
    has_operational_role,
)

__all__ = [
    "ClaimsSnapshot",
    "OperationalRole",
    "PrimaryRole",
    "VALID_OPERATIONAL_ROLES",
    "VALID_PRIMARY_ROLES",
    "build_token_claims",
    "get_operational_roles",
    "has_any_operational_role",
    "has_operational_role",
    "parse_staff_flag",
]
