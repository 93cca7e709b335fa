"""Operational role queries against a caller's claims.

Every check honours the staff override first: a staff identity holds all
operational roles. Role comparisons here are case-insensitive, unlike the
raw ``role_list.has`` used on stored values.
"""

from __future__ import annotations

from src.scheduler.shared.auth import role_list
from src.scheduler.shared.auth.claims import ClaimsSnapshot


def get_operational_roles(claims: ClaimsSnapshot) -> list[str]:
    """Return the roles in the ``operationalRoles`` claim.

    Segments are stripped and empty entries dropped. A missing claim gives
    an empty list.
    """
    if claims.operational_roles is None:
        return []

    return role_list.decode(claims.operational_roles)


def has_operational_role(claims: ClaimsSnapshot, role: str) -> bool:
    """Check a single operational role.

    Args:
        claims: The caller's claims snapshot
        role: Role name, matched case-insensitively

    Returns:
        True if the caller is staff or holds the role

    Examples:
        >>> claims = ClaimsSnapshot(is_authenticated=True, operational_roles="Driver")
        >>> has_operational_role(claims, "driver")
        True
    """
    if claims.staff:
        return True

    wanted = role.lower()
    return any(held.lower() == wanted for held in get_operational_roles(claims))


def has_any_operational_role(claims: ClaimsSnapshot, *roles: str) -> bool:
    """Check whether the caller holds at least one of ``roles``."""
    if claims.staff:
        return True

    held = {role.lower() for role in get_operational_roles(claims)}
    return any(role.lower() in held for role in roles)
