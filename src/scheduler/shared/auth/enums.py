"""Canonical role enums for the scheduler's access control.

Primary roles are coarse-grained and exactly one is assigned per identity.
Operational roles are capability tags; an identity holds zero or more of
them independently of its primary role.

All role names used by endpoints and account management should come from
here so that typos are caught at decoration time.
"""

from __future__ import annotations

from enum import StrEnum


class PrimaryRole(StrEnum):
    """Identity category stored on the user record and in the `role` claim."""

    ADMIN = "Admin"
    COORDINATOR = "Coordinator"
    VOLUNTEER = "Volunteer"


class OperationalRole(StrEnum):
    """Fine-grained capability tags carried in the `operationalRoles` claim."""

    # Administrative
    INVENTORY_MANAGER = "InventoryManager"
    ROUTE_PLANNER = "RoutePlanner"

    # Kitchen
    KITCHEN_STAFF = "KitchenStaff"
    KITCHEN_VOLUNTEER = "KitchenVolunteer"

    # Logistics
    PACKER = "Packer"
    DRIVER = "Driver"
    LOADING_COORDINATOR = "LoadingCoordinator"


# Immutable sets for O(1) validation at decoration time
VALID_PRIMARY_ROLES: frozenset[str] = frozenset(role.value for role in PrimaryRole)
VALID_OPERATIONAL_ROLES: frozenset[str] = frozenset(
    role.value for role in OperationalRole
)
