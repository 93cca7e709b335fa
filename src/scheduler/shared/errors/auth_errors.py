"""Operational role access control error types.

InvalidRoleError signals a programming mistake (an unknown role name) and
is raised at decoration or validation time. The other exceptions describe
a denied request; the FastAPI hooks convert them into HTTPExceptions with
generic messages to prevent role enumeration.
"""

from __future__ import annotations

from collections.abc import Iterable


class InvalidRoleError(ValueError):
    """Raised for role names outside the role catalog.

    When raised from a decorator this causes application startup to fail,
    catching typos early.
    """

    def __init__(self, role: str, valid_roles: Iterable[str]) -> None:
        self.role = role
        self.valid_roles = frozenset(valid_roles)
        super().__init__(
            f"Invalid role '{role}'. Valid roles: {sorted(self.valid_roles)}"
        )


class EmptyRoleRequirementError(ValueError):
    """Raised when an endpoint declares no operational roles.

    A requirement must name at least one role unless anonymous access is
    declared for the endpoint.
    """

    def __init__(self, declaration: str) -> None:
        self.declaration = declaration
        super().__init__(
            f"Operational role requirement '{declaration}' names no roles"
        )


class AuthorizationError(Exception):
    """Base class for denied requests."""

    status_code: int = 403
    detail: str = "Access denied"


class AuthenticationRequiredError(AuthorizationError):
    """The request carries no authenticated identity."""

    status_code = 401
    detail = "Authentication required"


class InsufficientRoleError(AuthorizationError):
    """The caller holds none of the operational roles an endpoint accepts.

    Also raised when the token has no operationalRoles claim at all.
    """

    status_code = 403
    detail = "Access denied"


class InvalidCredentialsError(AuthorizationError):
    """Username or password did not match at login.

    The message does not say which of the two was wrong.
    """

    status_code = 401
    detail = "Invalid username or password"
