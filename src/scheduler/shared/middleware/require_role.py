"""Operational role access control for FastAPI endpoints.

Endpoints declare the operational roles they accept as a comma-separated
string. Each request is then evaluated in a fixed order:

1. Endpoints marked with ``@allow_anonymous`` are always allowed.
2. Requests without an authenticated identity get 401.
3. Tokens with no ``operationalRoles`` claim at all get 403. An empty
   claim is not the same thing and falls through to step 4.
4. Staff are allowed; everyone else needs at least one accepted role
   (case-insensitive), otherwise 403.

Usage:
    from src.scheduler.shared.middleware.require_role import (
        OperationalRoleGuard,
        allow_anonymous,
        require_operational_role,
    )

    @router.post("/inventory/items")
    @require_operational_role("InventoryManager")
    async def create_item(request: Request):
        ...

    router = APIRouter(
        dependencies=[Depends(OperationalRoleGuard("InventoryManager,KitchenStaff"))]
    )

Security:
    - Generic error messages prevent role enumeration attacks
    - Role names are validated at decoration time to catch typos early
"""

import functools
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from fastapi import HTTPException, Request

from src.scheduler.shared.auth import role_list
from src.scheduler.shared.auth.claims import ClaimsSnapshot
from src.scheduler.shared.auth.enums import VALID_OPERATIONAL_ROLES
from src.scheduler.shared.errors.auth_errors import (
    AuthenticationRequiredError,
    AuthorizationError,
    EmptyRoleRequirementError,
    InsufficientRoleError,
    InvalidRoleError,
)
from src.scheduler.shared.logging_utils import sanitize_for_log
from src.scheduler.shared.middleware.auth_middleware import extract_claims

logger = logging.getLogger(__name__)

# Type variable for preserving function signatures
F = TypeVar("F", bound=Callable[..., Any])

ALLOW_ANONYMOUS_ATTR = "__allow_anonymous__"


class AuthorizationDecision(Enum):
    """Outcome of an operational role check."""

    ALLOW = "allow"
    DENY_UNAUTHENTICATED = "deny_unauthenticated"
    DENY_FORBIDDEN = "deny_forbidden"

    @property
    def status_code(self) -> int:
        """HTTP status the request pipeline should answer with."""
        return _DECISION_STATUS[self]

    @property
    def allowed(self) -> bool:
        return self is AuthorizationDecision.ALLOW


_DECISION_STATUS: dict[AuthorizationDecision, int] = {
    AuthorizationDecision.ALLOW: 200,
    AuthorizationDecision.DENY_UNAUTHENTICATED: 401,
    AuthorizationDecision.DENY_FORBIDDEN: 403,
}


@dataclass(frozen=True)
class EndpointRoleRequirement:
    """Operational roles accepted by one endpoint.

    Attributes:
        roles: Accepted role names; non-empty unless anonymous access is declared
        allow_anonymous: Disables the check entirely
    """

    roles: frozenset[str]
    allow_anonymous: bool = False

    @classmethod
    def parse(
        cls, declaration: str, allow_anonymous: bool = False
    ) -> "EndpointRoleRequirement":
        """Parse a declaration such as ``"Driver, Packer"``.

        Raises:
            InvalidRoleError: If a name is not an operational role
            EmptyRoleRequirementError: If no role is named and anonymous
                access is not declared
        """
        roles = role_list.decode(declaration)
        for role in roles:
            if role not in VALID_OPERATIONAL_ROLES:
                raise InvalidRoleError(role, VALID_OPERATIONAL_ROLES)

        if not roles and not allow_anonymous:
            raise EmptyRoleRequirementError(declaration)

        return cls(roles=frozenset(roles), allow_anonymous=allow_anonymous)


def decide(
    required_roles: Iterable[str],
    allow_anonymous: bool,
    claims: ClaimsSnapshot,
) -> AuthorizationDecision:
    """Decide whether a request may reach an operational-role endpoint.

    Pure function of its arguments; never raises.

    Args:
        required_roles: Roles the endpoint accepts
        allow_anonymous: Whether the endpoint is exempt from the check
        claims: The caller's claims snapshot

    Returns:
        The first matching decision in the evaluation order
    """
    if allow_anonymous:
        return AuthorizationDecision.ALLOW

    if not claims.is_authenticated:
        return AuthorizationDecision.DENY_UNAUTHENTICATED

    if claims.operational_roles is None:
        return AuthorizationDecision.DENY_FORBIDDEN

    if claims.staff:
        return AuthorizationDecision.ALLOW

    accepted = {role.lower() for role in required_roles}
    held = role_list.decode(claims.operational_roles)
    if any(role.lower() in accepted for role in held):
        return AuthorizationDecision.ALLOW

    return AuthorizationDecision.DENY_FORBIDDEN


def authorize(requirement: EndpointRoleRequirement, claims: ClaimsSnapshot) -> None:
    """Raise if ``claims`` do not satisfy ``requirement``.

    Raises:
        AuthenticationRequiredError: No authenticated identity
        InsufficientRoleError: Missing claim or no accepted role
    """
    decision = decide(requirement.roles, requirement.allow_anonymous, claims)
    if decision is AuthorizationDecision.DENY_UNAUTHENTICATED:
        raise AuthenticationRequiredError()
    if decision is AuthorizationDecision.DENY_FORBIDDEN:
        raise InsufficientRoleError()


def allow_anonymous(func: F) -> F:
    """Exempt an endpoint from operational role checks."""
    setattr(func, ALLOW_ANONYMOUS_ATTR, True)
    return func


def is_anonymous_endpoint(endpoint: Any) -> bool:
    """Whether ``endpoint`` was marked with ``@allow_anonymous``."""
    return bool(getattr(endpoint, ALLOW_ANONYMOUS_ATTR, False))


def _enforce(
    requirement: EndpointRoleRequirement,
    request: Request,
    endpoint_name: str,
) -> ClaimsSnapshot:
    """Evaluate ``requirement`` for a request, raising HTTPException on denial.

    The claims snapshot is stored on ``request.state.claims`` for handlers.
    """
    claims = extract_claims(request.headers)
    request.state.claims = claims

    try:
        authorize(requirement, claims)
    except AuthorizationError as e:
        # SECURITY: Generic message prevents role enumeration
        if claims.is_authenticated and claims.operational_roles is None:
            reason = "no operationalRoles claim"
        else:
            reason = type(e).__name__
        logger.debug(
            f"{endpoint_name}: {sanitize_for_log(claims.subject)} denied "
            f"({reason}), returning {e.status_code}"
        )
        raise HTTPException(status_code=e.status_code, detail=e.detail) from None

    logger.debug(
        f"{endpoint_name}: {sanitize_for_log(claims.subject)} authorized "
        f"with roles {sanitize_for_log(claims.operational_roles)}"
    )
    return claims


def require_operational_role(roles: str) -> Callable[[F], F]:
    """Decorator factory for operational role access control.

    Args:
        roles: Comma-separated operational roles accepted by the endpoint

    Returns:
        A decorator wrapping an async endpoint handler that takes a
        ``Request`` argument.

    Raises:
        InvalidRoleError: At decoration time if a role is not valid.
            This causes app startup to fail, catching typos early.
        EmptyRoleRequirementError: At decoration time if no role is named.

    Example:
        @router.get("/routes/{route_id}/loading-sheet")
        @require_operational_role("Driver,LoadingCoordinator")
        async def loading_sheet(request: Request, route_id: int):
            ...
    """
    requirement = EndpointRoleRequirement.parse(roles)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            if is_anonymous_endpoint(func) or is_anonymous_endpoint(wrapper):
                return await func(*args, **kwargs)

            request: Request | None = kwargs.get("request")
            if request is None:
                for arg in args:
                    if isinstance(arg, Request):
                        request = arg
                        break

            if request is None:
                # This shouldn't happen in normal FastAPI usage
                logger.error(
                    "require_operational_role: No Request object found in handler args"
                )
                raise HTTPException(
                    status_code=500,
                    detail="Internal server error",
                )

            _enforce(requirement, request, func.__name__)
            return await func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


class OperationalRoleGuard:
    """FastAPI dependency applying a requirement to every route it guards.

    Intended for ``APIRouter(dependencies=[...])`` or ``Depends`` on a
    single route. Routes whose endpoint is marked ``@allow_anonymous`` are
    skipped, which lets a router-wide requirement have exemptions.

    Returns the caller's ClaimsSnapshot so handlers can depend on it.
    """

    def __init__(self, roles: str) -> None:
        self.requirement = EndpointRoleRequirement.parse(roles)

    def __call__(self, request: Request) -> ClaimsSnapshot:
        endpoint = request.scope.get("endpoint")
        if is_anonymous_endpoint(endpoint):
            claims = extract_claims(request.headers)
            request.state.claims = claims
            return claims

        endpoint_name = getattr(endpoint, "__name__", "operational_role_guard")
        return _enforce(self.requirement, request, endpoint_name)
