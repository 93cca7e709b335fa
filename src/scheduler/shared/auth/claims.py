"""Identity claims carried by scheduler access tokens.

A ClaimsSnapshot is rebuilt from the validated token on every request and
passed explicitly to the role helpers and the authorization policy. It is
never read from ambient request state.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from src.scheduler.shared.models.user import User

# Claim names on the wire
CLAIM_SUBJECT = "sub"
CLAIM_EMAIL = "email"
CLAIM_TOKEN_ID = "jti"
CLAIM_ROLE = "role"
CLAIM_USER_ID = "id"
CLAIM_IS_STAFF = "isStaff"
CLAIM_OPERATIONAL_ROLES = "operationalRoles"


def parse_staff_flag(value: Any) -> bool:
    """Interpret an ``isStaff`` claim value.

    Accepts real booleans and the strings ``"true"``/``"false"`` in any
    case with surrounding whitespace. Anything else, including a missing
    claim, counts as not staff.

    Examples:
        >>> parse_staff_flag("True ")
        True
        >>> parse_staff_flag("yes")
        False
    """
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return False
    return value.strip().lower() == "true"


def _string_claim(value: Any) -> str | None:
    """Claims are strings on the wire; any other JSON type counts as absent."""
    if isinstance(value, str):
        return value
    return None


def _staff_claim(value: Any) -> str | None:
    if isinstance(value, bool):
        return "true" if value else "false"
    return _string_claim(value)


def _id_claim(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | str):
        return str(value)
    return None


@dataclass(frozen=True)
class ClaimsSnapshot:
    """Per-request view of the caller's identity claims.

    Attributes:
        is_authenticated: Whether a valid token was presented
        is_staff_claim: Raw ``isStaff`` claim value, None when absent. Use
            ``staff`` for the parsed flag.
        operational_roles: Raw ``operationalRoles`` claim value. None means
            the claim is absent; an empty string means present but empty.
        subject: Username from the ``sub`` claim
        user_id: User record id from the ``id`` claim
        role: Primary role from the ``role`` claim
    """

    is_authenticated: bool
    is_staff_claim: str | None = None
    operational_roles: str | None = None
    subject: str | None = None
    user_id: str | None = None
    role: str | None = None

    @property
    def staff(self) -> bool:
        """True when the staff override applies."""
        return parse_staff_flag(self.is_staff_claim)

    @classmethod
    def anonymous(cls) -> ClaimsSnapshot:
        """Snapshot for a request without a valid token."""
        return cls(is_authenticated=False)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ClaimsSnapshot:
        """Build an authenticated snapshot from a validated token payload."""
        return cls(
            is_authenticated=True,
            is_staff_claim=_staff_claim(payload.get(CLAIM_IS_STAFF)),
            operational_roles=_string_claim(payload.get(CLAIM_OPERATIONAL_ROLES)),
            subject=_string_claim(payload.get(CLAIM_SUBJECT)),
            user_id=_id_claim(payload.get(CLAIM_USER_ID)),
            role=_string_claim(payload.get(CLAIM_ROLE)),
        )


def build_token_claims(user: User) -> dict[str, str]:
    """Identity claims issued for a user at login.

    Registered claims that depend on time or configuration (iat, exp, iss,
    aud) are added by the token issuer.
    """
    return {
        CLAIM_SUBJECT: user.username,
        CLAIM_EMAIL: user.email,
        CLAIM_TOKEN_ID: str(uuid.uuid4()),
        CLAIM_ROLE: user.role.value,
        CLAIM_USER_ID: str(user.user_id),
        CLAIM_IS_STAFF: "true" if user.is_staff else "false",
        CLAIM_OPERATIONAL_ROLES: user.operational_roles or "",
    }
