"""Bearer token authentication for scheduler endpoints.

Access tokens are HMAC-signed JWTs issued at login. Their claims carry the
caller's primary role, the staff flag and the comma-separated operational
roles that the authorization policy evaluates.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt

from src.scheduler.shared.auth.claims import (
    CLAIM_SUBJECT,
    ClaimsSnapshot,
    build_token_claims,
)
from src.scheduler.shared.logging_utils import (
    get_safe_error_info,
    redact_sensitive_fields,
    sanitize_for_log,
)

if TYPE_CHECKING:
    from src.scheduler.shared.models.user import User

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class JWTConfig:
    """Configuration for issuing and validating access tokens.

    Attributes:
        secret: Secret key for HMAC signing
        algorithm: JWT algorithm (default: HS256)
        issuer: Token issuer, checked on validation when set
        audience: Token audience, checked on validation when set
        leeway_seconds: Clock skew tolerance (default: 60s)
        access_token_lifetime_seconds: Token lifetime (default: 8 hours)
    """

    secret: str
    algorithm: str = "HS256"
    issuer: str | None = "mow-scheduler"
    audience: str | None = "mow-scheduler-client"
    leeway_seconds: int = 60
    access_token_lifetime_seconds: int = 28800


def _get_jwt_config() -> JWTConfig | None:
    """Load JWT configuration from environment.

    Returns:
        JWTConfig if JWT_SECRET is set, None otherwise
    """
    secret = os.environ.get("JWT_SECRET")
    if not secret:
        return None

    return JWTConfig(
        secret=secret,
        algorithm=os.environ.get("JWT_ALGORITHM", "HS256"),
        issuer=os.environ.get("JWT_ISSUER", "mow-scheduler"),
        audience=os.environ.get("JWT_AUDIENCE", "mow-scheduler-client"),
        leeway_seconds=int(os.environ.get("JWT_LEEWAY_SECONDS", "60")),
        access_token_lifetime_seconds=int(
            os.environ.get("JWT_ACCESS_TOKEN_LIFETIME_SECONDS", "28800")
        ),
    )


def issue_access_token(user: User, config: JWTConfig | None = None) -> str:
    """Sign an access token carrying the user's identity claims.

    Args:
        user: The authenticated user
        config: Optional JWTConfig, uses environment if not provided

    Returns:
        Encoded JWT string

    Raises:
        RuntimeError: If no configuration is available
    """
    if config is None:
        config = _get_jwt_config()
        if config is None:
            raise RuntimeError("JWT_SECRET not configured, cannot issue tokens")

    now = datetime.now(UTC)
    payload: dict[str, Any] = build_token_claims(user)
    payload["iat"] = now
    payload["exp"] = now + timedelta(seconds=config.access_token_lifetime_seconds)
    if config.issuer:
        payload["iss"] = config.issuer
    if config.audience:
        payload["aud"] = config.audience

    logger.debug(
        f"Issuing access token for {sanitize_for_log(user.username)} "
        f"(staff={user.is_staff})"
    )
    return jwt.encode(payload, config.secret, algorithm=config.algorithm)


def validate_jwt(token: str, config: JWTConfig | None = None) -> dict[str, Any] | None:
    """Validate an access token and return its payload.

    Validates the signature, expiration, issuer, audience and the presence
    of the sub, exp and iat claims.

    Args:
        token: JWT token string (without "Bearer " prefix)
        config: Optional JWTConfig, uses environment if not provided

    Returns:
        Decoded payload if valid, None if invalid
    """
    if config is None:
        config = _get_jwt_config()
        if config is None:
            logger.warning("JWT_SECRET not configured, cannot validate JWT")
            return None

    try:
        return jwt.decode(
            token,
            config.secret,
            algorithms=[config.algorithm],
            issuer=config.issuer,
            audience=config.audience,
            leeway=config.leeway_seconds,
            options={
                "require": [CLAIM_SUBJECT, "exp", "iat"],
            },
        )

    except jwt.ExpiredSignatureError:
        logger.debug("JWT token has expired")
        return None
    except jwt.InvalidIssuerError:
        logger.debug("JWT token has invalid issuer")
        return None
    except jwt.InvalidAudienceError:
        logger.debug("JWT token has invalid audience")
        return None
    except jwt.InvalidSignatureError:
        logger.warning("JWT token has invalid signature")
        return None
    except jwt.DecodeError:
        logger.debug("JWT token is malformed")
        return None
    except jwt.MissingRequiredClaimError as e:
        logger.debug(f"JWT token missing required claim: {e.claim}")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning("JWT token rejected", extra=get_safe_error_info(e))
        return None


def extract_claims(headers: Mapping[str, str] | None) -> ClaimsSnapshot:
    """Build the caller's claims snapshot from request headers.

    Header names are matched case-insensitively. A missing, non-Bearer or
    invalid Authorization header yields an unauthenticated snapshot.

    Args:
        headers: Request headers

    Returns:
        ClaimsSnapshot for this request
    """
    normalized_headers = {k.lower(): v for k, v in (headers or {}).items()}

    auth_header = normalized_headers.get("authorization", "")
    if not auth_header.startswith(BEARER_PREFIX):
        logger.debug("No Bearer token in request headers")
        return ClaimsSnapshot.anonymous()

    payload = validate_jwt(auth_header[len(BEARER_PREFIX) :])
    if payload is None:
        return ClaimsSnapshot.anonymous()

    claims = ClaimsSnapshot.from_payload(payload)
    logger.debug(
        f"Authenticated {sanitize_for_log(claims.subject)}",
        extra={"token_claims": redact_sensitive_fields(payload)},
    )
    return claims
