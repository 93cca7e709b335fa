"""Comma-separated operational role lists.

The operational roles of an identity are persisted as a single string
field (``"Driver,Packer"``) and copied verbatim into the access token's
``operationalRoles`` claim. This module converts between that string and
a list of role names.

Two splitting disciplines coexist and are both relied on:

- ``decode`` (and the claim readers in ``roles.py``) strip whitespace and
  drop empty segments.
- ``add``, ``remove`` and ``has`` work on the raw ``split(",")`` result,
  exact and case-sensitive, without stripping.

Stored values written by older account tooling depend on the raw
behaviour, so the two are deliberately not unified.
"""

from __future__ import annotations

from collections.abc import Iterable

ROLE_DELIMITER = ","


def encode(roles: Iterable[str]) -> str:
    """Join role names in iteration order. An empty collection gives ``""``."""
    return ROLE_DELIMITER.join(roles)


def decode(value: str | None) -> list[str]:
    """Split a stored role string, stripping segments and dropping empties.

    Duplicates are kept; deduplication only happens in ``add``.

    Examples:
        >>> decode(" Driver, ,Packer,Driver")
        ['Driver', 'Packer', 'Driver']
        >>> decode(None)
        []
    """
    if not value:
        return []

    return [
        segment.strip()
        for segment in value.split(ROLE_DELIMITER)
        if segment.strip()
    ]


def add(current_roles: str | None, role_to_add: str) -> str:
    """Return ``current_roles`` with ``role_to_add`` appended if missing.

    An empty list yields ``role_to_add`` exactly as given, whitespace
    included.
    """
    if not current_roles:
        return role_to_add

    roles = current_roles.split(ROLE_DELIMITER)
    if role_to_add not in roles:
        roles.append(role_to_add)

    return encode(roles)


def remove(current_roles: str | None, role_to_remove: str) -> str:
    """Return ``current_roles`` without the first exact match of a role."""
    if not current_roles:
        return ""

    roles = current_roles.split(ROLE_DELIMITER)
    if role_to_remove in roles:
        roles.remove(role_to_remove)

    return encode(roles)


def has(current_roles: str | None, role: str) -> bool:
    """Exact, case-sensitive membership test against the raw split."""
    if not current_roles:
        return False

    return role in current_roles.split(ROLE_DELIMITER)
