"""Password hashing helpers (argon2 via pwdlib)."""

from __future__ import annotations

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

_password_hash = PasswordHash.recommended()


def hash_password(password: str) -> str:
    """Hash ``password`` for storage on the user record.

    Raises:
        ValueError: If the password is empty
    """
    if not password:
        raise ValueError("Password must not be empty")

    return _password_hash.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Return ``True`` if ``password`` matches ``hashed``.

    A stored value that is not a recognised hash never matches.
    """
    if not hashed:
        return False

    try:
        return _password_hash.verify(password, hashed)
    except UnknownHashError:
        return False


__all__ = ["hash_password", "verify_password"]
