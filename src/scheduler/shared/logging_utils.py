"""
Logging helpers that keep user-controlled and sensitive data out of logs.

Role strings, usernames and header values arrive from clients or from
account records edited by coordinators, so they are sanitized before being
interpolated into log messages. Tokens and passwords are never logged.

Security References:
- OWASP Logging Cheat Sheet: https://cheatsheetseries.owasp.org/cheatsheets/Logging_Cheat_Sheet.html
"""

import re
from typing import Any

# Maximum length for logged user input to prevent log flooding
MAX_LOG_INPUT_LENGTH = 200

# Field names whose values should never be logged
SENSITIVE_FIELDS = {
    "password",
    "secret",
    "token",
    "authorization",
    "jti",
    "credential",
}


def sanitize_for_log(value: Any, max_length: int = MAX_LOG_INPUT_LENGTH) -> str:
    """
    Sanitize a value for safe logging by removing CRLF and limiting length.

    Args:
        value: Value to sanitize (will be converted to string)
        max_length: Maximum length of output (default: 200)

    Returns:
        Sanitized string safe for logging

    Example:
        >>> sanitize_for_log("Driver\\n[FAKE] granted")
        'Driver [FAKE] granted'
    """
    text = str(value)

    # Remove CRLF characters to prevent log injection
    text = text.replace("\r", " ").replace("\n", " ").replace("\t", " ")

    # Remove other control characters
    text = re.sub(r"[\x00-\x1f\x7f-\x9f]", " ", text)

    if len(text) > max_length:
        text = text[:max_length] + "..."

    return text


def get_safe_error_info(exception: Exception) -> dict[str, str]:
    """
    Extract the exception type only, never its message.

    Messages from token libraries can echo token contents.

    Example:
        >>> get_safe_error_info(ValueError("eyJhbGciOi..."))
        {'error_type': 'ValueError'}
    """
    return {"error_type": type(exception).__name__}


def redact_sensitive_fields(data: dict[str, Any]) -> dict[str, Any]:
    """
    Return a copy of ``data`` with sensitive fields replaced.

    Matching is case-insensitive on the field name and recurses into
    nested dictionaries.

    Example:
        >>> redact_sensitive_fields({"sub": "jdoe", "jti": "abc"})
        {'sub': 'jdoe', 'jti': '***REDACTED***'}
    """
    result = {}
    for key, value in data.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_FIELDS):
            result[key] = "***REDACTED***"
        elif isinstance(value, dict):
            result[key] = redact_sensitive_fields(value)
        else:
            result[key] = value
    return result
