"""Pydantic models for scheduler accounts."""

from src.scheduler.shared.models.user import (
    LoginResponse,
    StaffRegistration,
    User,
    UserRegistration,
    VolunteerRegistration,
)

__all__ = [
    "LoginResponse",
    "StaffRegistration",
    "User",
    "UserRegistration",
    "VolunteerRegistration",
]
