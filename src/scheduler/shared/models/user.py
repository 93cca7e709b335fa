"""User account and registration models."""

from datetime import UTC, datetime

from pydantic import BaseModel, EmailStr, Field, model_validator

from src.scheduler.shared.auth import role_list
from src.scheduler.shared.auth.enums import PrimaryRole


class User(BaseModel):
    """Scheduler account - admin, coordinator or volunteer."""

    # Primary identifiers
    user_id: int = Field(..., description="Database identifier")
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    first_name: str = ""
    last_name: str = ""
    phone_number: str | None = None
    password_hash: str = Field(
        ..., repr=False, exclude=True, description="argon2 hash, never serialized"
    )

    # Access control
    role: PrimaryRole
    is_staff: bool = False
    is_active: bool = True
    operational_roles: str = Field(
        "", description="Comma-separated operational roles, e.g. 'Driver,Packer'"
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_login: datetime | None = None

    def has_stored_operational_role(self, role: str) -> bool:
        """Exact, case-sensitive check against the stored role string."""
        return role_list.has(self.operational_roles, role)

    def with_operational_role(self, role: str) -> "User":
        """Copy of this user with ``role`` added to the stored roles."""
        return self.model_copy(
            update={"operational_roles": role_list.add(self.operational_roles, role)}
        )

    def without_operational_role(self, role: str) -> "User":
        """Copy of this user with the first ``role`` entry removed."""
        return self.model_copy(
            update={
                "operational_roles": role_list.remove(self.operational_roles, role)
            }
        )


class UserRegistration(BaseModel):
    """Account registration request."""

    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone_number: str | None = None
    role: PrimaryRole
    operational_roles: str = Field(
        "", description="Comma-separated operational roles, stored as given"
    )
    is_staff: bool = False


class StaffRegistration(UserRegistration):
    """Registration for paid staff; always flagged as staff."""

    employee_id: str = ""
    department: str = ""
    position: str = ""
    hire_date: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def _force_staff(self) -> "StaffRegistration":
        self.is_staff = True
        return self


class VolunteerRegistration(UserRegistration):
    """Self-service volunteer sign-up; never staff."""

    role: PrimaryRole = PrimaryRole.VOLUNTEER

    @model_validator(mode="after")
    def _force_volunteer(self) -> "VolunteerRegistration":
        self.role = PrimaryRole.VOLUNTEER
        self.is_staff = False
        return self


class LoginResponse(BaseModel):
    """Body returned after a successful login."""

    token: str
    user_id: int
    username: str
    role: PrimaryRole
