from pydantic import BaseModel, EmailStr, Field, ConfigDict, model_validator
from typing import Optional, List
from datetime import datetime, timezone
import uuid

from core.permissions import Role, Permission, is_client_role


def make_initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part).upper()


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserSignup(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str
    confirm_password: str
    company_name: Optional[str] = None


class StoredUser(BaseModel):
    """A record of the `agency_users` table."""
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: f"user-{uuid.uuid4().hex[:12]}")
    name: str
    email: EmailStr
    password: str
    role: Role = Role.AGENCY_ADMIN
    client_id: Optional[str] = None
    company_name: Optional[str] = None
    has_completed_onboarding: bool = False
    is_active: bool = True
    created_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class SessionUser(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)
    id: str
    name: str
    email: EmailStr
    role: Role
    client_id: Optional[str] = None
    initials: str = ""
    has_completed_onboarding: bool = False

    @model_validator(mode="after")
    def check_client_affiliation(self):
        if is_client_role(self.role) and not self.client_id:
            raise ValueError(f"{self.role.value} users must belong to a client")
        if not is_client_role(self.role) and self.client_id:
            raise ValueError(f"{self.role.value} users cannot belong to a client")
        return self

    @classmethod
    def from_stored(cls, user: StoredUser, role: Optional[Role] = None, client_id: Optional[str] = None):
        role = role or user.role
        if role == user.role and client_id is None:
            client_id = user.client_id
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=role,
            client_id=client_id if is_client_role(role) else None,
            initials=make_initials(user.name),
            has_completed_onboarding=user.has_completed_onboarding,
        )


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUser
    redirect_to: str = "/"


class RoleSwitch(BaseModel):
    role: Role
    client_id: Optional[str] = None


class PermissionSummary(BaseModel):
    role: Role
    role_label: str
    permissions: List[Permission]
    is_agency_user: bool
    is_client_user: bool
