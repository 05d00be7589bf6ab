from pydantic import BaseModel, Field, ConfigDict, EmailStr, field_validator
from typing import Optional, List
import uuid
import re

from core.permissions import Role

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class AgencyDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    address: str = ""
    description: str = ""
    logo: Optional[str] = None

    @field_validator("name", "email", "phone", "website", "address", "description")
    @classmethod
    def strip(cls, value: str) -> str:
        return value.strip()

    def missing_required(self) -> bool:
        return not self.name or not self.email

    def has_valid_email(self) -> bool:
        return bool(EMAIL_PATTERN.match(self.email))


class OnboardingTeamMember(BaseModel):
    id: str = Field(default_factory=lambda: f"member-{uuid.uuid4().hex[:12]}")
    name: str = Field(min_length=1)
    email: EmailStr
    role: Role = Role.AGENCY_STAFF


class OnboardingClient(BaseModel):
    id: str = Field(default_factory=lambda: f"client-{uuid.uuid4().hex[:12]}")
    name: str = Field(min_length=1)
    email: EmailStr
    phone: str = ""
    industry: str = ""


class OnboardingComplete(BaseModel):
    agency_details: AgencyDetails
    team_members: List[OnboardingTeamMember] = Field(default_factory=list)
    clients: List[OnboardingClient] = Field(default_factory=list)


class OnboardingStatus(BaseModel):
    has_completed_onboarding: bool
    agency_details: Optional[AgencyDetails] = None
    team_members: List[OnboardingTeamMember] = Field(default_factory=list)
    clients: List[OnboardingClient] = Field(default_factory=list)
