from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal

from core.permissions import Role


class TeamUserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    role: Role = Role.CLIENT_USER
    client_id: Optional[str] = None
    password: Optional[str] = None


class TeamUserUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[Role] = None
    status: Optional[Literal["active", "inactive"]] = None


class TeamUser(BaseModel):
    id: str
    name: str
    email: str
    role: Role
    role_label: str
    client_id: Optional[str] = None
    status: Literal["active", "inactive"]
    joined_date: str
