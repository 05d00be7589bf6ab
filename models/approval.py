from pydantic import BaseModel, ConfigDict
from typing import Optional, Literal

from core.lifecycle import ApprovalStatus


class Approval(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: int
    title: str
    type: Literal["email", "social", "blog"]
    client: str
    client_id: Optional[str] = None
    status: ApprovalStatus
    submitted_by: str
    submitted_at: str
    due_date: str
    description: Optional[str] = None
    feedback: Optional[str] = None
    approved_at: Optional[str] = None
    reviewed_by: Optional[str] = None


class ApprovalDecision(BaseModel):
    feedback: Optional[str] = None
