from pydantic import BaseModel, model_validator
from typing import Optional, Literal
from datetime import datetime


class DateRange(BaseModel):
    start: datetime
    end: datetime

    @model_validator(mode="after")
    def check_order(self):
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self


class DashboardStats(BaseModel):
    monthly_revenue: float
    active_clients: int
    active_projects: int
    pending_approvals: int
    revenue_change: float
    clients_change: int
    projects_change: int
    approvals_change: int


class DeadlineItem(BaseModel):
    id: int
    type: Literal["project", "invoice", "approval"]
    title: str
    due_date: str
    client: str
    client_id: Optional[str] = None
    is_overdue: bool
    days_until_due: int
    url: Optional[str] = None


class TeamMember(BaseModel):
    id: str
    name: str
    initials: str
    project_count: int
    capacity: int
    utilization: float


class RevenuePoint(BaseModel):
    month: str
    revenue: float
    previous_revenue: Optional[float] = None


class RecentClient(BaseModel):
    id: str
    name: str
    email: str
    status: str
    projects: int
    revenue: str
    last_activity: str


class CampaignActivity(BaseModel):
    id: int
    type: Literal["email", "social", "blog"]
    title: str
    client: str
    client_id: Optional[str] = None
    time: str
    status: Literal["approved", "pending", "rejected"]


class Notification(BaseModel):
    id: int
    type: Literal["approval", "invoice", "deadline", "campaign"]
    title: str
    message: str
    timestamp: str
    read: bool
    action_url: Optional[str] = None
