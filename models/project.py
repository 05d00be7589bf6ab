from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Literal

from models.content import ActivityItem, ContentComment, Attachment, TaskProgress


class ProjectStatus:
    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"


ProjectStatusValue = Literal["planning", "in-progress", "review", "completed", "on-hold"]
Priority = Literal["urgent", "high", "medium", "low"]


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1)
    client: str = Field(min_length=1)
    status: ProjectStatusValue = ProjectStatus.PLANNING
    progress: int = Field(default=0, ge=0, le=100)
    due_date: str
    priority: Priority = "medium"
    team: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    budget: Optional[int] = None


class Project(ProjectCreate):
    model_config = ConfigDict(extra="ignore")
    id: int
    client_id: Optional[str] = None
    spent: Optional[int] = None
    start_date: Optional[str] = None
    tasks: Optional[TaskProgress] = None
    created_by: Optional[str] = None
    created_by_id: Optional[str] = None
    files: List[Attachment] = Field(default_factory=list)
    timeline: List[ActivityItem] = Field(default_factory=list)
    comments: List[ContentComment] = Field(default_factory=list)


class ProjectStatusUpdate(BaseModel):
    status: ProjectStatusValue


class ProjectProgressUpdate(BaseModel):
    progress: int = Field(ge=0, le=100)
