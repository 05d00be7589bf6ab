from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict, Literal

from core.lifecycle import SocialMediaPostStatus, CampaignStatus, BlogPostStatus, MessageStatus

Priority = Literal["urgent", "high", "medium", "low"]


class Client(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    industry: Optional[str] = None
    status: Literal["active", "pending", "inactive"] = "active"
    projects: int = 0
    revenue: float = 0.0


class ActivityItem(BaseModel):
    id: str
    timestamp: str
    action: str
    user: str
    details: Optional[str] = None


class ContentComment(BaseModel):
    id: str
    author: str
    author_id: str
    content: str
    timestamp: str
    edited_at: Optional[str] = None


class Attachment(BaseModel):
    id: str
    name: str
    url: str
    type: str
    size: int
    uploaded_at: Optional[str] = None
    uploaded_by: Optional[str] = None


# ── Social Media ──────────────────────────────────────────

class SocialMediaEngagement(BaseModel):
    likes: int
    comments: int
    shares: int
    saves: int
    reach: int
    engagement_rate: float
    last_synced: Optional[str] = None


class SocialMediaPost(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: int
    title: Optional[str] = None
    content: str
    platforms: List[str]
    scheduled_date: Optional[str] = None
    scheduled_time: Optional[str] = None
    published_at: Optional[str] = None
    status: SocialMediaPostStatus
    has_image: bool = False
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    client: str
    client_id: Optional[str] = None
    created_by: Optional[str] = None
    created_by_id: Optional[str] = None
    submitted_at: Optional[str] = None
    approved_at: Optional[str] = None
    rejected_at: Optional[str] = None
    rejection_reason: Optional[str] = None
    timezone: Optional[str] = None
    content_type: Optional[Literal["post", "story", "reel"]] = None
    engagement: Optional[SocialMediaEngagement] = None
    timeline: List[ActivityItem] = Field(default_factory=list)
    comments: List[ContentComment] = Field(default_factory=list)


# ── Campaigns ─────────────────────────────────────────────

class EmailCampaignDetails(BaseModel):
    subject: str
    from_email: str
    from_name: str
    reply_to: Optional[str] = None
    preview_text: Optional[str] = None


class CampaignMetrics(BaseModel):
    sent: int
    delivered: int
    opened: int
    clicked: int
    converted: int
    revenue: int
    open_rate: float
    click_rate: float
    conversion_rate: float
    bounce_rate: float
    unsubscribed: int
    roi: float
    last_synced: Optional[str] = None


class DailyCampaignMetrics(BaseModel):
    date: str
    sent: int
    opened: int
    clicked: int
    revenue: int


class TaskProgress(BaseModel):
    completed: int
    total: int


class Campaign(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: int
    name: str
    description: Optional[str] = None
    client: str
    client_id: Optional[str] = None
    status: CampaignStatus
    type: Literal["email", "social", "display", "other"] = "other"
    progress: int
    due_date: str
    scheduled_send_date: Optional[str] = None
    sent_at: Optional[str] = None
    priority: Priority
    team: List[str] = Field(default_factory=list)
    tasks: TaskProgress
    created_by: Optional[str] = None
    created_by_id: Optional[str] = None
    submitted_at: Optional[str] = None
    approved_at: Optional[str] = None
    rejected_at: Optional[str] = None
    rejection_reason: Optional[str] = None
    budget: Optional[int] = None
    email_details: Optional[EmailCampaignDetails] = None
    metrics: Optional[CampaignMetrics] = None
    daily_metrics: List[DailyCampaignMetrics] = Field(default_factory=list)
    timeline: List[ActivityItem] = Field(default_factory=list)
    comments: List[ContentComment] = Field(default_factory=list)


# ── Blog ──────────────────────────────────────────────────

class BlogPostMetrics(BaseModel):
    views: int
    average_time_on_page: int
    bounce_rate: float
    backlinks: int
    likes: int
    comments: int
    shares: int
    last_synced: Optional[str] = None


class SEOInfo(BaseModel):
    score: int
    meta_description: Optional[str] = None
    meta_keywords: List[str] = Field(default_factory=list)
    og_image: Optional[str] = None
    canonical_url: Optional[str] = None
    title_length: Optional[int] = None
    description_length: Optional[int] = None
    keyword_density: Dict[str, float] = Field(default_factory=dict)


class TrafficSource(BaseModel):
    source: str
    visits: int
    percentage: float


class BlogPost(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: int
    title: str
    content: str
    excerpt: Optional[str] = None
    author: Optional[str] = None
    author_id: Optional[str] = None
    client: str
    client_id: Optional[str] = None
    status: BlogPostStatus
    published_at: Optional[str] = None
    scheduled_publish_date: Optional[str] = None
    featured_image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    submitted_at: Optional[str] = None
    approved_at: Optional[str] = None
    rejected_at: Optional[str] = None
    rejection_reason: Optional[str] = None
    reading_time: Optional[int] = None
    metrics: Optional[BlogPostMetrics] = None
    seo: Optional[SEOInfo] = None
    traffic_sources: List[TrafficSource] = Field(default_factory=list)
    timeline: List[ActivityItem] = Field(default_factory=list)
    comments: List[ContentComment] = Field(default_factory=list)


# ── Messages ──────────────────────────────────────────────

class Conversation(BaseModel):
    id: str
    client_id: Optional[str] = None
    client_name: str
    agency_user_id: Optional[str] = None
    agency_user_name: Optional[str] = None
    last_message_at: Optional[str] = None
    unread_count: int = 0
    participants: List[str] = Field(default_factory=list)


class Message(BaseModel):
    id: int
    content: str
    sender: str
    sender_id: str
    sender_role: Literal["agency", "client"]
    recipient: str
    recipient_id: str
    status: MessageStatus
    sent_at: Optional[str] = None
    delivered_at: Optional[str] = None
    read_at: Optional[str] = None
    conversation_id: str
    is_read: bool = False
    attachments: List[Attachment] = Field(default_factory=list)


class MessageCreate(BaseModel):
    content: str = Field(max_length=5000)


# ── Lifecycle actions ─────────────────────────────────────

class ContentTransition(BaseModel):
    target_status: str
    reason: Optional[str] = None


class ContentActions(BaseModel):
    id: int
    status: str
    label: str
    actions: List[str]
    next_states: List[str]


# ── Authoring ─────────────────────────────────────────────

class SocialPostCreate(BaseModel):
    content: str = Field(min_length=1)
    platforms: List[str] = Field(min_length=1)
    client: str
    scheduled_date: str
    scheduled_time: str = "09:00"
    title: Optional[str] = None
    content_type: Literal["post", "story", "reel"] = "post"


class CalendarDay(BaseModel):
    date: str
    posts: List[SocialMediaPost] = Field(default_factory=list)


class CalendarView(BaseModel):
    view: Literal["week", "month"]
    start: str
    end: str
    days: List[CalendarDay]
    review_queue: List[SocialMediaPost] = Field(default_factory=list)


class ContentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    excerpt: Optional[str] = None
    scheduled_date: Optional[str] = None
    scheduled_time: Optional[str] = None
    tags: Optional[List[str]] = None
