"""
Mock content generators standing in for the agency backend.

Every generator draws from its own `random.Random` seeded with the configured
seed and the entity kind, so repeated calls return identical records and the
client names / ids referenced across entities stay consistent.
"""
import math
import random
from datetime import datetime, timezone, timedelta
from typing import Dict, List, Optional

from config import MOCK_SEED
from core.lifecycle import SocialMediaPostStatus, CampaignStatus, BlogPostStatus, MessageStatus
from models.content import (
    Client, ActivityItem, ContentComment, Attachment,
    SocialMediaEngagement, SocialMediaPost,
    EmailCampaignDetails, CampaignMetrics, DailyCampaignMetrics, TaskProgress, Campaign,
    BlogPostMetrics, SEOInfo, TrafficSource, BlogPost,
    Conversation, Message,
)
from models.project import Project

CLIENTS = [
    Client(id="client-1", name="TechCorp Industries", email="contact@techcorp.com", phone="+1 (555) 123-4567",
           industry="Technology", status="active", projects=5, revenue=124500),
    Client(id="client-2", name="Green Solutions Ltd", email="info@greensolutions.com", phone="+1 (555) 234-5678",
           industry="Sustainability", status="active", projects=3, revenue=78200),
    Client(id="client-3", name="Nova Ventures", email="hello@novaventures.io", phone="+1 (555) 345-6789",
           industry="Finance", status="pending", projects=2, revenue=32800),
    Client(id="client-4", name="Atlas Media Group", email="team@atlasmedia.com", phone="+1 (555) 456-7890",
           industry="Media", status="active", projects=7, revenue=245600),
    Client(id="client-5", name="Pinnacle Health", email="contact@pinnaclehealth.com", phone="+1 (555) 567-8901",
           industry="Healthcare", status="inactive", projects=0, revenue=15000),
    Client(id="client-6", name="Urban Development Co", email="info@urbandev.com", phone="+1 (555) 678-9012",
           industry="Real Estate", status="active", projects=4, revenue=156300),
]

CLIENTS_BY_ID: Dict[str, Client] = {c.id: c for c in CLIENTS}
CLIENTS_BY_NAME: Dict[str, Client] = {c.name: c for c in CLIENTS}

# Clients with live content work
CONTENT_CLIENTS = [
    "TechCorp Industries",
    "Green Solutions Ltd",
    "Atlas Media Group",
    "Nova Ventures",
    "Urban Development Co",
]

PLATFORMS = ["instagram", "facebook", "linkedin", "twitter", "tiktok"]

COMMENT_AUTHORS = ["John Doe", "Jane Smith", "Mike Chen", "Sarah Johnson"]
COMMENT_TEXTS = [
    "Great work on this!",
    "Looks perfect, thanks!",
    "Can we make a small adjustment?",
    "This is exactly what we needed.",
    "Let's monitor engagement closely.",
]
MESSAGE_TEXTS = [
    "Here's the updated campaign proposal...",
    "Thanks! We'll review and get back to you.",
    "Great! Let me know if you have any questions.",
    "The content looks perfect, approved!",
    "Can we make a small adjustment?",
]
BLOG_TITLES = [
    "10 Tips for Better Social Media Marketing",
    "How to Optimize Your Email Campaigns",
    "The Future of Digital Marketing",
    "Content Strategy Best Practices",
    "Building Your Brand Online",
]
BLOG_TAGS = ["marketing", "social-media", "tips", "best-practices", "digital", "strategy"]
BLOG_CATEGORIES = ["Marketing", "Best Practices", "Social Media", "Content Strategy"]
SEO_KEYWORDS = ["marketing", "social media", "digital", "strategy", "content", "engagement"]
PRIORITIES = ["urgent", "high", "medium", "low"]
DEFAULT_AUTHOR = "John Doe"
DEFAULT_AUTHOR_ID = "agency-user-1"


def client_id_for(name: str) -> Optional[str]:
    client = CLIENTS_BY_NAME.get(name)
    return client.id if client else None


class ContentGenerator:
    def __init__(self, seed: int = MOCK_SEED, now: Optional[datetime] = None):
        self.seed = seed
        self.now = now or datetime.now(timezone.utc)

    def _rng(self, kind: str) -> random.Random:
        return random.Random(f"{self.seed}:{kind}")

    # ── primitives ────────────────────────────────────────

    @staticmethod
    def _randint(rng: random.Random, low: float, high: float) -> int:
        # Bounds may be fractional (e.g. a share of another metric)
        return math.floor(rng.random() * (high - low + 1)) + math.floor(low) if high >= low else math.floor(low)

    @staticmethod
    def _uniform(rng: random.Random, low: float, high: float) -> float:
        return rng.random() * (high - low) + low

    def _pick(self, rng: random.Random, items: list):
        return items[self._randint(rng, 0, len(items) - 1)]

    def days_ago(self, days: float) -> str:
        return (self.now - timedelta(days=days)).isoformat()

    def hours_ago(self, hours: float) -> str:
        return (self.now - timedelta(hours=hours)).isoformat()

    # ── nested metrics ────────────────────────────────────

    def _engagement(self, rng) -> SocialMediaEngagement:
        reach = self._randint(rng, 1000, 10000)
        likes = self._randint(rng, 50, reach * 0.3)
        comments = self._randint(rng, 5, likes * 0.1)
        shares = self._randint(rng, 2, likes * 0.05)
        saves = self._randint(rng, 1, likes * 0.03)
        total = likes + comments + shares + saves
        rate = (total / reach) * 100 if reach > 0 else 0
        return SocialMediaEngagement(
            likes=likes, comments=comments, shares=shares, saves=saves, reach=reach,
            engagement_rate=round(rate, 1),
            last_synced=self.hours_ago(self._randint(rng, 1, 24)),
        )

    def _campaign_metrics(self, rng) -> CampaignMetrics:
        sent = self._randint(rng, 5000, 50000)
        delivered = math.floor(sent * self._uniform(rng, 0.95, 0.99))
        opened = math.floor(delivered * self._uniform(rng, 0.20, 0.40))
        clicked = math.floor(opened * self._uniform(rng, 0.03, 0.08))
        converted = math.floor(clicked * self._uniform(rng, 0.02, 0.05))
        revenue = converted * self._uniform(rng, 20, 100)
        bounced = sent - delivered
        return CampaignMetrics(
            sent=sent,
            delivered=delivered,
            opened=opened,
            clicked=clicked,
            converted=converted,
            revenue=round(revenue),
            open_rate=round(opened / delivered * 100, 1) if delivered else 0.0,
            click_rate=round(clicked / opened * 100, 1) if opened else 0.0,
            conversion_rate=round(converted / clicked * 100, 1) if clicked else 0.0,
            bounce_rate=round(bounced / sent * 100, 1),
            unsubscribed=self._randint(rng, 0, 10),
            roi=round(self._uniform(rng, 150, 300), 1),
            last_synced=self.hours_ago(self._randint(rng, 1, 12)),
        )

    def _daily_campaign_metrics(self, rng, days: int) -> List[DailyCampaignMetrics]:
        metrics = []
        base_sent = self._randint(rng, 5000, 10000)
        for i in range(days):
            # Most sends land on the first day
            sent = base_sent if i == 0 else self._randint(rng, 0, 500)
            opened = math.floor(sent * self._uniform(rng, 0.20, 0.40))
            clicked = math.floor(opened * self._uniform(rng, 0.03, 0.08))
            revenue = clicked * self._uniform(rng, 20, 100)
            metrics.append(DailyCampaignMetrics(
                date=self.days_ago(days - i - 1), sent=sent, opened=opened, clicked=clicked, revenue=round(revenue),
            ))
        return metrics

    def _blog_metrics(self, rng) -> BlogPostMetrics:
        return BlogPostMetrics(
            views=self._randint(rng, 500, 5000),
            average_time_on_page=self._randint(rng, 120, 480),
            bounce_rate=round(self._uniform(rng, 20, 50), 1),
            backlinks=self._randint(rng, 0, 15),
            likes=self._randint(rng, 10, 100),
            comments=self._randint(rng, 2, 30),
            shares=self._randint(rng, 1, 20),
            last_synced=self.hours_ago(self._randint(rng, 1, 24)),
        )

    def _seo(self, rng) -> SEOInfo:
        score = self._randint(rng, 60, 95)
        keywords = SEO_KEYWORDS[:self._randint(rng, 3, 6)]
        return SEOInfo(
            score=score,
            meta_description="Discover the best practices for social media marketing and engagement strategies.",
            meta_keywords=keywords,
            og_image="/images/og-default.jpg",
            canonical_url="https://example.com/blog/post",
            title_length=self._randint(rng, 40, 60),
            description_length=self._randint(rng, 120, 160),
            keyword_density={kw: self._uniform(rng, 1, 5) for kw in keywords},
        )

    def _traffic_sources(self, rng) -> List[TrafficSource]:
        total = self._randint(rng, 1000, 5000)
        shares = [("organic", 45), ("social", 30), ("direct", 15), ("referral", 10)]
        return [
            TrafficSource(source=source, visits=math.floor(total * pct / 100), percentage=pct)
            for source, pct in shares
        ]

    def _timeline(self, rng, user: str, actions: List[str]) -> List[ActivityItem]:
        items = []
        offset = 7
        for index, action in enumerate(actions):
            items.append(ActivityItem(
                id=f"activity-{index}",
                timestamp=self.days_ago(offset),
                action=action,
                user=user,
                details="Content approved for publishing" if "approved" in action.lower() else None,
            ))
            offset -= self._randint(rng, 1, 2)
        return sorted(items, key=lambda item: item.timestamp)

    def _comments(self, rng, count: Optional[int] = None) -> List[ContentComment]:
        if count is None:
            count = self._randint(rng, 2, 5)
        return [
            ContentComment(
                id=f"comment-{i}",
                author=self._pick(rng, COMMENT_AUTHORS),
                author_id=f"user-{self._randint(rng, 1, 10)}",
                content=self._pick(rng, COMMENT_TEXTS),
                timestamp=self.hours_ago(self._randint(rng, 1, 48)),
            )
            for i in range(count)
        ]

    # ── entities ──────────────────────────────────────────

    def generate_social_media_posts(self, count: int = 45) -> List[SocialMediaPost]:
        rng = self._rng("social_posts")
        statuses = [
            SocialMediaPostStatus.DRAFT, SocialMediaPostStatus.PENDING_REVIEW, SocialMediaPostStatus.APPROVED,
            SocialMediaPostStatus.PUBLISHED, SocialMediaPostStatus.REJECTED,
        ]
        titles = {"reel": "Behind the Scenes", "story": "Product Launch", "post": "Summer Sale Campaign"}
        posts = []
        for i in range(1, count + 1):
            status = self._pick(rng, statuses)
            platforms = [self._pick(rng, PLATFORMS)]
            client = self._pick(rng, CONTENT_CLIENTS)
            content_type = self._pick(rng, ["post", "story", "reel"])
            post = SocialMediaPost(
                id=i,
                title=titles[content_type],
                content=f"Check out our amazing {content_type} content for {client}!",
                platforms=platforms,
                scheduled_date=self.days_ago(self._randint(rng, 0, 30)),
                scheduled_time=f"{self._randint(rng, 9, 17)}:00",
                status=status,
                has_image=True,
                image_url=f"/images/post-{i}.jpg",
                client=client,
                client_id=client_id_for(client),
                created_by=DEFAULT_AUTHOR,
                created_by_id=DEFAULT_AUTHOR_ID,
                timezone="America/New_York",
                content_type=content_type,
            )
            if status == SocialMediaPostStatus.PUBLISHED:
                post.published_at = self.days_ago(self._randint(rng, 0, 7))
                post.engagement = self._engagement(rng)
                post.timeline = self._timeline(rng, DEFAULT_AUTHOR, [
                    "Created", "Submitted for review", "Approved by Client Admin",
                    "Published automatically", "Metrics synced from Instagram API",
                ])
                post.comments = self._comments(rng)
            elif status == SocialMediaPostStatus.APPROVED:
                post.approved_at = self.days_ago(self._randint(rng, 1, 3))
                post.timeline = self._timeline(rng, DEFAULT_AUTHOR, [
                    "Created", "Submitted for review", "Approved by Client Admin",
                ])
            elif status == SocialMediaPostStatus.PENDING_REVIEW:
                post.submitted_at = self.days_ago(self._randint(rng, 0, 2))
                post.timeline = self._timeline(rng, DEFAULT_AUTHOR, ["Created", "Submitted for review"])
            elif status == SocialMediaPostStatus.REJECTED:
                post.rejected_at = self.days_ago(self._randint(rng, 1, 3))
                post.rejection_reason = "Please adjust the tone to be more professional."
                post.timeline = self._timeline(rng, DEFAULT_AUTHOR, [
                    "Created", "Submitted for review", "Rejected by Client Admin",
                ])
            else:
                post.timeline = self._timeline(rng, DEFAULT_AUTHOR, ["Created"])
            posts.append(post)
        return posts

    def generate_campaigns(self, count: int = 28) -> List[Campaign]:
        rng = self._rng("campaigns")
        statuses = [
            CampaignStatus.DRAFT, CampaignStatus.REVIEW, CampaignStatus.APPROVED, CampaignStatus.SCHEDULED,
            CampaignStatus.SENT, CampaignStatus.ACTIVE, CampaignStatus.COMPLETED,
        ]
        names = {"email": "Summer Newsletter", "social": "Product Launch Campaign", "display": "Display Ad Campaign"}
        campaigns = []
        for i in range(1, count + 1):
            status = self._pick(rng, statuses)
            campaign_type = self._pick(rng, ["email", "social", "display"])
            client = self._pick(rng, CONTENT_CLIENTS)
            campaign = Campaign(
                id=i,
                name=names[campaign_type],
                description=f"{campaign_type} campaign for {client}",
                client=client,
                client_id=client_id_for(client),
                status=status,
                type=campaign_type,
                progress=100 if status == CampaignStatus.COMPLETED else self._randint(rng, 0, 90),
                due_date=self.days_ago(self._randint(rng, -30, 30)),
                priority=self._pick(rng, PRIORITIES),
                team=["John Doe", "Alice Smith"],
                tasks=TaskProgress(completed=self._randint(rng, 5, 15), total=20),
                created_by=DEFAULT_AUTHOR,
                created_by_id=DEFAULT_AUTHOR_ID,
                budget=self._randint(rng, 10000, 50000),
            )
            if campaign_type == "email":
                campaign.email_details = EmailCampaignDetails(
                    subject="Summer Sale - Up to 50% Off!",
                    from_email="marketing@example.com",
                    from_name="Marketing Team",
                    reply_to="support@example.com",
                    preview_text="Don't miss out on our biggest sale of the year!",
                )
            if status in (CampaignStatus.SENT, CampaignStatus.ACTIVE, CampaignStatus.COMPLETED):
                campaign.sent_at = self.days_ago(self._randint(rng, 0, 10))
                campaign.metrics = self._campaign_metrics(rng)
                campaign.daily_metrics = self._daily_campaign_metrics(rng, 7)
                campaign.timeline = self._timeline(rng, DEFAULT_AUTHOR, [
                    "Created", "Submitted for review", "Approved by Client Admin",
                    "Scheduled for send", "Campaign sent",
                ])
                campaign.comments = self._comments(rng)
            elif status in (CampaignStatus.APPROVED, CampaignStatus.SCHEDULED):
                campaign.approved_at = self.days_ago(self._randint(rng, 1, 3))
                campaign.scheduled_send_date = self.days_ago(self._randint(rng, -7, 7))
                campaign.timeline = self._timeline(rng, DEFAULT_AUTHOR, [
                    "Created", "Submitted for review", "Approved by Client Admin",
                ])
            elif status == CampaignStatus.REVIEW:
                campaign.submitted_at = self.days_ago(self._randint(rng, 0, 2))
                campaign.timeline = self._timeline(rng, DEFAULT_AUTHOR, ["Created", "Submitted for review"])
            campaigns.append(campaign)
        return campaigns

    def generate_blog_posts(self, count: int = 35) -> List[BlogPost]:
        rng = self._rng("blog_posts")
        statuses = [
            BlogPostStatus.DRAFT, BlogPostStatus.PENDING_REVIEW, BlogPostStatus.APPROVED, BlogPostStatus.PUBLISHED,
        ]
        posts = []
        for i in range(1, count + 1):
            status = self._pick(rng, statuses)
            client = self._pick(rng, CONTENT_CLIENTS)
            title = self._pick(rng, BLOG_TITLES)
            post = BlogPost(
                id=i,
                title=title,
                content=f"Full blog post content for {title}...",
                excerpt=f"Discover the best practices for {title.lower()}.",
                author=DEFAULT_AUTHOR,
                author_id=DEFAULT_AUTHOR_ID,
                client=client,
                client_id=client_id_for(client),
                status=status,
                featured_image=f"/images/blog-{i}.jpg",
                tags=BLOG_TAGS[:self._randint(rng, 2, 4)],
                categories=[self._pick(rng, BLOG_CATEGORIES)],
                reading_time=self._randint(rng, 3, 10),
            )
            if status == BlogPostStatus.PUBLISHED:
                post.published_at = self.days_ago(self._randint(rng, 0, 30))
                post.metrics = self._blog_metrics(rng)
                post.seo = self._seo(rng)
                post.traffic_sources = self._traffic_sources(rng)
                post.timeline = self._timeline(rng, DEFAULT_AUTHOR, [
                    "Created", "Submitted for review", "Approved by Client Admin", "Published",
                ])
                post.comments = self._comments(rng)
            elif status == BlogPostStatus.APPROVED:
                post.approved_at = self.days_ago(self._randint(rng, 1, 3))
                post.seo = self._seo(rng)
                post.timeline = self._timeline(rng, DEFAULT_AUTHOR, [
                    "Created", "Submitted for review", "Approved by Client Admin",
                ])
            elif status == BlogPostStatus.PENDING_REVIEW:
                post.submitted_at = self.days_ago(self._randint(rng, 0, 2))
                post.seo = self._seo(rng)
                post.timeline = self._timeline(rng, DEFAULT_AUTHOR, ["Created", "Submitted for review"])
            else:
                post.timeline = self._timeline(rng, DEFAULT_AUTHOR, ["Created"])
            posts.append(post)
        return posts

    def generate_conversations(self, count: int = 5) -> List[Conversation]:
        rng = self._rng("conversations")
        conversations = []
        for i in range(1, count + 1):
            client = self._pick(rng, CONTENT_CLIENTS)
            conversations.append(Conversation(
                id=f"conv-{i}",
                client_id=client_id_for(client),
                client_name=client,
                agency_user_id=DEFAULT_AUTHOR_ID,
                agency_user_name=DEFAULT_AUTHOR,
                last_message_at=self.hours_ago(self._randint(rng, 1, 48)),
                unread_count=self._randint(rng, 0, 3),
                participants=[DEFAULT_AUTHOR_ID, f"client-{i}"],
            ))
        return conversations

    def generate_messages(self, conversation_id: str, count: Optional[int] = None) -> List[Message]:
        rng = self._rng(f"messages:{conversation_id}")
        if count is None:
            count = self._randint(rng, 5, 15)
        senders = [
            {"name": DEFAULT_AUTHOR, "id": DEFAULT_AUTHOR_ID, "role": "agency"},
            {"name": "Jane Smith", "id": "client-user-1", "role": "client"},
        ]
        messages = []
        for i in range(count):
            sender = senders[i % 2]
            recipient = senders[(i + 1) % 2]
            sent_at = self.hours_ago(count - i)
            read_at = None if i % 2 == 0 else self.hours_ago(count - i - 1)
            attachments = []
            if i == 0:
                attachments = [Attachment(
                    id="file-1", name="campaign-proposal.pdf", url="/files/campaign-proposal.pdf",
                    type="application/pdf", size=2400000, uploaded_at=sent_at,
                )]
            messages.append(Message(
                id=i + 1,
                content=MESSAGE_TEXTS[i % len(MESSAGE_TEXTS)],
                sender=sender["name"],
                sender_id=sender["id"],
                sender_role=sender["role"],
                recipient=recipient["name"],
                recipient_id=recipient["id"],
                status=MessageStatus.READ if read_at else MessageStatus.DELIVERED,
                sent_at=sent_at,
                delivered_at=sent_at,
                read_at=read_at,
                conversation_id=conversation_id,
                is_read=bool(read_at),
                attachments=attachments,
            ))
        return messages

    def generate_projects(self, count: int = 10) -> List[Project]:
        rng = self._rng("projects")
        statuses = ["planning", "in-progress", "review", "completed", "on-hold"]
        names = ["Website Redesign", "Brand Identity Package", "Marketing Campaign", "SEO Optimization"]
        projects = []
        for i in range(1, count + 1):
            status = self._pick(rng, statuses)
            client = self._pick(rng, CONTENT_CLIENTS)
            files = []
            if self._randint(rng, 0, 1) == 1:
                files = [Attachment(
                    id="file-1", name="project-deliverable.pdf", url="/files/project-deliverable.pdf",
                    type="application/pdf", size=1500000,
                    uploaded_at=self.days_ago(self._randint(rng, 1, 7)), uploaded_by=DEFAULT_AUTHOR,
                )]
            projects.append(Project(
                id=i,
                name=self._pick(rng, names),
                description=f"Project description for {client}",
                client=client,
                client_id=client_id_for(client),
                status=status,
                progress=100 if status == "completed" else self._randint(rng, 10, 90),
                budget=self._randint(rng, 20000, 100000),
                spent=self._randint(rng, 18000, 95000) if status == "completed" else None,
                due_date=self.days_ago(self._randint(rng, -30, 30)),
                start_date=self.days_ago(self._randint(rng, 30, 60)),
                priority=self._pick(rng, PRIORITIES),
                team=["John Doe", "Alice Smith"],
                tasks=TaskProgress(completed=self._randint(rng, 5, 18), total=20),
                created_by=DEFAULT_AUTHOR,
                files=files,
                timeline=self._timeline(rng, DEFAULT_AUTHOR, [
                    "Project created", "Kickoff meeting completed", "First milestone reached",
                ]),
                comments=self._comments(rng, self._randint(rng, 1, 3)),
            ))
        return projects
