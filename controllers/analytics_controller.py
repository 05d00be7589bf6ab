from datetime import datetime, timezone, timedelta
from typing import List, Optional

from controllers.content_controller import list_content, SOCIAL_POSTS, CAMPAIGNS, BLOG_POSTS
from core.content_generator import ContentGenerator, PLATFORMS
from core.lifecycle import SocialMediaPostStatus, CampaignStatus, BlogPostStatus
from core.session import Session
from database import KeyValueStore

CHART_POINTS = 7


def _fallback_date(index: int) -> str:
    return (datetime.now(timezone.utc) - timedelta(days=CHART_POINTS - index)).isoformat()


def _rate(part: float, whole: float) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


async def get_analytics(store: KeyValueStore, generator: ContentGenerator, session: Session,
                        client_id: Optional[str] = None) -> dict:
    posts = await list_content(SOCIAL_POSTS, store, generator, session)
    campaigns = await list_content(CAMPAIGNS, store, generator, session)
    blogs = await list_content(BLOG_POSTS, store, generator, session)
    if client_id:
        posts = [p for p in posts if p.client_id == client_id]
        campaigns = [c for c in campaigns if c.client_id == client_id]
        blogs = [b for b in blogs if b.client_id == client_id]

    published_posts = [p for p in posts if p.status == SocialMediaPostStatus.PUBLISHED and p.engagement]
    reporting_campaigns = [
        c for c in campaigns if c.metrics and c.status in (CampaignStatus.SENT, CampaignStatus.ACTIVE)
    ]
    published_blogs = [b for b in blogs if b.status == BlogPostStatus.PUBLISHED and b.metrics]

    engagements = sum(
        p.engagement.likes + p.engagement.comments + p.engagement.shares + p.engagement.saves
        for p in published_posts
    )
    reach = sum(p.engagement.reach for p in published_posts)
    views = sum(b.metrics.views for b in published_blogs)

    return {
        "overview": {
            "total_views": views,
            "total_engagements": engagements,
            "engagement_rate": _rate(engagements, reach),
            "total_reach": reach,
            "campaign_revenue": sum(c.metrics.revenue for c in reporting_campaigns),
        },
        "platform_stats": _platform_stats(published_posts),
        "social_media": [
            {
                "date": p.published_at or _fallback_date(i),
                "likes": p.engagement.likes,
                "comments": p.engagement.comments,
                "shares": p.engagement.shares,
                "reach": p.engagement.reach,
            }
            for i, p in enumerate(published_posts[:CHART_POINTS])
        ],
        "campaigns": [
            {
                "date": c.sent_at or _fallback_date(i),
                "opened": c.metrics.opened,
                "clicked": c.metrics.clicked,
                "revenue": c.metrics.revenue,
            }
            for i, c in enumerate(reporting_campaigns[:CHART_POINTS])
        ],
        "blogs": [
            {
                "date": b.published_at or _fallback_date(i),
                "views": b.metrics.views,
                "likes": b.metrics.likes,
                "comments": b.metrics.comments,
            }
            for i, b in enumerate(published_blogs[:CHART_POINTS])
        ],
    }


def _platform_stats(posts) -> List[dict]:
    stats = []
    for platform in PLATFORMS:
        on_platform = [p for p in posts if platform in p.platforms]
        if not on_platform:
            continue
        engagements = sum(p.engagement.likes + p.engagement.comments + p.engagement.shares for p in on_platform)
        reach = sum(p.engagement.reach for p in on_platform)
        stats.append({
            "platform": platform,
            "posts": len(on_platform),
            "engagements": engagements,
            "reach": reach,
            "engagement_rate": _rate(engagements, reach),
        })
    return stats
