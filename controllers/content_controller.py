"""
Agency content: social posts, campaigns and blog posts.

Records come from the deterministic generator; anything authored or changed
through the API is kept per content kind under `agency_content_<kind>` as
`{"created": [...], "updates": {id: {...}}, "deleted": [...]}` and layered
over the generated records on every read.
"""
from fastapi import HTTPException
from datetime import date, datetime, timezone, timedelta
from typing import Callable, Dict, List, NamedTuple, Optional, Type
import logging

from pydantic import BaseModel

from config import content_key
from core.content_generator import ContentGenerator, PLATFORMS, client_id_for
from core.lifecycle import (
    Lifecycle, SOCIAL_MEDIA_POST_LIFECYCLE, CAMPAIGN_LIFECYCLE, BLOG_POST_LIFECYCLE, SocialMediaPostStatus,
)
from core.date_ranges import start_of_month, end_of_month
from core.permissions import Permission
from core.session import Session
from database import KeyValueStore, load_value, save_value
from models.content import (
    SocialMediaPost, Campaign, BlogPost, ActivityItem,
    ContentTransition, ContentActions, ContentUpdate, SocialPostCreate, CalendarDay, CalendarView,
)

logger = logging.getLogger(__name__)

CHARACTER_LIMITS = {
    "twitter": 280,
    "instagram": 2200,
    "facebook": 63206,
    "linkedin": 3000,
    "tiktok": 2200,
}

# Review actions belong to the client side; every other move is an agency edit
ACTION_PERMISSIONS = {
    "approve": Permission.APPROVE_CONTENT,
    "reject": Permission.REJECT_CONTENT,
}

STATUS_TIMESTAMPS = {
    "pending_review": "submitted_at",
    "review": "submitted_at",
    "approved": "approved_at",
    "rejected": "rejected_at",
    "published": "published_at",
    "sent": "sent_at",
}


class ContentKind(NamedTuple):
    name: str
    label: str
    model: Type[BaseModel]
    lifecycle: Lifecycle
    generate: Callable[[ContentGenerator], list]
    author_field: str


SOCIAL_POSTS = ContentKind(
    "social_post", "Post", SocialMediaPost, SOCIAL_MEDIA_POST_LIFECYCLE,
    lambda g: g.generate_social_media_posts(), "created_by_id",
)
CAMPAIGNS = ContentKind(
    "campaign", "Campaign", Campaign, CAMPAIGN_LIFECYCLE,
    lambda g: g.generate_campaigns(), "created_by_id",
)
BLOG_POSTS = ContentKind(
    "blog_post", "Blog post", BlogPost, BLOG_POST_LIFECYCLE,
    lambda g: g.generate_blog_posts(), "author_id",
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _empty_state() -> dict:
    return {"created": [], "updates": {}, "deleted": []}


async def _load_state(store: KeyValueStore, kind: ContentKind) -> dict:
    state = await load_value(store, content_key(kind.name), _empty_state())
    for field, default in _empty_state().items():
        state.setdefault(field, default)
    return state


async def _save_state(store: KeyValueStore, kind: ContentKind, state: dict) -> None:
    if not await save_value(store, content_key(kind.name), state):
        raise HTTPException(status_code=503, detail="Could not save changes, please try again")


def _merge(kind: ContentKind, generated: list, state: dict) -> list:
    deleted = set(state["deleted"])
    items = []
    for item in generated + [kind.model(**doc) for doc in state["created"]]:
        if item.id in deleted:
            continue
        changes = state["updates"].get(str(item.id))
        if changes:
            item = kind.model(**{**item.model_dump(mode="json"), **changes})
        items.append(item)
    return items


async def list_content(kind: ContentKind, store: KeyValueStore, generator: ContentGenerator, session: Session) -> list:
    state = await _load_state(store, kind)
    return session.visible(_merge(kind, kind.generate(generator), state))


async def get_content(kind: ContentKind, store: KeyValueStore, generator: ContentGenerator,
                      session: Session, item_id: int):
    for item in await list_content(kind, store, generator, session):
        if item.id == item_id:
            return item
    raise HTTPException(status_code=404, detail=f"{kind.label} not found")


# ── Listing ───────────────────────────────────────────────

async def get_social_posts(store: KeyValueStore, generator: ContentGenerator, session: Session,
                           client_id: Optional[str] = None, platform: Optional[str] = None,
                           content_type: Optional[str] = None, status: Optional[str] = None) -> List[SocialMediaPost]:
    if platform and platform != "all" and platform not in PLATFORMS:
        raise HTTPException(status_code=400, detail=f"Unknown platform '{platform}'")
    posts = await list_content(SOCIAL_POSTS, store, generator, session)
    if client_id:
        posts = [p for p in posts if p.client_id == client_id]
    if platform and platform != "all":
        posts = [p for p in posts if platform in p.platforms]
    if content_type and content_type != "all":
        posts = [p for p in posts if p.content_type == content_type]
    if status and status != "all":
        posts = [p for p in posts if p.status.value == status]
    return posts


async def get_campaigns(store: KeyValueStore, generator: ContentGenerator, session: Session,
                        status: Optional[str] = None, campaign_type: Optional[str] = None,
                        client_id: Optional[str] = None) -> List[Campaign]:
    campaigns = await list_content(CAMPAIGNS, store, generator, session)
    if status and status != "all":
        campaigns = [c for c in campaigns if c.status.value == status]
    if campaign_type and campaign_type != "all":
        campaigns = [c for c in campaigns if c.type == campaign_type]
    if client_id:
        campaigns = [c for c in campaigns if c.client_id == client_id]
    return campaigns


async def get_blog_posts(store: KeyValueStore, generator: ContentGenerator, session: Session,
                         status: Optional[str] = None, client_id: Optional[str] = None,
                         search: Optional[str] = None) -> List[BlogPost]:
    posts = await list_content(BLOG_POSTS, store, generator, session)
    if status and status != "all":
        posts = [p for p in posts if p.status.value == status]
    if client_id:
        posts = [p for p in posts if p.client_id == client_id]
    if search:
        needle = search.lower()
        posts = [p for p in posts if needle in p.title.lower() or any(needle in t for t in p.tags)]
    return posts


async def get_social_calendar(store: KeyValueStore, generator: ContentGenerator, session: Session,
                              view: str = "week", on: Optional[date] = None) -> CalendarView:
    on = on or date.today()
    if view == "month":
        start, end = start_of_month(on), end_of_month(on)
    else:
        # Calendar weeks start on Sunday
        start = on - timedelta(days=(on.weekday() + 1) % 7)
        end = start + timedelta(days=6)

    posts = [p for p in await list_content(SOCIAL_POSTS, store, generator, session) if p.scheduled_date]
    by_day: Dict[date, List[SocialMediaPost]] = {}
    for post in posts:
        try:
            day = datetime.fromisoformat(post.scheduled_date).date()
        except ValueError:
            logger.warning("Post %d has unreadable scheduled date %r", post.id, post.scheduled_date)
            continue
        by_day.setdefault(day, []).append(post)

    days = []
    current = start
    while current <= end:
        days.append(CalendarDay(date=current.isoformat(), posts=by_day.get(current, [])))
        current += timedelta(days=1)

    queue = [p for p in posts if p.status in (SocialMediaPostStatus.PENDING_REVIEW, SocialMediaPostStatus.APPROVED)]
    return CalendarView(view=view, start=start.isoformat(), end=end.isoformat(), days=days, review_queue=queue)


# ── Lifecycle ─────────────────────────────────────────────

async def get_available_actions(kind: ContentKind, store: KeyValueStore, generator: ContentGenerator,
                                session: Session, item_id: int) -> ContentActions:
    item = await get_content(kind, store, generator, session, item_id)
    lifecycle = kind.lifecycle
    actions = [
        t for t in lifecycle.transitions[item.status]
        if _may_perform(session, t.action)
    ]
    return ContentActions(
        id=item.id,
        status=item.status.value,
        label=lifecycle.label(item.status),
        actions=[t.action for t in actions],
        next_states=[t.target.value for t in actions],
    )


def _may_perform(session: Session, action: str) -> bool:
    permission = ACTION_PERMISSIONS.get(action)
    if permission is not None:
        return session.can(permission)
    return session.can(Permission.EDIT_CONTENT)


async def transition_content(kind: ContentKind, store: KeyValueStore, generator: ContentGenerator,
                             session: Session, item_id: int, data: ContentTransition):
    item = await get_content(kind, store, generator, session, item_id)
    lifecycle = kind.lifecycle
    try:
        target = lifecycle.status_enum(data.target_status)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown status '{data.target_status}'")

    if lifecycle.transition(item.status, target) is None:
        raise HTTPException(
            status_code=409,
            detail=f"Cannot move {kind.label.lower()} from {item.status.value} to {target.value}",
        )
    action = next(t.action for t in lifecycle.transitions[item.status] if t.target == target)
    if not _may_perform(session, action):
        raise HTTPException(status_code=403, detail="Insufficient permissions")

    now = _now()
    changes = {"status": target.value}
    stamp = STATUS_TIMESTAMPS.get(target.value)
    if stamp and stamp in kind.model.model_fields:
        changes[stamp] = now
    if target.value == "rejected":
        changes["rejection_reason"] = data.reason
    timeline = [a.model_dump() for a in item.timeline]
    timeline.append(ActivityItem(
        id=f"activity-{len(timeline)}",
        timestamp=now,
        action=lifecycle.label(target),
        user=session.user.name,
        details=data.reason,
    ).model_dump())
    changes["timeline"] = timeline

    updated = await _apply_changes(kind, store, item_id, changes)
    logger.info("%s %d: %s -> %s by %s", kind.label, item_id, item.status.value, target.value, session.user.email)
    return kind.model(**{**item.model_dump(mode="json"), **updated})


async def _apply_changes(kind: ContentKind, store: KeyValueStore, item_id: int, changes: dict) -> dict:
    state = await _load_state(store, kind)
    key = str(item_id)
    merged = {**state["updates"].get(key, {}), **changes}
    state["updates"][key] = merged
    await _save_state(store, kind, state)
    return merged


# ── Authoring ─────────────────────────────────────────────

async def create_social_post(store: KeyValueStore, generator: ContentGenerator, session: Session,
                             data: SocialPostCreate) -> SocialMediaPost:
    unknown = [p for p in data.platforms if p not in PLATFORMS]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown platform '{unknown[0]}'")
    limit = min(CHARACTER_LIMITS.get(p, 2200) for p in data.platforms)
    if len(data.content) > limit:
        raise HTTPException(status_code=400, detail=f"Content exceeds the {limit} character limit")

    state = await _load_state(store, SOCIAL_POSTS)
    existing = SOCIAL_POSTS.generate(generator) + [SocialMediaPost(**d) for d in state["created"]]
    post = SocialMediaPost(
        id=max((p.id for p in existing), default=0) + 1,
        title=data.title,
        content=data.content,
        platforms=data.platforms,
        scheduled_date=data.scheduled_date,
        scheduled_time=data.scheduled_time,
        status=SocialMediaPostStatus.DRAFT,
        client=data.client,
        client_id=client_id_for(data.client),
        created_by=session.user.name,
        created_by_id=session.user.id,
        content_type=data.content_type,
        timeline=[ActivityItem(id="activity-0", timestamp=_now(), action="Created", user=session.user.name)],
    )
    state["created"].append(post.model_dump(mode="json"))
    await _save_state(store, SOCIAL_POSTS, state)
    logger.info("Post %d created by %s", post.id, session.user.email)
    return post


async def update_content(kind: ContentKind, store: KeyValueStore, generator: ContentGenerator,
                         session: Session, item_id: int, data: ContentUpdate):
    item = await get_content(kind, store, generator, session, item_id)
    if not session.can_edit_content(getattr(item, kind.author_field), item.status.value):
        raise HTTPException(status_code=403, detail="You can only edit your own draft or rejected content")
    changes = {
        field: value for field, value in data.model_dump(exclude_none=True).items()
        if field in kind.model.model_fields
    }
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    await _apply_changes(kind, store, item_id, changes)
    return kind.model(**{**item.model_dump(mode="json"), **changes})


async def delete_content(kind: ContentKind, store: KeyValueStore, generator: ContentGenerator,
                         session: Session, item_id: int) -> dict:
    item = await get_content(kind, store, generator, session, item_id)
    if not session.can_delete_content(getattr(item, kind.author_field), item.status.value):
        raise HTTPException(status_code=403, detail="You can only delete your own draft or rejected content")
    state = await _load_state(store, kind)
    state["deleted"].append(item_id)
    state["updates"].pop(str(item_id), None)
    await _save_state(store, kind, state)
    logger.info("%s %d deleted by %s", kind.label, item_id, session.user.email)
    return {"message": f"{kind.label} deleted"}
