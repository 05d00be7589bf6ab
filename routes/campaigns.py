from fastapi import APIRouter, Depends
from typing import List, Literal, Optional
from datetime import date
from models.content import (
    Campaign, SocialMediaPost, SocialPostCreate, ContentTransition, ContentActions, ContentUpdate, CalendarView,
)
from core.auth import get_store, get_generator, check_permission, require_session
from core.content_generator import ContentGenerator
from core.permissions import Permission
from core.session import Session
from controllers import content_controller
from controllers.content_controller import CAMPAIGNS, SOCIAL_POSTS
from database import KeyValueStore

router = APIRouter(prefix="/campaigns", tags=["campaigns"])


# ── Social calendar ───────────────────────────────────────

@router.get("/calendar", response_model=CalendarView)
async def get_social_calendar(view: Literal["week", "month"] = "week", on: Optional[date] = None, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.APPROVE_CONTENT))):
    return await content_controller.get_social_calendar(store, generator, session, view, on)


# ── Social posts ──────────────────────────────────────────

@router.get("/posts", response_model=List[SocialMediaPost])
async def get_social_posts(client_id: Optional[str] = None, platform: Optional[str] = None, content_type: Optional[str] = None, status: Optional[str] = None, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.CREATE_CONTENT))):
    return await content_controller.get_social_posts(store, generator, session, client_id, platform, content_type, status)


@router.post("/posts", response_model=SocialMediaPost)
async def create_social_post(data: SocialPostCreate, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.CREATE_CONTENT))):
    return await content_controller.create_social_post(store, generator, session, data)


@router.get("/posts/{post_id}", response_model=SocialMediaPost)
async def get_social_post(post_id: int, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.CREATE_CONTENT))):
    return await content_controller.get_content(SOCIAL_POSTS, store, generator, session, post_id)


@router.get("/posts/{post_id}/client", response_model=SocialMediaPost)
async def get_social_post_for_review(post_id: int, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.APPROVE_CONTENT))):
    return await content_controller.get_content(SOCIAL_POSTS, store, generator, session, post_id)


@router.get("/posts/{post_id}/actions", response_model=ContentActions)
async def get_social_post_actions(post_id: int, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(require_session)):
    return await content_controller.get_available_actions(SOCIAL_POSTS, store, generator, session, post_id)


@router.post("/posts/{post_id}/transition", response_model=SocialMediaPost)
async def transition_social_post(post_id: int, data: ContentTransition, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(require_session)):
    return await content_controller.transition_content(SOCIAL_POSTS, store, generator, session, post_id, data)


@router.put("/posts/{post_id}", response_model=SocialMediaPost)
async def update_social_post(post_id: int, data: ContentUpdate, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.EDIT_CONTENT))):
    return await content_controller.update_content(SOCIAL_POSTS, store, generator, session, post_id, data)


@router.delete("/posts/{post_id}")
async def delete_social_post(post_id: int, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.DELETE_CONTENT))):
    return await content_controller.delete_content(SOCIAL_POSTS, store, generator, session, post_id)


# ── Campaigns ─────────────────────────────────────────────

@router.get("", response_model=List[Campaign])
async def get_campaigns(status: Optional[str] = None, type: Optional[str] = None, client_id: Optional[str] = None, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.CREATE_CONTENT))):
    return await content_controller.get_campaigns(store, generator, session, status, type, client_id)


@router.get("/{campaign_id}", response_model=Campaign)
async def get_campaign(campaign_id: int, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.CREATE_CONTENT))):
    return await content_controller.get_content(CAMPAIGNS, store, generator, session, campaign_id)


@router.get("/{campaign_id}/actions", response_model=ContentActions)
async def get_campaign_actions(campaign_id: int, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(require_session)):
    return await content_controller.get_available_actions(CAMPAIGNS, store, generator, session, campaign_id)


@router.post("/{campaign_id}/transition", response_model=Campaign)
async def transition_campaign(campaign_id: int, data: ContentTransition, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(require_session)):
    return await content_controller.transition_content(CAMPAIGNS, store, generator, session, campaign_id, data)


@router.put("/{campaign_id}", response_model=Campaign)
async def update_campaign(campaign_id: int, data: ContentUpdate, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.EDIT_CONTENT))):
    return await content_controller.update_content(CAMPAIGNS, store, generator, session, campaign_id, data)


@router.delete("/{campaign_id}")
async def delete_campaign(campaign_id: int, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.DELETE_CONTENT))):
    return await content_controller.delete_content(CAMPAIGNS, store, generator, session, campaign_id)
