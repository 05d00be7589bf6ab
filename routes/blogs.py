from fastapi import APIRouter, Depends
from typing import List, Optional
from models.content import BlogPost, ContentTransition, ContentActions, ContentUpdate
from core.auth import get_store, get_generator, check_permission, require_session
from core.content_generator import ContentGenerator
from core.permissions import Permission
from core.session import Session
from controllers import content_controller
from controllers.content_controller import BLOG_POSTS
from database import KeyValueStore

router = APIRouter(prefix="/blogs", tags=["blogs"])


@router.get("", response_model=List[BlogPost])
async def get_blog_posts(status: Optional[str] = None, client_id: Optional[str] = None, search: Optional[str] = None, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.CREATE_CONTENT))):
    return await content_controller.get_blog_posts(store, generator, session, status, client_id, search)


@router.get("/{post_id}", response_model=BlogPost)
async def get_blog_post(post_id: int, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.CREATE_CONTENT))):
    return await content_controller.get_content(BLOG_POSTS, store, generator, session, post_id)


@router.get("/{post_id}/actions", response_model=ContentActions)
async def get_blog_post_actions(post_id: int, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(require_session)):
    return await content_controller.get_available_actions(BLOG_POSTS, store, generator, session, post_id)


@router.post("/{post_id}/transition", response_model=BlogPost)
async def transition_blog_post(post_id: int, data: ContentTransition, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(require_session)):
    return await content_controller.transition_content(BLOG_POSTS, store, generator, session, post_id, data)


@router.put("/{post_id}", response_model=BlogPost)
async def update_blog_post(post_id: int, data: ContentUpdate, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.EDIT_CONTENT))):
    return await content_controller.update_content(BLOG_POSTS, store, generator, session, post_id, data)


@router.delete("/{post_id}")
async def delete_blog_post(post_id: int, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.DELETE_CONTENT))):
    return await content_controller.delete_content(BLOG_POSTS, store, generator, session, post_id)
