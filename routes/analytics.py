from fastapi import APIRouter, Depends
from typing import Optional
from core.auth import get_store, get_generator, check_permission
from core.content_generator import ContentGenerator
from core.permissions import Permission
from core.session import Session
from controllers import analytics_controller
from database import KeyValueStore

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("")
async def get_analytics(client_id: Optional[str] = None, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.VIEW_ANALYTICS))):
    return await analytics_controller.get_analytics(store, generator, session, client_id)
