from fastapi import APIRouter, Depends
from typing import List
from models.dashboard import Notification
from core.auth import get_store, get_transport, require_session
from core.mock_transport import MockTransport
from core.session import Session
from controllers import dashboard_controller
from database import KeyValueStore

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[Notification])
async def get_notifications(store: KeyValueStore = Depends(get_store), transport: MockTransport = Depends(get_transport), session: Session = Depends(require_session)):
    return await dashboard_controller.get_notifications(store, transport)
