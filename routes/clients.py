from fastapi import APIRouter, Depends
from typing import List, Optional
from models.content import Client
from models.project import Project
from core.auth import get_store, get_generator, check_permission
from core.content_generator import ContentGenerator
from core.permissions import Permission
from core.session import Session
from controllers import client_controller, project_controller
from database import KeyValueStore

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=List[Client])
async def get_clients(status: Optional[str] = None, search: Optional[str] = None, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.VIEW_ALL_CLIENTS))):
    return await client_controller.get_clients(store, session, status, search)


@router.get("/{client_id}", response_model=Client)
async def get_client(client_id: str, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.VIEW_ALL_CLIENTS))):
    return await client_controller.get_client(store, session, client_id)


@router.get("/{client_id}/projects", response_model=List[Project])
async def get_client_portfolio(client_id: str, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.VIEW_ALL_CLIENTS))):
    await client_controller.get_client(store, session, client_id)
    return await project_controller.get_client_portfolio(generator, session, client_id)
