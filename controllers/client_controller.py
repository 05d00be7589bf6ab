from fastapi import HTTPException
from typing import Optional, List

from config import clients_key
from core.content_generator import CLIENTS
from core.session import Session
from database import KeyValueStore, load_value
from models.content import Client


async def _directory(store: KeyValueStore, session: Session) -> List[Client]:
    """Agency client directory plus the clients added during onboarding."""
    added = await load_value(store, clients_key(session.user.id), [])
    onboarded = [Client(status="active", **c) for c in added]
    return session.visible(CLIENTS + onboarded, key="id")


async def get_clients(store: KeyValueStore, session: Session, status: Optional[str] = None,
                      search: Optional[str] = None) -> List[Client]:
    clients = await _directory(store, session)
    if status and status != "all":
        clients = [c for c in clients if c.status == status]
    if search:
        needle = search.lower()
        clients = [c for c in clients if needle in c.name.lower() or needle in c.email.lower()]
    return clients


async def get_client(store: KeyValueStore, session: Session, client_id: str) -> Client:
    for client in await _directory(store, session):
        if client.id == client_id:
            return client
    raise HTTPException(status_code=404, detail="Client not found")
