from fastapi import HTTPException
from typing import Optional, List
import logging
import secrets

from config import USERS_KEY
from core.auth import get_password_hash
from core.permissions import Role, is_client_role, role_display_name
from core.session import Session
from database import KeyValueStore, load_value, save_value
from models.auth import StoredUser
from models.user import TeamUser, TeamUserCreate, TeamUserUpdate

logger = logging.getLogger(__name__)


def to_team_user(user: StoredUser) -> TeamUser:
    return TeamUser(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        role_label=role_display_name(user.role),
        client_id=user.client_id,
        status="active" if user.is_active else "inactive",
        joined_date=user.created_at[:10],
    )


def _visible_users(session: Session, users: List[dict]) -> List[dict]:
    if session.is_agency_user():
        return users
    return [u for u in users if u.get("client_id") == session.client_id]


async def get_users(store: KeyValueStore, session: Session, status: Optional[str] = None,
                    search: Optional[str] = None) -> List[TeamUser]:
    users = [to_team_user(StoredUser(**u)) for u in _visible_users(session, await load_value(store, USERS_KEY, []))]
    if status and status != "all":
        users = [u for u in users if u.status == status]
    if search:
        needle = search.lower()
        users = [u for u in users if needle in u.name.lower() or needle in u.email.lower()]
    return users


async def create_user(store: KeyValueStore, session: Session, data: TeamUserCreate) -> TeamUser:
    role = data.role
    client_id = data.client_id
    if session.is_client_user():
        if not is_client_role(role):
            raise HTTPException(status_code=403, detail="Client admins can only add client users")
        client_id = client_id or session.client_id
    if is_client_role(role) and not client_id:
        raise HTTPException(status_code=400, detail="Client users must belong to a client")
    if not is_client_role(role):
        client_id = None
    if not session.can_manage_user_of(client_id):
        raise HTTPException(status_code=403, detail="You cannot manage users of this client")

    users = await load_value(store, USERS_KEY, [])
    if any(u.get("email", "").lower() == data.email.lower() for u in users):
        raise HTTPException(status_code=400, detail="Email already registered")

    # Accounts created without a password get an unusable random one
    password = data.password or secrets.token_urlsafe(16)
    user = StoredUser(
        name=data.name,
        email=data.email,
        password=get_password_hash(password),
        role=role,
        client_id=client_id,
        has_completed_onboarding=True,
    )
    users.append(user.model_dump(mode="json"))
    if not await save_value(store, USERS_KEY, users):
        raise HTTPException(status_code=503, detail="Could not save user, please try again")
    logger.info("User %s (%s) created by %s", user.email, role.value, session.user.email)
    return to_team_user(user)


def _find_managed(session: Session, users: List[dict], user_id: str) -> dict:
    doc = next((u for u in _visible_users(session, users) if u.get("id") == user_id), None)
    if doc is None:
        raise HTTPException(status_code=404, detail="User not found")
    if not session.can_manage_user_of(doc.get("client_id")):
        raise HTTPException(status_code=403, detail="You cannot manage this user")
    return doc


async def update_user(store: KeyValueStore, session: Session, user_id: str, data: TeamUserUpdate) -> TeamUser:
    users = await load_value(store, USERS_KEY, [])
    doc = _find_managed(session, users, user_id)
    if user_id == session.user.id and (data.role or data.status == "inactive"):
        raise HTTPException(status_code=400, detail="You cannot change your own role or deactivate yourself")
    if data.role is not None:
        if is_client_role(data.role) != is_client_role(Role(doc["role"])):
            raise HTTPException(status_code=400, detail="Users cannot move between agency and client roles")
        doc["role"] = data.role.value
    if data.name:
        doc["name"] = data.name
    if data.status:
        doc["is_active"] = data.status == "active"
    await save_value(store, USERS_KEY, users)
    return to_team_user(StoredUser(**doc))


async def delete_user(store: KeyValueStore, session: Session, user_id: str) -> dict:
    users = await load_value(store, USERS_KEY, [])
    _find_managed(session, users, user_id)
    if user_id == session.user.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    await save_value(store, USERS_KEY, [u for u in users if u.get("id") != user_id])
    logger.info("User %s deleted by %s", user_id, session.user.email)
    return {"message": "User deleted"}
