from fastapi import APIRouter, Depends
from typing import List, Optional
from models.user import TeamUser, TeamUserCreate, TeamUserUpdate
from core.auth import get_store, check_permission
from core.permissions import Permission
from core.session import Session
from controllers import user_controller
from database import KeyValueStore

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[TeamUser])
async def get_users(status: Optional[str] = None, search: Optional[str] = None, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.MANAGE_USERS))):
    return await user_controller.get_users(store, session, status, search)


@router.post("", response_model=TeamUser)
async def create_user(data: TeamUserCreate, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.MANAGE_USERS))):
    return await user_controller.create_user(store, session, data)


@router.patch("/{user_id}", response_model=TeamUser)
async def update_user(user_id: str, data: TeamUserUpdate, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.MANAGE_USERS))):
    return await user_controller.update_user(store, session, user_id, data)


@router.delete("/{user_id}")
async def delete_user(user_id: str, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.MANAGE_USERS))):
    return await user_controller.delete_user(store, session, user_id)
