from fastapi import APIRouter, Depends
from models.auth import UserLogin, UserSignup, Token, SessionUser, RoleSwitch, PermissionSummary
from core.auth import get_store, require_session
from core.session import Session
from controllers import auth_controller
from database import KeyValueStore

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=Token)
async def signup(data: UserSignup, store: KeyValueStore = Depends(get_store)):
    return await auth_controller.signup(store, data)


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, store: KeyValueStore = Depends(get_store)):
    return await auth_controller.login(store, credentials)


@router.get("/me", response_model=SessionUser)
async def get_me(session: Session = Depends(require_session)):
    return await auth_controller.get_me(session)


@router.get("/permissions", response_model=PermissionSummary)
async def get_my_permissions(session: Session = Depends(require_session)):
    return await auth_controller.get_my_permissions(session)


@router.post("/switch-role", response_model=Token)
async def switch_role(data: RoleSwitch, session: Session = Depends(require_session)):
    return await auth_controller.switch_role(session, data)
