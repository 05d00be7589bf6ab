from fastapi import HTTPException
import logging

from database import KeyValueStore, load_value, save_value
from models.auth import UserLogin, UserSignup, StoredUser, SessionUser, Token, RoleSwitch, PermissionSummary
from core.auth import verify_password, get_password_hash, create_access_token
from core.permissions import Role, role_display_name, is_agency_role, is_client_role
from core.session import Session, DemoModeDisabledError
from config import USERS_KEY, MIN_PASSWORD_LENGTH, ONBOARDING_ROUTE, DEFAULT_REDIRECT

logger = logging.getLogger(__name__)


def _same_email(a: str, b: str) -> bool:
    return a.strip().lower() == b.strip().lower()


def issue_token(user: SessionUser) -> Token:
    redirect_to = DEFAULT_REDIRECT if user.has_completed_onboarding else ONBOARDING_ROUTE
    return Token(access_token=create_access_token(user), user=user, redirect_to=redirect_to)


async def signup(store: KeyValueStore, data: UserSignup) -> Token:
    if data.password != data.confirm_password:
        raise HTTPException(status_code=400, detail="Passwords don't match")
    if len(data.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(status_code=400, detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    users = await load_value(store, USERS_KEY, [])
    if any(_same_email(u.get("email", ""), data.email) for u in users):
        raise HTTPException(status_code=400, detail="Email already registered")

    # Every self-service signup starts a new agency
    user = StoredUser(
        name=data.name,
        email=data.email,
        password=get_password_hash(data.password),
        role=Role.AGENCY_ADMIN,
        company_name=data.company_name,
    )
    users.append(user.model_dump(mode="json"))
    if not await save_value(store, USERS_KEY, users):
        raise HTTPException(status_code=503, detail="Could not save account, please try again")
    logger.info("New agency account created for %s", user.email)
    return issue_token(SessionUser.from_stored(user))


async def login(store: KeyValueStore, credentials: UserLogin) -> Token:
    users = await load_value(store, USERS_KEY, [])
    doc = next((u for u in users if _same_email(u.get("email", ""), credentials.email)), None)
    if not doc or not verify_password(credentials.password, doc["password"]):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    user = StoredUser(**doc)
    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account is inactive")
    logger.info("User %s logged in as %s", user.email, user.role.value)
    return issue_token(SessionUser.from_stored(user))


async def get_me(session: Session) -> SessionUser:
    return session.user


async def get_my_permissions(session: Session) -> PermissionSummary:
    role = session.role
    return PermissionSummary(
        role=role,
        role_label=role_display_name(role),
        permissions=sorted(session.permissions, key=lambda p: p.value),
        is_agency_user=is_agency_role(role),
        is_client_user=is_client_role(role),
    )


async def switch_role(session: Session, data: RoleSwitch) -> Token:
    previous = session.role
    try:
        user = session.switch_role(data.role, data.client_id)
    except DemoModeDisabledError as e:
        raise HTTPException(status_code=403, detail=str(e))
    logger.info("Demo role switch for %s: %s -> %s", user.email, previous.value, user.role.value)
    return issue_token(user)
