from fastapi import HTTPException, Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from passlib.context import CryptContext
from pydantic import ValidationError
from datetime import datetime, timezone, timedelta
from typing import List, Optional
import logging
import jwt

from config import JWT_SECRET, JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_HOURS, LOGIN_ROUTE, USERS_KEY
from core.content_generator import ContentGenerator
from core.guard import evaluate_route, GuardDecision, GuardOutcome
from core.mock_transport import MockTransport
from core.permissions import Permission, Role
from core.session import Session
from database import KeyValueStore, load_value
from models.auth import SessionUser, StoredUser

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(user: SessionUser) -> str:
    to_encode = {
        "sub": user.id,
        "role": user.role.value,
        "client_id": user.client_id,
        "onboarded": user.has_completed_onboarding,
    }
    expire = datetime.now(timezone.utc) + timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_transport(request: Request) -> MockTransport:
    return request.app.state.transport


def get_generator(request: Request) -> ContentGenerator:
    return request.app.state.generator


async def find_stored_user(store: KeyValueStore, user_id: str) -> Optional[StoredUser]:
    users = await load_value(store, USERS_KEY, [])
    for doc in users:
        if doc.get("id") == user_id:
            return StoredUser(**doc)
    return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"Location": LOGIN_ROUTE})


async def get_current_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Session:
    session = Session.pending(demo_mode=request.app.state.demo_mode)
    if credentials is None:
        session.resolve(None)
        return session
    try:
        payload = jwt.decode(credentials.credentials, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except jwt.InvalidTokenError:
        raise _unauthorized("Invalid token")

    user_id = payload.get("sub")
    if user_id is None:
        raise _unauthorized("Invalid token")
    stored = await find_stored_user(get_store(request), user_id)
    if stored is None or not stored.is_active:
        raise _unauthorized("User not found")
    try:
        role = Role(payload.get("role", stored.role))
        user = SessionUser.from_stored(stored, role=role, client_id=payload.get("client_id"))
    except (ValueError, ValidationError):
        raise _unauthorized("Invalid token")
    session.resolve(user)
    return session


def enforce(decision: GuardDecision) -> None:
    """Translate a negative guard decision into the matching HTTP error."""
    if decision.allowed:
        return
    if decision.outcome == GuardOutcome.LOADING:
        raise HTTPException(status_code=503, detail="Session is still loading")
    if decision.redirect_to == LOGIN_ROUTE:
        raise _unauthorized("Not authenticated")
    raise HTTPException(
        status_code=403,
        detail="Insufficient permissions",
        headers={"Location": decision.redirect_to},
    )


async def require_session(session: Session = Depends(get_current_session)) -> Session:
    enforce(evaluate_route(session))
    return session


async def require_onboarded_session(session: Session = Depends(get_current_session)) -> Session:
    enforce(evaluate_route(session, require_onboarding=True))
    return session


def check_role(allowed_roles: List[Role]):
    async def role_checker(session: Session = Depends(get_current_session)):
        enforce(evaluate_route(session, allowed_roles=allowed_roles))
        return session
    return role_checker


def check_permission(permission: Permission):
    async def permission_checker(session: Session = Depends(get_current_session)):
        enforce(evaluate_route(session, required_permission=permission))
        return session
    return permission_checker
