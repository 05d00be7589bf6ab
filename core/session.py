from typing import Any, FrozenSet, List, Optional

from core.permissions import (
    Role, Permission, permissions_for, has_permission, is_agency_role, is_client_role,
    can_edit_content, can_delete_content, can_manage_user_of,
)
from models.auth import SessionUser

DEFAULT_DEMO_CLIENT_ID = "client-1"


def _field(record: Any, key: str) -> Any:
    if isinstance(record, dict):
        return record.get(key)
    return getattr(record, key, None)


class DemoModeDisabledError(Exception):
    """Raised when the role switcher is used outside demo mode."""


class Session:
    """Holder of the acting user for one request/session.

    The session owns no storage: whoever builds it is responsible for
    persisting `user` (the auth layer mirrors it into the access token).
    """

    def __init__(self, user: Optional[SessionUser] = None, demo_mode: bool = False, is_loading: bool = False):
        self._user = user
        self.demo_mode = demo_mode
        self.is_loading = is_loading

    @classmethod
    def pending(cls, demo_mode: bool = False) -> "Session":
        return cls(demo_mode=demo_mode, is_loading=True)

    @property
    def user(self) -> Optional[SessionUser]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def role(self) -> Optional[Role]:
        return self._user.role if self._user else None

    @property
    def client_id(self) -> Optional[str]:
        return self._user.client_id if self._user else None

    def resolve(self, user: Optional[SessionUser]) -> None:
        self._user = user
        self.is_loading = False

    def set_user(self, user: Optional[SessionUser]) -> None:
        self._user = user

    def clear(self) -> None:
        self._user = None

    # ── Capability checks ─────────────────────────────────

    @property
    def permissions(self) -> FrozenSet[Permission]:
        if not self._user:
            return frozenset()
        return permissions_for(self._user.role)

    def can(self, permission: Permission) -> bool:
        return bool(self._user) and has_permission(self._user.role, permission)

    def has_role(self, role: Role) -> bool:
        return bool(self._user) and self._user.role == role

    def is_agency_user(self) -> bool:
        return bool(self._user) and is_agency_role(self._user.role)

    def is_client_user(self) -> bool:
        return bool(self._user) and is_client_role(self._user.role)

    def can_approve_content(self) -> bool:
        return self.can(Permission.APPROVE_CONTENT)

    def can_reject_content(self) -> bool:
        return self.can(Permission.REJECT_CONTENT)

    def can_view_all_clients(self) -> bool:
        return self.can(Permission.VIEW_ALL_CLIENTS)

    def can_manage_users(self) -> bool:
        return self.can(Permission.MANAGE_USERS)

    def can_manage_user_of(self, target_client_id: Optional[str]) -> bool:
        if not self._user:
            return False
        return can_manage_user_of(self._user.role, target_client_id, self._user.client_id)

    def can_edit_content(self, author_id: Optional[str] = None, status: Optional[str] = None) -> bool:
        if not self._user:
            return False
        return can_edit_content(self._user.role, author_id, self._user.id, status)

    def can_delete_content(self, author_id: Optional[str] = None, status: Optional[str] = None) -> bool:
        if not self._user:
            return False
        return can_delete_content(self._user.role, author_id, self._user.id, status)

    # ── Client scoping ────────────────────────────────────

    @property
    def scope_client_id(self) -> Optional[str]:
        """Client the session is restricted to, or None when it may see every client."""
        if self.can_view_all_clients():
            return None
        return self.client_id

    def visible(self, records: List[Any], key: str = "client_id") -> List[Any]:
        if not self._user:
            return []
        if self.can_view_all_clients():
            return list(records)
        return [r for r in records if _field(r, key) == self.client_id]

    # ── Demo role switcher ────────────────────────────────

    def switch_role(self, role: Role, client_id: Optional[str] = None) -> SessionUser:
        if not self.demo_mode:
            raise DemoModeDisabledError("Role switching is only available in demo mode")
        if not self._user:
            raise ValueError("No active session to switch")
        role = Role(role)
        if is_client_role(role):
            client_id = client_id or self._user.client_id or DEFAULT_DEMO_CLIENT_ID
        else:
            client_id = None
        self._user = self._user.model_copy(update={"role": role, "client_id": client_id})
        return self._user
