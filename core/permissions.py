"""
Role-based permission model.

Agency roles:
- AGENCY_ADMIN: full system access, manages all clients and users
- AGENCY_STAFF: creates and manages content for all clients, limited user management

Client roles:
- CLIENT_ADMIN: full access to their company's portal, approves/rejects content
- CLIENT_USER: read-only access to most features, no approval permissions

Each role's permission set is an explicit list; there is no inheritance
between roles, so every check is a single set-membership test.
"""
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Optional


class Role(str, Enum):
    AGENCY_ADMIN = "AGENCY_ADMIN"
    AGENCY_STAFF = "AGENCY_STAFF"
    CLIENT_ADMIN = "CLIENT_ADMIN"
    CLIENT_USER = "CLIENT_USER"


class Permission(str, Enum):
    # Content management
    CREATE_CONTENT = "CREATE_CONTENT"
    EDIT_CONTENT = "EDIT_CONTENT"
    DELETE_CONTENT = "DELETE_CONTENT"
    # Approval actions
    APPROVE_CONTENT = "APPROVE_CONTENT"
    REJECT_CONTENT = "REJECT_CONTENT"
    # Views
    VIEW_ALL_CLIENTS = "VIEW_ALL_CLIENTS"
    VIEW_OWN_CLIENT = "VIEW_OWN_CLIENT"
    VIEW_ANALYTICS = "VIEW_ANALYTICS"
    # User management
    MANAGE_USERS = "MANAGE_USERS"
    # System
    SYSTEM_CONFIG = "SYSTEM_CONFIG"
    BILLING_MANAGEMENT = "BILLING_MANAGEMENT"


AGENCY_ROLES = frozenset({Role.AGENCY_ADMIN, Role.AGENCY_STAFF})
CLIENT_ROLES = frozenset({Role.CLIENT_ADMIN, Role.CLIENT_USER})

# Content may only be edited or deleted by staff before approval
EDITABLE_CONTENT_STATUSES = frozenset({"draft", "rejected"})

PERMISSION_MATRIX = MappingProxyType({
    Role.AGENCY_ADMIN: frozenset(Permission),
    Role.AGENCY_STAFF: frozenset({
        Permission.CREATE_CONTENT,
        Permission.EDIT_CONTENT,
        Permission.DELETE_CONTENT,
        Permission.VIEW_ALL_CLIENTS,
        Permission.VIEW_OWN_CLIENT,
        Permission.VIEW_ANALYTICS,
        Permission.MANAGE_USERS,
    }),
    Role.CLIENT_ADMIN: frozenset({
        Permission.APPROVE_CONTENT,
        Permission.REJECT_CONTENT,
        Permission.VIEW_OWN_CLIENT,
        Permission.VIEW_ANALYTICS,
        Permission.MANAGE_USERS,
        Permission.BILLING_MANAGEMENT,
    }),
    Role.CLIENT_USER: frozenset({
        Permission.VIEW_OWN_CLIENT,
        Permission.VIEW_ANALYTICS,
    }),
})

ROLE_DISPLAY_NAMES = MappingProxyType({
    Role.AGENCY_ADMIN: "Agency Admin",
    Role.AGENCY_STAFF: "Agency Staff",
    Role.CLIENT_ADMIN: "Client Admin",
    Role.CLIENT_USER: "Client User",
})


def _check_exhaustive():
    for table_name, table in (("PERMISSION_MATRIX", PERMISSION_MATRIX), ("ROLE_DISPLAY_NAMES", ROLE_DISPLAY_NAMES)):
        missing = [role.value for role in Role if role not in table]
        if missing:
            raise RuntimeError(f"{table_name} has no entry for roles: {', '.join(missing)}")
    empty = [role.value for role in Role if not PERMISSION_MATRIX[role]]
    if empty:
        raise RuntimeError(f"Roles without permissions: {', '.join(empty)}")


_check_exhaustive()


def permissions_for(role: Role) -> FrozenSet[Permission]:
    return PERMISSION_MATRIX[Role(role)]


def has_permission(role: Role, permission: Permission) -> bool:
    return Permission(permission) in permissions_for(role)


def is_agency_role(role: Role) -> bool:
    return Role(role) in AGENCY_ROLES


def is_client_role(role: Role) -> bool:
    return Role(role) in CLIENT_ROLES


def role_display_name(role: Role) -> str:
    return ROLE_DISPLAY_NAMES[Role(role)]


def _owns_editable_content(author_id: Optional[str], user_id: Optional[str], status: Optional[str]) -> bool:
    if not author_id or not user_id or author_id != user_id:
        return False
    return status in EDITABLE_CONTENT_STATUSES


def can_edit_content(role: Role, author_id: Optional[str] = None, user_id: Optional[str] = None,
                     status: Optional[str] = None) -> bool:
    """Agency admins edit anything; staff only their own content before approval."""
    role = Role(role)
    if role == Role.AGENCY_ADMIN:
        return True
    if role == Role.AGENCY_STAFF:
        return _owns_editable_content(author_id, user_id, status)
    return False


def can_delete_content(role: Role, author_id: Optional[str] = None, user_id: Optional[str] = None,
                       status: Optional[str] = None) -> bool:
    role = Role(role)
    if role == Role.AGENCY_ADMIN:
        return True
    if role == Role.AGENCY_STAFF:
        return _owns_editable_content(author_id, user_id, status)
    return False


def can_manage_user_of(role: Role, target_client_id: Optional[str] = None,
                       own_client_id: Optional[str] = None) -> bool:
    """Agency admins manage every user; client admins only users of their own client."""
    role = Role(role)
    if role == Role.AGENCY_ADMIN:
        return True
    if role == Role.CLIENT_ADMIN:
        return own_client_id is not None and target_client_id == own_client_id
    return False
