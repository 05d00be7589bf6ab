from typing import List, NamedTuple, Optional

from core.guard import evaluate_path
from core.permissions import Permission
from core.session import Session


class NavItem(NamedTuple):
    name: str
    href: str
    permission: Optional[Permission]


NAVIGATION_ITEMS = (
    NavItem("Dashboard", "/", None),
    NavItem("Clients", "/clients", Permission.VIEW_ALL_CLIENTS),
    NavItem("Projects", "/projects", Permission.VIEW_ALL_CLIENTS),
    NavItem("Campaigns", "/campaigns", Permission.CREATE_CONTENT),
    NavItem("Blogs", "/blogs", Permission.CREATE_CONTENT),
    NavItem("Messages", "/messages", None),
    NavItem("Approvals", "/approvals", Permission.APPROVE_CONTENT),
    NavItem("Analytics", "/analytics", Permission.VIEW_ANALYTICS),
    NavItem("Team", "/users", Permission.MANAGE_USERS),
    NavItem("Billing", "/billing", Permission.BILLING_MANAGEMENT),
)

BOTTOM_NAVIGATION_ITEMS = (
    NavItem("Settings", "/settings", Permission.SYSTEM_CONFIG),
)


def _visible(session: Session, item: NavItem) -> bool:
    if item.permission is None:
        # Unrestricted entries are agency navigation; client roles reach those pages by link
        return not session.is_client_user()
    return session.can(item.permission)


def _serialize(items) -> List[dict]:
    return [
        {"name": i.name, "href": i.href, "permission": i.permission.value if i.permission else None}
        for i in items
    ]


async def get_navigation(session: Session) -> dict:
    return {
        "main": _serialize(i for i in NAVIGATION_ITEMS if _visible(session, i)),
        "bottom": _serialize(i for i in BOTTOM_NAVIGATION_ITEMS if _visible(session, i)),
    }


async def check_access(session: Session, path: str) -> dict:
    decision = evaluate_path(session, path)
    return {
        "path": path,
        "outcome": decision.outcome.value,
        "allowed": decision.allowed,
        "redirect_to": decision.redirect_to,
        "reason": decision.reason,
    }
