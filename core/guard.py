from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from config import LOGIN_ROUTE, ONBOARDING_ROUTE, DEFAULT_REDIRECT
from core.permissions import Permission, Role
from core.session import Session


class GuardOutcome(str, Enum):
    ALLOW = "allow"
    LOADING = "loading"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class GuardDecision:
    outcome: GuardOutcome
    redirect_to: Optional[str] = None
    reason: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == GuardOutcome.ALLOW


@dataclass(frozen=True)
class RouteRule:
    path: str
    permission: Optional[Permission] = None
    require_onboarding: bool = False


# Portal routes and the capability each one requires; None means any signed-in user
ROUTE_RULES = (
    RouteRule("/", require_onboarding=True),
    RouteRule("/clients", Permission.VIEW_ALL_CLIENTS),
    RouteRule("/projects", Permission.VIEW_ALL_CLIENTS),
    RouteRule("/campaigns/calendar", Permission.APPROVE_CONTENT),
    RouteRule("/campaigns/post/:id/client", Permission.APPROVE_CONTENT),
    RouteRule("/campaigns/campaign/:id", Permission.CREATE_CONTENT),
    RouteRule("/campaigns/post/:id", Permission.CREATE_CONTENT),
    RouteRule("/campaigns", Permission.CREATE_CONTENT),
    RouteRule("/blogs/:id", Permission.CREATE_CONTENT),
    RouteRule("/blogs", Permission.CREATE_CONTENT),
    RouteRule("/messages/client"),
    RouteRule("/messages"),
    RouteRule("/approvals", Permission.APPROVE_CONTENT),
    RouteRule("/analytics", Permission.VIEW_ANALYTICS),
    RouteRule("/users", Permission.MANAGE_USERS),
    RouteRule("/billing", Permission.BILLING_MANAGEMENT),
    RouteRule("/settings", Permission.SYSTEM_CONFIG),
    RouteRule("/notifications"),
)


def evaluate_route(
    session: Session,
    required_permission: Optional[Permission] = None,
    allowed_roles: Optional[Iterable[Role]] = None,
    require_onboarding: bool = False,
    redirect_to: str = DEFAULT_REDIRECT,
) -> GuardDecision:
    """Decide whether a guarded route may render for the given session.

    Pure function of the session state: never raises for a denial.
    """
    if session.is_loading:
        return GuardDecision(GuardOutcome.LOADING)

    user = session.user
    if user is None:
        return GuardDecision(GuardOutcome.REDIRECT, LOGIN_ROUTE, "not authenticated")

    if require_onboarding and not user.has_completed_onboarding:
        return GuardDecision(GuardOutcome.REDIRECT, ONBOARDING_ROUTE, "onboarding not completed")

    if allowed_roles:
        if not any(session.has_role(role) for role in allowed_roles):
            return GuardDecision(GuardOutcome.REDIRECT, redirect_to, "role not allowed")

    if required_permission is not None and not session.can(required_permission):
        return GuardDecision(GuardOutcome.REDIRECT, redirect_to, f"missing permission {required_permission.value}")

    return GuardDecision(GuardOutcome.ALLOW)


def _matches(pattern: str, path: str) -> bool:
    pattern_parts = pattern.strip("/").split("/")
    path_parts = path.strip("/").split("/")
    if len(pattern_parts) != len(path_parts):
        return False
    return all(p.startswith(":") or p == q for p, q in zip(pattern_parts, path_parts))


def find_route_rule(path: str) -> Optional[RouteRule]:
    path = path.split("?", 1)[0] or "/"
    for rule in ROUTE_RULES:
        if _matches(rule.path, path):
            return rule
    return None


def evaluate_path(session: Session, path: str) -> GuardDecision:
    rule = find_route_rule(path)
    if rule is None:
        return GuardDecision(GuardOutcome.REDIRECT, DEFAULT_REDIRECT, "unknown route")
    return evaluate_route(session, rule.permission, require_onboarding=rule.require_onboarding)
