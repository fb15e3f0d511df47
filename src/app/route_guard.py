"""
Route guard policy

Declarative page-access table for the dashboard and the navigation
decision a client shell makes before rendering a page. Mirrors the
server-side role gates so a user is never shown a page whose API calls
would be refused.

Pure functions; no I/O.
"""

from enum import Enum
from typing import List, Optional, Tuple
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from src.domain.entities import UserRole

ALL_ROLES = (UserRole.admin, UserRole.site_manager, UserRole.worker, UserRole.client)
MANAGERS = (UserRole.admin, UserRole.site_manager)
FIELD_STAFF = (UserRole.admin, UserRole.site_manager, UserRole.worker)
CLIENT_VIEW = (UserRole.admin, UserRole.client)

LOGIN_PATH = "/login"
PUBLIC_ONLY_PATHS = ("/login", "/signup")


class RoutePermission(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    allowed_roles: Tuple[UserRole, ...]
    require_auth: bool
    is_exact: bool = False


def _route(path: str, roles, require_auth: bool = True, is_exact: bool = False):
    return RoutePermission(
        path=path, allowed_roles=tuple(roles), require_auth=require_auth, is_exact=is_exact
    )


ROUTE_PERMISSIONS: List[RoutePermission] = [
    # Public
    _route("/", ALL_ROLES, require_auth=False, is_exact=True),
    _route("/login", ALL_ROLES, require_auth=False),
    _route("/signup", ALL_ROLES, require_auth=False),
    _route("/verify-otp", ALL_ROLES, require_auth=False),
    # Admin
    _route("/admin", [UserRole.admin]),
    _route("/admin/users", [UserRole.admin]),
    _route("/admin/sites", [UserRole.admin]),
    _route("/admin/companies", [UserRole.admin]),
    _route("/admin/reports", [UserRole.admin]),
    _route("/admin/analytics", [UserRole.admin]),
    _route("/admin/settings", [UserRole.admin]),
    # Site manager
    _route("/site-manager", MANAGERS),
    _route("/site-manager/sites", MANAGERS),
    _route("/site-manager/workers", MANAGERS),
    _route("/site-manager/reports", MANAGERS),
    _route("/site-manager/weekly-reports", MANAGERS),
    _route("/site-manager/whs-reports", MANAGERS),
    _route("/site-manager/tools", MANAGERS),
    _route("/site-manager/deliveries", MANAGERS),
    # Worker
    _route("/worker", FIELD_STAFF),
    _route("/worker/daily-reports", FIELD_STAFF),
    _route("/worker/my-sites", FIELD_STAFF),
    _route("/worker/photos", FIELD_STAFF),
    _route("/worker/leave", FIELD_STAFF),
    _route("/worker/profile", FIELD_STAFF),
    # Client
    _route("/client", CLIENT_VIEW),
    _route("/client/projects", CLIENT_VIEW),
    _route("/client/reports", CLIENT_VIEW),
    _route("/client/progress", CLIENT_VIEW),
    _route("/client/photos", CLIENT_VIEW),
    # Shared
    _route("/sites", FIELD_STAFF),
    _route("/reports", MANAGERS),
    _route("/profile", ALL_ROLES),
    _route("/settings", ALL_ROLES),
]

DEFAULT_DASHBOARDS = {
    UserRole.admin: "/admin",
    UserRole.site_manager: "/site-manager",
    UserRole.worker: "/worker",
    UserRole.client: "/client",
}


class AuthState(BaseModel):
    """What the client knows about the current identity"""

    is_loading: bool = False
    is_authenticated: bool = False
    role: Optional[UserRole] = None


class GuardAction(str, Enum):
    loading = "loading"
    render = "render"
    redirect = "redirect"


class GuardDecision(BaseModel):
    action: GuardAction
    redirect_to: Optional[str] = None


def _normalize(path: str) -> str:
    path = path.split("?", 1)[0].split("#", 1)[0] or "/"
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def _is_prefix(route_path: str, path: str) -> bool:
    # "/admin" covers "/admin/users" but not "/administrator"
    return path == route_path or path.startswith(route_path.rstrip("/") + "/")


def get_default_dashboard(role: UserRole) -> str:
    return DEFAULT_DASHBOARDS[UserRole(role)]


def find_matching_route(
    path: str, routes: Optional[List[RoutePermission]] = None
) -> Optional[RoutePermission]:
    """
    The most specific rule for a path.

    Exact rules win outright; otherwise the longest matching prefix wins,
    so "/admin/settings" overrides "/admin".
    """
    routes = ROUTE_PERMISSIONS if routes is None else routes
    path = _normalize(path)

    for route in routes:
        if route.is_exact and route.path == path:
            return route

    candidates = [
        route for route in routes if not route.is_exact and _is_prefix(route.path, path)
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda route: len(route.path))


def can_access_path(
    path: str, role: Optional[UserRole] = None, is_authenticated: bool = False
) -> bool:
    """Unknown paths are denied."""
    route = find_matching_route(path)
    if route is None:
        return False

    if not route.require_auth:
        return True

    if not is_authenticated or role is None:
        return False

    return UserRole(role) in route.allowed_roles


def is_public_route(path: str) -> bool:
    route = find_matching_route(path)
    return route is not None and not route.require_auth


def get_accessible_routes(role: UserRole, is_authenticated: bool = True) -> List[RoutePermission]:
    return [
        route
        for route in ROUTE_PERMISSIONS
        if can_access_path(route.path, role, is_authenticated)
    ]


def login_redirect(path: str) -> str:
    return f"{LOGIN_PATH}?redirect={quote(path, safe='')}"


def get_redirect_path(
    path: str, role: Optional[UserRole] = None, is_authenticated: bool = False
) -> str:
    """Where to send a user who may not stay on path."""
    if not is_authenticated or role is None:
        return LOGIN_PATH
    return get_default_dashboard(role)


def evaluate_navigation(path: str, auth: AuthState) -> GuardDecision:
    """
    Decide what to do with a navigation.

    While the identity is still resolving the answer is always "loading";
    no access decision is made until it resolves.
    """
    if auth.is_loading:
        return GuardDecision(action=GuardAction.loading)

    authenticated = auth.is_authenticated and auth.role is not None
    route = find_matching_route(path)
    requires_auth = route.require_auth if route is not None else True

    if requires_auth and not authenticated:
        return GuardDecision(action=GuardAction.redirect, redirect_to=login_redirect(path))

    if authenticated and _normalize(path) in PUBLIC_ONLY_PATHS:
        return GuardDecision(
            action=GuardAction.redirect, redirect_to=get_default_dashboard(auth.role)
        )

    if not can_access_path(path, auth.role, authenticated):
        return GuardDecision(
            action=GuardAction.redirect,
            redirect_to=get_redirect_path(path, auth.role, authenticated),
        )

    return GuardDecision(action=GuardAction.render)
