"""
Route guard for page requests: authentication only, always resolved as redirect or pass-through.

Role checks are not done here. The guard only sees the token, not the
freshly joined role; admin pages enforce their role level in the route
dependencies (require_admin).
"""

import logging
from enum import Enum
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from app.core.config import settings
from app.core.security import clear_session_cookie, read_session_cookie, verify_session_token

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
LANDING_PATH = "/dashboard"

# Pages reachable without a session. "/" matches only itself.
PUBLIC_EXACT_PATHS = frozenset({"/"})
PUBLIC_PATH_PREFIXES = ("/login", "/register")
# Logged-in users visiting these are sent to the landing page.
AUTH_PAGE_PATHS = frozenset({"/login", "/register"})

# Not pages: API routes authenticate through dependencies and answer 401/403.
UNGUARDED_PATH_PREFIXES = ("/docs", "/redoc", "/openapi.json", "/static", "/favicon.ico")


class GuardState(str, Enum):
    PUBLIC = "public"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_OK = "authenticated_ok"
    AUTHENTICATED_INVALID = "authenticated_invalid"


class GuardDecision(BaseModel):
    """Outcome for one request: pass through when redirect_to is None."""

    model_config = ConfigDict(frozen=True)

    state: GuardState
    redirect_to: str | None = None
    clear_cookie: bool = False


def _matches_prefix(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def is_guarded_path(path: str, api_prefix: str | None = None) -> bool:
    """False for API, docs and static-file paths, which the guard never touches."""
    api_prefix = api_prefix if api_prefix is not None else settings.API_V1_PREFIX
    if api_prefix and _matches_prefix(path, api_prefix):
        return False
    if any(_matches_prefix(path, prefix) for prefix in UNGUARDED_PATH_PREFIXES):
        return False
    last_segment = path.rsplit("/", 1)[-1]
    return "." not in last_segment


def is_public_path(path: str) -> bool:
    if path in PUBLIC_EXACT_PATHS:
        return True
    return any(_matches_prefix(path, prefix) for prefix in PUBLIC_PATH_PREFIXES)


def login_redirect(path: str) -> str:
    """Login URL that carries the original path as the return target."""
    return f"{LOGIN_PATH}?from={quote(path, safe='/')}"


def evaluate_request(path: str, token: str | None) -> GuardDecision:
    """
    Classify a page request and decide what happens to it.

    - public page: pass, except login/register with a valid token -> landing page
    - no token: redirect to login with the return target
    - invalid or expired token: same redirect, and clear the cookie
    - valid token: pass
    """
    if is_public_path(path):
        if path in AUTH_PAGE_PATHS and token and verify_session_token(token) is not None:
            return GuardDecision(state=GuardState.PUBLIC, redirect_to=LANDING_PATH)
        return GuardDecision(state=GuardState.PUBLIC)

    if not token:
        return GuardDecision(state=GuardState.UNAUTHENTICATED, redirect_to=login_redirect(path))

    if verify_session_token(token) is None:
        return GuardDecision(
            state=GuardState.AUTHENTICATED_INVALID,
            redirect_to=login_redirect(path),
            clear_cookie=True,
        )

    return GuardDecision(state=GuardState.AUTHENTICATED_OK)


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Apply evaluate_request to every page request before it reaches a route."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if not is_guarded_path(path):
            return await call_next(request)

        decision = evaluate_request(path, read_session_cookie(request))
        if decision.redirect_to is None:
            return await call_next(request)

        logger.debug(
            "Route guard redirect",
            extra={"path": path, "guard_state": decision.state.value, "redirect_to": decision.redirect_to},
        )
        response = RedirectResponse(url=decision.redirect_to, status_code=307)
        if decision.clear_cookie:
            clear_session_cookie(response)
        return response
