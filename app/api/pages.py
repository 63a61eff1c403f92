"""Page endpoints behind the route guard. Rendering is done by the UI; these return JSON."""

from fastapi import APIRouter

from app.api.deps import AdminUser, CurrentUser
from app.schemas.auth import AuthenticatedIdentity

router = APIRouter()


@router.get("/")
def home() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "WC Check API", "login": "/login"}


@router.get("/login")
def login_page() -> dict[str, str]:
    return {"page": "login", "action": "/api/v1/auth/login"}


@router.get("/register")
def register_page() -> dict[str, str]:
    return {"page": "register", "action": "/api/v1/auth/register"}


@router.get("/dashboard")
def dashboard(current_user: CurrentUser) -> dict[str, object]:
    return {"page": "dashboard", "user": AuthenticatedIdentity.from_entity(current_user)}


@router.get("/admin")
def admin_dashboard(admin: AdminUser) -> dict[str, object]:
    return {"page": "admin", "user": AuthenticatedIdentity.from_entity(admin)}
