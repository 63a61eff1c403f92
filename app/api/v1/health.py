"""Health check: credential store connectivity and presence of the default role."""

from fastapi import APIRouter

from app.api.deps import DbSession
from app.core.config import settings
from app.core.database import check_db_connected
from app.core.errors import StoreError
from app.entities.role import DEFAULT_ROLE
from app.repositories import roles as role_repository
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: DbSession) -> HealthResponse:
    """
    Return service health, database connectivity and whether new users can get a role.
    Used by load balancers and monitoring; never fails with 5xx itself.
    """
    if not check_db_connected(db):
        return HealthResponse(
            status="degraded",
            environment=settings.APP_ENV,
            database="disconnected",
        )
    try:
        default_role = role_repository.get_role_by_name_level(
            db, DEFAULT_ROLE.name, DEFAULT_ROLE.level
        )
    except StoreError:
        default_role = None
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected",
        default_role_present=default_role is not None,
    )
