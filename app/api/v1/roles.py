"""Role listing (admin) and role assignment/cleanup (super admin)."""

from fastapi import APIRouter, HTTPException, status

from app.api.deps import AdminUser, DbSession, SuperAdminUser
from app.core.errors import NotFoundError, ValidationError
from app.schemas.role import (
    RoleAssignmentRequest,
    RoleAssignmentResponse,
    RoleCleanupResponse,
    RoleItem,
    RolesListResponse,
)
from app.services import roles as role_service

router = APIRouter()


@router.get("", response_model=RolesListResponse)
def list_roles(_admin: AdminUser, db: DbSession) -> RolesListResponse:
    """Active roles, highest level first, with the number of assigned users."""
    return RolesListResponse(
        roles=[
            RoleItem(
                id=role.id,
                name=role.name,
                description=role.description,
                level=role.level,
                is_active=role.is_active,
                user_count=count,
            )
            for role, count in role_service.list_roles_with_counts(db)
        ]
    )


@router.put("/assignments/{user_id}", response_model=RoleAssignmentResponse)
def assign_role(
    user_id: str,
    body: RoleAssignmentRequest,
    admin: SuperAdminUser,
    db: DbSession,
) -> RoleAssignmentResponse:
    """
    Replace the user's role with the given one.

    Takes effect on the user's next request: roles are resolved per request,
    not stored in the session token.
    """
    try:
        assignment = role_service.assign_role(db, user_id, body.role_id, assigned_by=admin.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return RoleAssignmentResponse.model_validate(assignment)


@router.post("/ensure-defaults", response_model=RoleCleanupResponse)
def ensure_default_roles(_admin: SuperAdminUser, db: DbSession) -> RoleCleanupResponse:
    """Create missing canonical roles and merge duplicates into them."""
    return RoleCleanupResponse(report=role_service.ensure_default_roles(db))
