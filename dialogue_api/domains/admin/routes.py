# dialogue_api/domains/admin/routes.py
from typing import List

from fastapi import APIRouter, Depends

from dialogue_api.core.database import get_db
from dialogue_api.domains.admin.models import PlatformStats, RoleDefinition
from dialogue_api.domains.admin.service import AdminService
from dialogue_api.shared.permissions import (
    Action,
    Permission,
    Resource,
    require_permissions,
    require_policy,
)

router = APIRouter(prefix="/admin", tags=["Admin"])


def get_admin_service(db=Depends(get_db)) -> AdminService:
    return AdminService(db)


@router.get(
    "/stats",
    response_model=PlatformStats,
    operation_id="getPlatformStats",
)
async def get_platform_stats(
    user_id: str = Depends(require_policy(Resource.USER, Action.MANAGE)),
    service: AdminService = Depends(get_admin_service),
) -> PlatformStats:
    """
    Dialogue and role assignment counts for the admin dashboard.

    Requires MANAGE_USERS permission (moderators and administrators).
    """
    return await service.get_stats()


@router.get(
    "/role-definitions",
    response_model=List[RoleDefinition],
    operation_id="listRoleDefinitions",
)
async def list_role_definitions(
    user_id: str = Depends(
        require_permissions(
            Permission.MANAGE_USERS, Permission.MANAGE_ROLES, require_all=False
        )
    ),
) -> List[RoleDefinition]:
    """
    The built-in roles and their permissions, for the role assignment form.

    Available to anyone holding MANAGE_USERS or MANAGE_ROLES.
    """
    return AdminService.list_role_definitions()
