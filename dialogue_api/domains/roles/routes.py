# dialogue_api/domains/roles/routes.py
from typing import List

from fastapi import APIRouter, Depends, Query

from dialogue_api.core.database import get_db
from dialogue_api.domains.roles.models import (
    AdminStatusResponse,
    AssignRoleRequest,
    AssignRoleResponse,
    UserRoleResponse,
)
from dialogue_api.domains.roles.service import RoleService
from dialogue_api.shared.exceptions import RoleStoreUnavailableError
from dialogue_api.shared.permissions import (
    Action,
    PermissionResolver,
    Resource,
    RoleLookupError,
    get_permission_resolver,
    require_policy,
)

router = APIRouter(prefix="/admin/roles", tags=["Roles"])
user_router = APIRouter(prefix="/user", tags=["Roles"])


def get_role_service(db=Depends(get_db)) -> RoleService:
    return RoleService(db)


@router.post(
    "/assign",
    response_model=AssignRoleResponse,
    operation_id="assignRole",
)
async def assign_role(
    request: AssignRoleRequest,
    admin_id: str = Depends(require_policy(Resource.ROLE, Action.MANAGE)),
    service: RoleService = Depends(get_role_service),
) -> AssignRoleResponse:
    """
    Assign a role to a user.

    Requires MANAGE_ROLES permission (administrators only).
    """
    assignment = await service.assign_role(
        request.target_user_id, request.role, admin_id
    )
    return AssignRoleResponse(
        message=(
            f"Role {request.role.value} assigned to user "
            f"{request.target_user_id} successfully"
        ),
        assignment=UserRoleResponse.from_user_role(assignment),
    )


@router.get(
    "/assignments",
    response_model=List[UserRoleResponse],
    operation_id="getUserRoles",
)
async def get_user_roles(
    user_id: str = Query(..., alias="userId", min_length=1),
    admin_id: str = Depends(require_policy(Resource.ROLE, Action.MANAGE)),
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> List[UserRoleResponse]:
    """
    List the roles assigned to a user.

    Requires MANAGE_ROLES permission (administrators only).
    """
    try:
        roles = await resolver.get_user_roles(user_id)
    except RoleLookupError as e:
        raise RoleStoreUnavailableError() from e
    return [UserRoleResponse.from_user_role(r) for r in roles]


@user_router.get(
    "/role",
    response_model=AdminStatusResponse,
    operation_id="getAdminStatus",
)
async def get_admin_status(
    user_id: str = Query(..., alias="userId", min_length=1),
    auth_id: str = Depends(require_policy(Resource.USER, Action.VIEW)),
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> AdminStatusResponse:
    """
    Report whether the caller is an administrator or moderator.

    Users may only query their own id.
    """
    try:
        is_admin = await resolver.is_admin(user_id)
        is_moderator = await resolver.is_moderator(user_id)
    except RoleLookupError as e:
        raise RoleStoreUnavailableError() from e
    return AdminStatusResponse(is_admin=is_admin, is_moderator=is_moderator)
