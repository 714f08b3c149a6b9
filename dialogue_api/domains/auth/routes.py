# dialogue_api/domains/auth/routes.py
from fastapi import APIRouter, Depends

from dialogue_api.domains.auth.dependencies import get_auth_id
from dialogue_api.domains.auth.models import SessionPermissions
from dialogue_api.shared.exceptions import RoleStoreUnavailableError
from dialogue_api.shared.permissions import (
    PermissionResolver,
    RoleLookupError,
    get_permission_resolver,
)

# Add a prefix and tag to group this route clearly in OpenAPI
router = APIRouter(prefix="/session", tags=["Sessions"])


@router.get(
    "/permissions",
    response_model=SessionPermissions,
    operation_id="getSessionPermissions",
)
async def get_session_permissions(
    auth_id: str = Depends(get_auth_id),
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> SessionPermissions:
    """
    Get the caller's roles and effective permissions.

    Clients use this to show or hide controls; the server still enforces
    every policy on its own.
    """
    try:
        roles = await resolver.get_user_roles(auth_id)
    except RoleLookupError as e:
        raise RoleStoreUnavailableError() from e

    return SessionPermissions(
        user_id=auth_id,
        roles=sorted({r.role_name for r in roles}, key=lambda r: r.value),
        permissions=sorted(resolver.permissions_of(roles), key=lambda p: p.value),
    )
