from typing import Awaitable, Callable, Optional

from fastapi import Depends, Request

from dialogue_api.core.database import get_db
from dialogue_api.domains.auth.dependencies import get_auth_id, get_optional_auth_id
from dialogue_api.shared.exceptions import (
    InvalidTokenError,
    NotAuthorizedError,
    RoleStoreUnavailableError,
)

from .exceptions import Forbidden, RoleLookupError, Unauthenticated
from .gate import AccessGate
from .models import Permission
from .policies import Action, Resource, policy_for
from .services import PermissionResolver
from .store import PrismaRoleStore, RoleStore


def get_role_store(db=Depends(get_db)) -> RoleStore:
    return PrismaRoleStore(db)


def get_permission_resolver(
    store: RoleStore = Depends(get_role_store),
) -> PermissionResolver:
    return PermissionResolver(store)


def get_access_gate(
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> AccessGate:
    return AccessGate(resolver)


async def enforce_policy(
    gate: AccessGate,
    user_id: Optional[str],
    resource: Resource,
    action: Action,
    resource_owner_id: Optional[str] = None,
) -> str:
    """
    Run the gate and translate its outcome into HTTP errors.

    Returns:
        The authorized user id

    Raises:
        InvalidTokenError: 401 when no identity was supplied
        NotAuthorizedError: 403 when the policy is not satisfied
        RoleStoreUnavailableError: 503 when roles could not be loaded
    """
    try:
        return await gate.enforce(user_id, resource, action, resource_owner_id)
    except Unauthenticated:
        raise InvalidTokenError("Missing token")
    except Forbidden:
        raise NotAuthorizedError(
            f"Insufficient permissions to {action.value} {resource.value}"
        )
    except RoleLookupError as e:
        raise RoleStoreUnavailableError() from e


def require_policy(
    resource: Resource, action: Action
) -> Callable[..., Awaitable[str]]:
    """
    Dependency factory for policy-based authorization.

    Creates a dependency that evaluates the (resource, action) policy for
    the current user. For self-override policies the owner id is read from
    the path or query parameter named by the policy's ``self_key_field``.

    Args:
        resource: The resource the endpoint acts on
        action: The action the endpoint performs

    Returns:
        Async dependency function that validates access and returns the
        authorized user id
    """
    policy = policy_for(resource, action)

    async def check_policy(
        request: Request,
        auth_id: Optional[str] = Depends(get_optional_auth_id),
        gate: AccessGate = Depends(get_access_gate),
    ) -> str:
        params = dict(request.query_params)
        params.update(request.path_params)
        return await enforce_policy(
            gate, auth_id, resource, action, policy.owner_from(params)
        )

    return check_policy


def require_permissions(
    *permissions: Permission, require_all: bool = True
) -> Callable[..., Awaitable[str]]:
    """
    Dependency factory for permission-list authorization.

    With ``require_all`` every listed permission is needed, otherwise any
    one of them suffices. An empty list admits any authenticated user.
    """

    async def check_permissions(
        auth_id: str = Depends(get_auth_id),
        gate: AccessGate = Depends(get_access_gate),
    ) -> str:
        try:
            allowed = await gate.check_permissions(auth_id, permissions, require_all)
        except RoleLookupError as e:
            raise RoleStoreUnavailableError() from e

        if not allowed:
            names = ", ".join(p.value for p in permissions)
            raise NotAuthorizedError(f"Insufficient permissions: {names} required")
        return auth_id

    return check_permissions
