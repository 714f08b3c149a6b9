"""
Shared permission system for role-based access control.

This module provides a centralized permission system that can be used
across all domains in the application.

Usage:
    from dialogue_api.shared.permissions import Action, Resource, require_policy

    @router.post("/dialogues/{dialogue_id}/publish")
    async def publish_dialogue(
        user_id: str = Depends(require_policy(Resource.DIALOGUE, Action.PUBLISH))
    ):
        pass
"""

from .dependencies import (
    enforce_policy,
    get_access_gate,
    get_permission_resolver,
    require_permissions,
    require_policy,
)
from .exceptions import AuthorizationError, Forbidden, RoleLookupError, Unauthenticated
from .gate import AccessDecision, AccessGate
from .models import ROLE_PERMISSIONS, Permission, RoleName, UserRole, permissions_for
from .policies import RBAC_POLICIES, Action, MatchMode, Policy, Resource, policy_for
from .services import PermissionResolver, has_permission
from .store import PrismaRoleStore, RoleStore

__all__ = [
    "AccessDecision",
    "AccessGate",
    "Action",
    "AuthorizationError",
    "Forbidden",
    "MatchMode",
    "Permission",
    "PermissionResolver",
    "Policy",
    "PrismaRoleStore",
    "RBAC_POLICIES",
    "ROLE_PERMISSIONS",
    "Resource",
    "RoleLookupError",
    "RoleName",
    "RoleStore",
    "Unauthenticated",
    "UserRole",
    "enforce_policy",
    "get_access_gate",
    "get_permission_resolver",
    "has_permission",
    "permissions_for",
    "policy_for",
    "require_permissions",
    "require_policy",
]
