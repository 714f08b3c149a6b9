"""
Access gate: the single place where allow/deny decisions are made.

Route dependencies and handlers call the gate before executing an action.
A role store failure propagates as ``RoleLookupError`` and is never turned
into a denial.
"""

import logging
from enum import Enum
from typing import Iterable, Optional

from .exceptions import Forbidden, Unauthenticated
from .models import Permission
from .policies import Action, MatchMode, Resource, policy_for
from .services import PermissionResolver

logger = logging.getLogger(__name__)


class AccessDecision(str, Enum):
    GRANTED = "granted"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


class AccessGate:
    def __init__(self, resolver: PermissionResolver):
        self.resolver = resolver

    async def decide(
        self,
        user_id: Optional[str],
        resource: Resource,
        action: Action,
        resource_owner_id: Optional[str] = None,
    ) -> AccessDecision:
        """
        Evaluate the policy for (resource, action) on behalf of a user.

        Order of evaluation:
        1. No identity denies immediately.
        2. An open policy grants.
        3. A self-override policy grants the resource owner.
        4. Otherwise the user's effective permissions must satisfy the
           policy's required permissions under its match mode.

        Args:
            user_id: Acting user's id, None when unauthenticated
            resource: Resource being acted on
            action: Action being performed
            resource_owner_id: Owner of the resource, for self-override

        Returns:
            The access decision

        Raises:
            RoleLookupError: If the user's roles cannot be loaded
        """
        if not user_id:
            return AccessDecision.UNAUTHENTICATED

        policy = policy_for(resource, action)
        if policy.is_open:
            return AccessDecision.GRANTED

        if policy.allow_self and resource_owner_id and user_id == resource_owner_id:
            return AccessDecision.GRANTED

        # Self-only policy and the caller is not the owner
        if not policy.required_permissions:
            return AccessDecision.FORBIDDEN

        if policy.mode == MatchMode.ANY:
            allowed = await self.resolver.has_any_permission(
                user_id, policy.required_permissions
            )
        else:
            allowed = await self.resolver.has_all_permissions(
                user_id, policy.required_permissions
            )
        return AccessDecision.GRANTED if allowed else AccessDecision.FORBIDDEN

    async def authorize(
        self,
        user_id: Optional[str],
        resource: Resource,
        action: Action,
        resource_owner_id: Optional[str] = None,
    ) -> bool:
        decision = await self.decide(user_id, resource, action, resource_owner_id)
        return decision == AccessDecision.GRANTED

    async def enforce(
        self,
        user_id: Optional[str],
        resource: Resource,
        action: Action,
        resource_owner_id: Optional[str] = None,
    ) -> str:
        """
        Like ``authorize`` but raises on denial.

        Returns:
            The authorized user id

        Raises:
            Unauthenticated: If no identity was supplied
            Forbidden: If the identity does not satisfy the policy
            RoleLookupError: If the user's roles cannot be loaded
        """
        decision = await self.decide(user_id, resource, action, resource_owner_id)
        if decision == AccessDecision.UNAUTHENTICATED:
            raise Unauthenticated()
        if decision == AccessDecision.FORBIDDEN:
            logger.info(f"Denied {action.value} on {resource.value} for user {user_id}")
            raise Forbidden(str(user_id), resource.value, action.value)
        return str(user_id)

    async def check_permissions(
        self,
        user_id: Optional[str],
        permissions: Iterable[Permission],
        require_all: bool = True,
    ) -> bool:
        """
        Permission-list gate without a policy. An empty list grants any
        authenticated user.
        """
        if not user_id:
            return False
        required = frozenset(permissions)
        if not required:
            return True
        if require_all:
            return await self.resolver.has_all_permissions(user_id, required)
        return await self.resolver.has_any_permission(user_id, required)
