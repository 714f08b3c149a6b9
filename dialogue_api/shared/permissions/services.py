from typing import FrozenSet, Iterable, List

from .models import ROLE_PERMISSIONS, Permission, RoleName, UserRole, permissions_for
from .store import RoleStore


def has_permission(role: RoleName, permission: Permission) -> bool:
    """
    Check if a role has a specific permission.

    Args:
        role: The role to check
        permission: The permission to validate

    Returns:
        True if the role has the permission, False otherwise
    """
    return permission in ROLE_PERMISSIONS.get(role, frozenset())


class PermissionResolver:
    """Resolves a user's effective permissions from their role assignments."""

    def __init__(self, store: RoleStore):
        self.store = store

    async def get_user_roles(self, user_id: str) -> List[UserRole]:
        """
        Get the roles assigned to a user.

        Raises:
            RoleLookupError: If the role store cannot be read
        """
        return await self.store.list_roles_for_user(user_id)

    async def effective_permissions(self, user_id: str) -> FrozenSet[Permission]:
        """
        Union of the registry permissions of every role the user holds.

        Permissions stored alongside an assignment are ignored; the
        registry is authoritative.
        """
        return self.permissions_of(await self.get_user_roles(user_id))

    @staticmethod
    def permissions_of(roles: Iterable[UserRole]) -> FrozenSet[Permission]:
        return frozenset().union(*(permissions_for(r.role_name) for r in roles))

    async def has_permission(self, user_id: str, permission: Permission) -> bool:
        return permission in await self.effective_permissions(user_id)

    async def has_all_permissions(
        self, user_id: str, permissions: Iterable[Permission]
    ) -> bool:
        required = frozenset(permissions)
        if not required:
            return True
        return required <= await self.effective_permissions(user_id)

    async def has_any_permission(
        self, user_id: str, permissions: Iterable[Permission]
    ) -> bool:
        candidates = frozenset(permissions)
        if not candidates:
            return False
        return bool(candidates & await self.effective_permissions(user_id))

    async def has_role(self, user_id: str, role: RoleName) -> bool:
        roles = await self.get_user_roles(user_id)
        return any(r.role_name == role for r in roles)

    async def is_admin(self, user_id: str) -> bool:
        return await self.has_role(user_id, RoleName.ADMIN)

    async def is_moderator(self, user_id: str) -> bool:
        """Admins count as moderators."""
        roles = await self.get_user_roles(user_id)
        return any(r.role_name in (RoleName.ADMIN, RoleName.MODERATOR) for r in roles)
