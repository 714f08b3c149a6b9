# dialogue_api/domains/roles/service.py
import logging
from typing import TYPE_CHECKING, Any, Optional

from dialogue_api.shared.exceptions import RoleNotFoundError
from dialogue_api.shared.permissions import RoleName, UserRole, permissions_for

if TYPE_CHECKING:
    from prisma import Prisma

logger = logging.getLogger(__name__)


class RoleService:
    """Role lookups and assignment against the Role and UserRole tables."""

    def __init__(self, db: "Prisma"):
        self.db = db

    async def get_role(self, role_name: RoleName) -> Optional[Any]:
        return await self.db.role.find_unique(where={"name": role_name.value})

    async def assign_role(
        self, user_id: str, role_name: RoleName, assigned_by: str
    ) -> UserRole:
        """
        Assign a role to a user. Assigning a role the user already holds
        leaves the existing assignment untouched.

        Args:
            user_id: User receiving the role
            role_name: Role to assign
            assigned_by: Id of the administrator making the assignment

        Returns:
            The resulting assignment

        Raises:
            RoleNotFoundError: If the role row has not been seeded
        """
        role = await self.get_role(role_name)
        if not role:
            raise RoleNotFoundError(f"Role {role_name.value} does not exist")

        record = await self.db.userrole.upsert(
            where={"userId_roleId": {"userId": user_id, "roleId": role.id}},
            data={
                "create": {
                    "userId": user_id,
                    "roleId": role.id,
                    "assignedBy": assigned_by,
                },
                "update": {},
            },
        )
        logger.info(f"Role {role_name.value} assigned to {user_id} by {assigned_by}")

        return UserRole(
            user_id=record.userId,
            role_name=role_name,
            permissions=permissions_for(role_name),
            assigned_by=record.assignedBy,
            created_at=record.createdAt,
        )
