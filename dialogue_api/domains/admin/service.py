# dialogue_api/domains/admin/service.py
from typing import TYPE_CHECKING, List

from dialogue_api.domains.admin.models import PlatformStats, RoleDefinition
from dialogue_api.shared.permissions import ROLE_PERMISSIONS, RoleName

if TYPE_CHECKING:
    from prisma import Prisma


class AdminService:
    def __init__(self, db: "Prisma"):
        self.db = db

    async def get_stats(self) -> PlatformStats:
        total = await self.db.dialogue.count()
        published = await self.db.dialogue.count(where={"isPublished": True})

        assignments = {}
        for role in RoleName:
            assignments[role] = await self.db.userrole.count(
                where={"role": {"is": {"name": role.value}}}
            )

        return PlatformStats(
            totalDialogues=total,
            publishedDialogues=published,
            roleAssignments=assignments,
        )

    @staticmethod
    def list_role_definitions() -> List[RoleDefinition]:
        """The built-in roles and what each grants."""
        return [
            RoleDefinition(
                role=role,
                permissions=sorted(permissions, key=lambda p: p.value),
            )
            for role, permissions in ROLE_PERMISSIONS.items()
        ]
