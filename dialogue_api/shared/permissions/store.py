import asyncio
import logging
from typing import TYPE_CHECKING, Any, List, Protocol

from dialogue_api.core.settings import settings

from .exceptions import RoleLookupError
from .models import Permission, RoleName, UserRole

if TYPE_CHECKING:
    from prisma import Prisma

logger = logging.getLogger(__name__)


class RoleStore(Protocol):
    """Read access to role assignments. Any storage technology may implement it."""

    async def list_roles_for_user(self, user_id: str) -> List[UserRole]: ...


class PrismaRoleStore:
    """Role store backed by the UserRole and Role tables."""

    def __init__(self, db: "Prisma", timeout: float | None = None):
        self.db = db
        self.timeout = settings.ROLE_LOOKUP_TIMEOUT if timeout is None else timeout

    async def list_roles_for_user(self, user_id: str) -> List[UserRole]:
        """
        Load every role assigned to a user.

        Args:
            user_id: Identity provider user id

        Returns:
            The user's role assignments, possibly empty

        Raises:
            RoleLookupError: If the query fails, times out, or returns
                rows that do not name a known role
        """
        try:
            records = await asyncio.wait_for(
                self.db.userrole.find_many(
                    where={"userId": user_id},
                    include={"role": True},
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Role lookup timed out after {self.timeout}s for {user_id}")
            raise RoleLookupError(user_id, "role store timed out")
        except Exception as e:
            logger.error(f"Role lookup failed for {user_id}: {e}")
            raise RoleLookupError(user_id, str(e)) from e

        return [self._to_user_role(user_id, record) for record in records]

    @staticmethod
    def _to_user_role(user_id: str, record: Any) -> UserRole:
        role = getattr(record, "role", None)
        if role is None:
            raise RoleLookupError(user_id, "assignment without role")

        try:
            return UserRole(
                user_id=record.userId,
                role_name=RoleName(role.name),
                permissions=frozenset(Permission(p) for p in role.permissions or []),
                assigned_by=record.assignedBy,
                created_at=record.createdAt,
            )
        except ValueError as e:
            raise RoleLookupError(user_id, f"malformed role data: {e}") from e
