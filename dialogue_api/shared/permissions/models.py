from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from pydantic import BaseModel, ConfigDict


class Permission(str, Enum):
    """
    Defines all permissions available in the system.

    Permissions follow the pattern: ACTION_RESOURCE. Values match the
    ``Permission`` enum in prisma/schema.prisma.
    """

    # Dialogue permissions
    CREATE_DIALOGUE = "CREATE_DIALOGUE"  # Create new dialogues
    EDIT_DIALOGUE = "EDIT_DIALOGUE"  # Update any dialogue's content and metadata
    DELETE_DIALOGUE = "DELETE_DIALOGUE"  # Delete any dialogue
    PUBLISH_DIALOGUE = "PUBLISH_DIALOGUE"  # Make a dialogue publicly visible

    # Administration permissions
    MANAGE_USERS = "MANAGE_USERS"  # Moderate and suspend users
    MANAGE_ROLES = "MANAGE_ROLES"  # Assign roles to users


class RoleName(str, Enum):
    """Built-in roles. No dynamic role creation."""

    ADMIN = "ADMIN"
    MODERATOR = "MODERATOR"
    USER = "USER"


ROLE_PERMISSIONS: Mapping[RoleName, FrozenSet[Permission]] = MappingProxyType(
    {
        RoleName.ADMIN: frozenset(
            {
                # Admins have all permissions
                Permission.CREATE_DIALOGUE,
                Permission.EDIT_DIALOGUE,
                Permission.DELETE_DIALOGUE,
                Permission.PUBLISH_DIALOGUE,
                Permission.MANAGE_USERS,
                Permission.MANAGE_ROLES,
            }
        ),
        RoleName.MODERATOR: frozenset(
            {
                # Moderators have everything except role management
                Permission.CREATE_DIALOGUE,
                Permission.EDIT_DIALOGUE,
                Permission.DELETE_DIALOGUE,
                Permission.PUBLISH_DIALOGUE,
                Permission.MANAGE_USERS,
            }
        ),
        RoleName.USER: frozenset(
            {
                # Basic users manage dialogues but cannot publish
                Permission.CREATE_DIALOGUE,
                Permission.EDIT_DIALOGUE,
                Permission.DELETE_DIALOGUE,
            }
        ),
    }
)


def permissions_for(role: RoleName) -> FrozenSet[Permission]:
    """
    Get the permissions granted by a role.

    Args:
        role: The role to look up

    Returns:
        Immutable set of permissions for the role

    Raises:
        KeyError: If the role is not a registered RoleName
    """
    return ROLE_PERMISSIONS[role]


class UserRole(BaseModel):
    """A role held by a user, as reported by the role store."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    role_name: RoleName
    permissions: FrozenSet[Permission] = frozenset()
    assigned_by: Optional[str] = None
    created_at: Optional[datetime] = None
