"""
Declarative access policies, keyed by (resource, action).

Each policy names the permissions an action requires and whether the owner
of the resource may act on it regardless of those permissions.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional, Tuple

from .models import Permission


class Resource(str, Enum):
    DIALOGUE = "dialogue"
    USER = "user"
    ROLE = "role"


class Action(str, Enum):
    CREATE = "create"
    VIEW = "view"
    EDIT = "edit"
    DELETE = "delete"
    PUBLISH = "publish"
    MANAGE = "manage"


class MatchMode(str, Enum):
    """How a policy's required permissions are combined."""

    ALL = "all"
    ANY = "any"


@dataclass(frozen=True)
class Policy:
    required_permissions: FrozenSet[Permission] = frozenset()
    mode: MatchMode = MatchMode.ALL
    allow_self: bool = False
    self_key_field: Optional[str] = None

    @property
    def is_open(self) -> bool:
        """True when the policy neither requires permissions nor checks ownership."""
        return not self.required_permissions and not self.allow_self

    def owner_from(self, source: Mapping[str, Any]) -> Optional[str]:
        """
        Read the resource owner's id out of request parameters or a record.

        Args:
            source: Path/query parameters or a resource's field mapping

        Returns:
            The owner id, or None when the policy has no self key or the
            mapping does not carry it
        """
        if not self.allow_self or not self.self_key_field:
            return None
        owner = source.get(self.self_key_field)
        return str(owner) if owner else None


RBAC_POLICIES: Mapping[Tuple[Resource, Action], Policy] = MappingProxyType(
    {
        (Resource.DIALOGUE, Action.CREATE): Policy(
            required_permissions=frozenset({Permission.CREATE_DIALOGUE}),
        ),
        (Resource.DIALOGUE, Action.VIEW): Policy(),
        (Resource.DIALOGUE, Action.EDIT): Policy(
            required_permissions=frozenset({Permission.EDIT_DIALOGUE}),
            allow_self=True,
            self_key_field="userId",
        ),
        (Resource.DIALOGUE, Action.DELETE): Policy(
            required_permissions=frozenset({Permission.DELETE_DIALOGUE}),
            allow_self=True,
            self_key_field="userId",
        ),
        (Resource.DIALOGUE, Action.PUBLISH): Policy(
            required_permissions=frozenset({Permission.PUBLISH_DIALOGUE}),
        ),
        (Resource.USER, Action.MANAGE): Policy(
            required_permissions=frozenset({Permission.MANAGE_USERS}),
        ),
        (Resource.USER, Action.VIEW): Policy(
            allow_self=True,
            self_key_field="userId",
        ),
        (Resource.ROLE, Action.MANAGE): Policy(
            required_permissions=frozenset({Permission.MANAGE_ROLES}),
        ),
    }
)


def policy_for(resource: Resource, action: Action) -> Policy:
    """
    Look up the policy for a resource action.

    Raises:
        KeyError: If no policy is declared for the pair
    """
    try:
        return RBAC_POLICIES[(resource, action)]
    except KeyError:
        raise KeyError(
            f"No policy declared for {getattr(action, 'value', action)} "
            f"on {getattr(resource, 'value', resource)}"
        ) from None
