# dialogue_api/domains/roles/models.py
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dialogue_api.shared.permissions import Permission, RoleName, UserRole


class AssignRoleRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    target_user_id: str = Field(..., alias="targetUserId", min_length=1)
    role: RoleName

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: Any) -> Any:
        # Clients send lowercase role names ("admin", "moderator", "user")
        return v.upper() if isinstance(v, str) else v


class UserRoleResponse(BaseModel):
    user_id: str
    role: RoleName
    permissions: List[Permission]
    assigned_by: Optional[str]
    assigned_at: Optional[datetime]

    @classmethod
    def from_user_role(cls, user_role: UserRole) -> "UserRoleResponse":
        return cls(
            user_id=user_role.user_id,
            role=user_role.role_name,
            permissions=sorted(user_role.permissions, key=lambda p: p.value),
            assigned_by=user_role.assigned_by,
            assigned_at=user_role.created_at,
        )


class AssignRoleResponse(BaseModel):
    message: str
    assignment: UserRoleResponse


class AdminStatusResponse(BaseModel):
    is_admin: bool
    is_moderator: bool
