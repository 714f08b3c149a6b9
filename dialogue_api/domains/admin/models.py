# dialogue_api/domains/admin/models.py
from typing import Dict, List

from pydantic import BaseModel

from dialogue_api.shared.permissions import Permission, RoleName


class PlatformStats(BaseModel):
    totalDialogues: int
    publishedDialogues: int
    roleAssignments: Dict[RoleName, int]


class RoleDefinition(BaseModel):
    role: RoleName
    permissions: List[Permission]
