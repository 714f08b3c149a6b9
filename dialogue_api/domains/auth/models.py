# dialogue_api/domains/auth/models.py
from typing import List

from pydantic import BaseModel

from dialogue_api.shared.permissions import Permission, RoleName


class SessionPermissions(BaseModel):
    user_id: str
    roles: List[RoleName]
    permissions: List[Permission]
