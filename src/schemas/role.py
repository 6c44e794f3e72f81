from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from models.user_role import AppRole


class RoleAssignment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    role: AppRole
    created_at: Optional[datetime] = None


class GrantRoleRequest(BaseModel):
    user_id: str
    role: AppRole
