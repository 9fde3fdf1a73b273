from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marketadmin.models.admin_user import AdminRole
from marketadmin.permissions import Permission
from marketadmin.schemas.common import require_text


class AdminUserRead(BaseModel):
    id: str
    user_id: str
    role: AdminRole
    is_active: bool
    created_by: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminMe(BaseModel):
    """Identity of the calling admin plus what the dashboard may show them."""
    admin_id: str
    user_id: str
    role: AdminRole
    permissions: List[Permission]


class AdminCreateRequest(BaseModel):
    user_id: str = Field(..., max_length=36)
    role: AdminRole = AdminRole.MODERATOR

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v):
        return require_text(v, "user_id")


class AdminUpdateRequest(BaseModel):
    role: Optional[AdminRole] = None
    is_active: Optional[bool] = None
