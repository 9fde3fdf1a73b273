import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marketadmin.models.profile import ModerationStatus
from marketadmin.schemas.common import optional_text, require_text


class SuspensionDuration(str, enum.Enum):
    ONE_DAY = "1_day"
    THREE_DAYS = "3_days"
    SEVEN_DAYS = "7_days"
    THIRTY_DAYS = "30_days"
    CUSTOM = "custom"


# ======================
# PROFILE READ SCHEMAS
# ======================

class ProfileSummary(BaseModel):
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    moderation_status: ModerationStatus
    warning_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class ProfileRead(ProfileSummary):
    phone_number: Optional[str] = None
    email_verified: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    suspension_until: Optional[datetime] = None
    ban_reason: Optional[str] = None


class ProfileListItem(ProfileRead):
    listings_count: int = 0
    reports_count: int = 0


# ======================
# USER MODERATION REQUESTS
# ======================

class WarnUserRequest(BaseModel):
    message: str = Field(..., max_length=2000, description="Warning shown to the user")
    internal_notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("message")
    @classmethod
    def validate_message(cls, v):
        return require_text(v, "message")

    @field_validator("internal_notes")
    @classmethod
    def validate_notes(cls, v):
        return optional_text(v)


class SuspendUserRequest(BaseModel):
    duration: SuspensionDuration
    custom_days: Optional[int] = Field(None, ge=0, description="Used when duration is 'custom'; 0 means 1 day")
    reason: str = Field(..., max_length=2000)
    internal_notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v):
        return require_text(v, "reason")

    @field_validator("internal_notes")
    @classmethod
    def validate_notes(cls, v):
        return optional_text(v)


class BanUserRequest(BaseModel):
    reason: str = Field(..., max_length=2000)
    internal_notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v):
        return require_text(v, "reason")

    @field_validator("internal_notes")
    @classmethod
    def validate_notes(cls, v):
        return optional_text(v)


class ReactivateUserRequest(BaseModel):
    internal_notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("internal_notes")
    @classmethod
    def validate_notes(cls, v):
        return optional_text(v)
