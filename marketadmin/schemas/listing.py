from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marketadmin.models.listing import ListingModerationStatus, ListingStatus
from marketadmin.schemas.common import optional_text, require_text
from marketadmin.schemas.user import ProfileSummary


# ======================
# LISTING READ SCHEMAS
# ======================

class ListingRead(BaseModel):
    id: int
    user_id: str
    title: str
    description: str
    category_id: int
    subcategory_id: Optional[int] = None
    price: float
    currency: str
    images: List[str] = []
    status: ListingStatus
    location: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    moderation_status: ListingModerationStatus
    removal_reason: Optional[str] = None
    removed_by: Optional[str] = None
    removed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ListingWithSeller(ListingRead):
    seller: Optional[ProfileSummary] = None


# ======================
# LISTING MODERATION REQUESTS
# ======================

class ApproveListingRequest(BaseModel):
    internal_notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("internal_notes")
    @classmethod
    def validate_notes(cls, v):
        return optional_text(v)


class RejectListingRequest(BaseModel):
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


class RemoveListingRequest(RejectListingRequest):
    notify_seller: bool = False


class BulkApproveRequest(BaseModel):
    listing_ids: List[int] = Field(..., min_length=1, max_length=500)


class BulkRemoveRequest(BulkApproveRequest):
    reason: str = Field(..., max_length=2000)

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v):
        return require_text(v, "reason")


class BulkActionResult(BaseModel):
    message: str
    listing_ids: List[int]
    moderation_status: ListingModerationStatus
    audit_entries: int
