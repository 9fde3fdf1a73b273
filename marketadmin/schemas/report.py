from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marketadmin.models.report import ReportReason, ReportResolution, ReportStatus
from marketadmin.schemas.common import optional_text
from marketadmin.schemas.listing import ListingWithSeller
from marketadmin.schemas.user import ProfileSummary


class ReportRead(BaseModel):
    id: str
    reporter_id: str
    reported_user_id: Optional[str] = None
    reported_listing_id: Optional[int] = None
    reason: ReportReason
    description: Optional[str] = None
    status: ReportStatus
    resolution: Optional[ReportResolution] = None
    resolved_by: Optional[str] = None
    resolved_at: Optional[datetime] = None
    admin_notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReportWithParties(ReportRead):
    reporter: Optional[ProfileSummary] = None
    reported_user: Optional[ProfileSummary] = None
    reported_listing: Optional[ListingWithSeller] = None


# ======================
# REPORT ACTION REQUESTS
# ======================
# warn / suspend / ban reuse the user request schemas;
# remove_listing reuses RemoveListingRequest.

class DismissReportRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=2000)

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v):
        return optional_text(v)


class ReportNotesRequest(BaseModel):
    notes: Optional[str] = Field(None, max_length=4000)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return optional_text(v)
