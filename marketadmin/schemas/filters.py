# marketadmin/schemas/filters.py
"""
Structured filters for the list endpoints.

``"all"`` is accepted anywhere a status or tri-state flag is expected and is
normalised to ``None`` (no predicate).
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from marketadmin.models.audit_log import AuditTargetType
from marketadmin.models.feedback import FeedbackStatus, FeedbackType
from marketadmin.models.listing import ListingModerationStatus, ListingStatus
from marketadmin.models.profile import ModerationStatus
from marketadmin.models.report import ReportReason, ReportStatus

ALL = "all"

SortOrder = Literal["asc", "desc"]


def _all_to_none(value):
    if isinstance(value, str) and value.strip().lower() == ALL:
        return None
    return value


def _blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class _Filters(BaseModel):
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None


class UserFilters(_Filters):
    search: Optional[str] = None
    moderation_status: Optional[ModerationStatus] = None
    email_verified: Optional[bool] = None
    has_avatar: Optional[bool] = None
    listings_count: Optional[Literal["0", "1-5", "5+"]] = None
    reports_against: Optional[Literal["0", "1-3", "3+"]] = None
    sort_by: Literal["created_at", "display_name", "email"] = "created_at"
    sort_order: SortOrder = "desc"

    normalise_all = field_validator(
        "moderation_status", "email_verified", "has_avatar", "listings_count", "reports_against",
        mode="before",
    )(_all_to_none)
    normalise_search = field_validator("search", mode="before")(_blank_to_none)


class ListingFilters(_Filters):
    search: Optional[str] = None
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    status: Optional[ListingStatus] = None
    moderation_status: Optional[ListingModerationStatus] = None
    price_min: Optional[float] = Field(None, ge=0)
    price_max: Optional[float] = Field(None, ge=0)
    has_images: Optional[bool] = None
    location: Optional[str] = None
    seller_id: Optional[str] = None
    sort_by: Literal["created_at", "price", "title"] = "created_at"
    sort_order: SortOrder = "desc"

    normalise_all = field_validator(
        "status", "moderation_status", "has_images", mode="before",
    )(_all_to_none)
    normalise_text = field_validator("search", "location", mode="before")(_blank_to_none)


class ReportFilters(_Filters):
    status: Optional[ReportStatus] = None
    reasons: List[ReportReason] = []
    target_type: Optional[Literal["listing", "user"]] = None
    reporter_id: Optional[str] = None

    normalise_all = field_validator("status", "target_type", mode="before")(_all_to_none)


class AuditLogFilters(_Filters):
    admin_id: Optional[str] = None
    action: Optional[str] = None
    target_type: Optional[AuditTargetType] = None
    target_id: Optional[str] = None

    normalise_all = field_validator("target_type", mode="before")(_all_to_none)


class FeedbackFilters(_Filters):
    search: Optional[str] = None
    type: Optional[FeedbackType] = None
    status: Optional[FeedbackStatus] = None

    normalise_all = field_validator("type", "status", mode="before")(_all_to_none)
    normalise_search = field_validator("search", mode="before")(_blank_to_none)
