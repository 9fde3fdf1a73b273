# marketadmin/schemas/__init__.py

from .common import Page, ActionResult

# Admin schemas
from .admin import AdminUserRead, AdminMe, AdminCreateRequest, AdminUpdateRequest

# User (profile) schemas
from .user import (
    ProfileSummary,
    ProfileRead,
    ProfileListItem,
    SuspensionDuration,
    WarnUserRequest,
    SuspendUserRequest,
    BanUserRequest,
    ReactivateUserRequest,
)

# Listing schemas
from .listing import (
    ListingRead,
    ListingWithSeller,
    ApproveListingRequest,
    RejectListingRequest,
    RemoveListingRequest,
    BulkApproveRequest,
    BulkRemoveRequest,
    BulkActionResult,
)

# Report schemas
from .report import ReportRead, ReportWithParties, DismissReportRequest, ReportNotesRequest

from .feedback import FeedbackRead
from .audit import AuditLogRead, AuditDetails
from .detail import UserDetail, ListingDetail, ReportDetail
from .filters import UserFilters, ListingFilters, ReportFilters, AuditLogFilters, FeedbackFilters

__all__ = [
    "Page",
    "ActionResult",
    "AdminUserRead",
    "AdminMe",
    "AdminCreateRequest",
    "AdminUpdateRequest",
    "ProfileSummary",
    "ProfileRead",
    "ProfileListItem",
    "SuspensionDuration",
    "WarnUserRequest",
    "SuspendUserRequest",
    "BanUserRequest",
    "ReactivateUserRequest",
    "ListingRead",
    "ListingWithSeller",
    "ApproveListingRequest",
    "RejectListingRequest",
    "RemoveListingRequest",
    "BulkApproveRequest",
    "BulkRemoveRequest",
    "BulkActionResult",
    "ReportRead",
    "ReportWithParties",
    "DismissReportRequest",
    "ReportNotesRequest",
    "FeedbackRead",
    "AuditLogRead",
    "AuditDetails",
    "UserDetail",
    "ListingDetail",
    "ReportDetail",
    "UserFilters",
    "ListingFilters",
    "ReportFilters",
    "AuditLogFilters",
    "FeedbackFilters",
]
