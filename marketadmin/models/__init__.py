# marketadmin/models/__init__.py
# Import models in dependency order
from .admin_user import AdminUser, AdminRole
from .profile import Profile, ModerationStatus
from .listing import Listing, ListingStatus, ListingModerationStatus
from .report import Report, ReportReason, ReportStatus, ReportResolution, OPEN_REPORT_STATUSES
from .audit_log import AuditLogEntry, AuditTargetType
from .feedback import UserFeedback, FeedbackType, FeedbackStatus

__all__ = [
    "AdminUser",
    "AdminRole",
    "Profile",
    "ModerationStatus",
    "Listing",
    "ListingStatus",
    "ListingModerationStatus",
    "Report",
    "ReportReason",
    "ReportStatus",
    "ReportResolution",
    "OPEN_REPORT_STATUSES",
    "AuditLogEntry",
    "AuditTargetType",
    "UserFeedback",
    "FeedbackType",
    "FeedbackStatus",
]
