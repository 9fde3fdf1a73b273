# marketadmin/schemas/audit.py
"""
Audit log schemas.

Each admin action has its own details model, discriminated on ``action``.
Fields that do not belong to any model yet go in ``extra``; writers must put
them there explicitly, readers move unknown stored keys there.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, Literal, Optional, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from marketadmin.models.admin_user import AdminRole
from marketadmin.models.audit_log import AuditTargetType


class _Details(BaseModel):
    extra: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    def to_record(self) -> Dict[str, Any]:
        """JSON payload stored in ``admin_audit_log.details``."""
        record = self.model_dump(mode="json", exclude={"action"}, exclude_none=True)
        if not record.get("extra"):
            record.pop("extra", None)
        return record


# ---------- users ----------

class UserWarnedDetails(_Details):
    action: Literal["user_warned"] = "user_warned"
    message: str
    internal_notes: Optional[str] = None
    new_warning_count: int


class WarningIssuedDetails(_Details):
    action: Literal["warning_issued"] = "warning_issued"
    report_id: str
    message: str
    internal_notes: Optional[str] = None
    new_warning_count: int


class UserSuspendedDetails(_Details):
    action: Literal["user_suspended"] = "user_suspended"
    report_id: Optional[str] = None
    duration: str
    custom_days: Optional[int] = None
    days: int
    suspension_until: datetime
    reason: str
    internal_notes: Optional[str] = None


class UserBannedDetails(_Details):
    action: Literal["user_banned"] = "user_banned"
    report_id: Optional[str] = None
    reason: str
    internal_notes: Optional[str] = None


class UserReactivatedDetails(_Details):
    action: Literal["user_reactivated"] = "user_reactivated"
    previous_status: Optional[str] = None
    internal_notes: Optional[str] = None


class WarningsResetDetails(_Details):
    action: Literal["warnings_reset"] = "warnings_reset"
    previous_warning_count: Optional[int] = None


# ---------- listings ----------

class ListingApprovedDetails(_Details):
    action: Literal["listing_approved"] = "listing_approved"
    listing_id: int
    internal_notes: Optional[str] = None
    bulk_action: Optional[bool] = None


class ListingRejectedDetails(_Details):
    action: Literal["listing_rejected"] = "listing_rejected"
    listing_id: int
    reason: str
    internal_notes: Optional[str] = None


class ListingRemovedDetails(_Details):
    action: Literal["listing_removed"] = "listing_removed"
    listing_id: int
    report_id: Optional[str] = None
    reason: str
    notify_seller: Optional[bool] = None
    internal_notes: Optional[str] = None
    bulk_action: Optional[bool] = None


class ListingRestoredDetails(_Details):
    action: Literal["listing_restored"] = "listing_restored"
    listing_id: int


# ---------- reports ----------

class ReportDismissedDetails(_Details):
    action: Literal["report_dismissed"] = "report_dismissed"
    report_id: str
    reason: Optional[str] = None


class ReportReviewedDetails(_Details):
    action: Literal["report_reviewed"] = "report_reviewed"
    report_id: str


class ReportNotesUpdatedDetails(_Details):
    action: Literal["report_notes_updated"] = "report_notes_updated"
    report_id: str


# ---------- admins ----------

class AdminCreatedDetails(_Details):
    action: Literal["admin_created"] = "admin_created"
    user_id: str
    role: AdminRole


class AdminUpdatedDetails(_Details):
    action: Literal["admin_updated"] = "admin_updated"
    user_id: str
    previous_role: Optional[AdminRole] = None
    new_role: Optional[AdminRole] = None
    is_active: Optional[bool] = None


AuditDetails = Annotated[
    Union[
        UserWarnedDetails,
        WarningIssuedDetails,
        UserSuspendedDetails,
        UserBannedDetails,
        UserReactivatedDetails,
        WarningsResetDetails,
        ListingApprovedDetails,
        ListingRejectedDetails,
        ListingRemovedDetails,
        ListingRestoredDetails,
        ReportDismissedDetails,
        ReportReviewedDetails,
        ReportNotesUpdatedDetails,
        AdminCreatedDetails,
        AdminUpdatedDetails,
    ],
    Field(discriminator="action"),
]

DETAILS_BY_ACTION = {
    model.model_fields["action"].default: model
    for model in get_args(get_args(AuditDetails)[0])
}


def parse_details(action: str, record: Optional[Dict[str, Any]]) -> Optional[BaseModel]:
    """
    Rebuild the typed details for a stored row.

    Keys the action's model does not declare, such as ones written by a newer
    release, are carried into ``extra`` rather than failing the row. Returns
    None for an unknown action or when a declared field does not validate.
    """
    model = DETAILS_BY_ACTION.get(action)
    if model is None:
        return None

    record = record or {}
    stored_extra = record.get("extra")
    extra = dict(stored_extra) if isinstance(stored_extra, dict) else {}
    known = {}
    for key, value in record.items():
        if key in ("action", "extra"):
            continue
        if key in model.model_fields:
            known[key] = value
        else:
            extra[key] = value

    try:
        return model.model_validate({**known, "extra": extra})
    except ValidationError:
        return None


# ======================
# READ SCHEMAS
# ======================

class AuditLogRead(BaseModel):
    id: str
    admin_id: str
    action: str
    target_type: AuditTargetType
    target_id: str
    details: Optional[Dict[str, Any]] = None
    parsed_details: Optional[AuditDetails] = None
    ip_address: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="after")
    def attach_parsed_details(self):
        if self.parsed_details is None:
            self.parsed_details = parse_details(self.action, self.details)
        return self
