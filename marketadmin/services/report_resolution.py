# marketadmin/services/report_resolution.py
"""
Report resolution.

A report is closed exactly once, either dismissed or resolved with an action
against its target. The target change, the report change and the audit row
commit together. The report's version column makes two admins resolving the
same report at once fail with ConcurrentUpdateError instead of both winning.
"""

from __future__ import annotations

from typing import Optional, Union

from sqlalchemy.orm import Session

from marketadmin.context import AdminContext
from marketadmin.database import utcnow
from marketadmin.exceptions import (
    InvalidTransition,
    NotFoundError,
    ReportAlreadyClosed,
    ValidationFailed,
)
from marketadmin.models.audit_log import AuditTargetType
from marketadmin.models.listing import Listing
from marketadmin.models.profile import Profile
from marketadmin.models.report import Report, ReportResolution, ReportStatus
from marketadmin.schemas.audit import (
    ListingRemovedDetails,
    ReportDismissedDetails,
    ReportNotesUpdatedDetails,
    ReportReviewedDetails,
    UserBannedDetails,
    UserSuspendedDetails,
    WarningIssuedDetails,
)
from marketadmin.schemas.common import optional_text
from marketadmin.schemas.user import SuspensionDuration
from marketadmin.services import notification_service
from marketadmin.services.audit_service import ActionOutcome, atomic, record_action
from marketadmin.services.listing_moderation import apply_removal
from marketadmin.services.user_moderation import (
    apply_ban,
    apply_suspension,
    apply_warning,
    calculate_suspension_end,
    suspension_days,
)
from marketadmin.services.validation import required_text


def get_report(db: Session, report_id: str) -> Report:
    report = db.query(Report).filter(Report.id == report_id).first()
    if not report:
        raise NotFoundError("Report not found")
    return report


def _load_open_report(db: Session, report_id: str) -> Report:
    report = get_report(db, report_id)
    if not report.is_open:
        raise ReportAlreadyClosed(
            f"Report is already {ReportStatus(report.status).value}"
        )
    return report


def _close_report(
    report: Report,
    actor: AdminContext,
    status: ReportStatus,
    resolution: ReportResolution,
    admin_notes: Optional[str],
) -> None:
    report.status = status
    report.resolution = resolution
    report.resolved_by = actor.admin_id
    report.resolved_at = utcnow()
    report.admin_notes = admin_notes


def _report_target_user(db: Session, report: Report) -> Profile:
    """The reported user, or the seller of the reported listing."""
    if report.reported_user_id:
        user_id = report.reported_user_id
    else:
        listing = report.reported_listing
        if listing is None:
            raise NotFoundError("Reported listing not found")
        user_id = listing.user_id

    profile = db.query(Profile).filter(Profile.id == user_id).first()
    if not profile:
        raise NotFoundError("Reported user not found")
    return profile


def _report_target_listing(report: Report) -> Listing:
    if not report.reported_listing_id:
        raise ValidationFailed("This report is not about a listing")
    listing = report.reported_listing
    if listing is None:
        raise NotFoundError("Reported listing not found")
    return listing


# =====================================
# NON-RESOLVING ACTIONS
# =====================================

def dismiss_report(
    db: Session,
    actor: AdminContext,
    report_id: str,
    *,
    reason: Optional[str] = None,
) -> ActionOutcome:
    reason = optional_text(reason)

    with atomic(db, f"dismissing report {report_id}"):
        report = _load_open_report(db, report_id)
        _close_report(report, actor, ReportStatus.DISMISSED, ReportResolution.NO_ACTION, reason)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.REPORT,
            target_id=report.id,
            details=ReportDismissedDetails(report_id=report.id, reason=reason),
        )
    return ActionOutcome(report, entry)


def mark_under_review(db: Session, actor: AdminContext, report_id: str) -> ActionOutcome:
    with atomic(db, f"marking report {report_id} under review"):
        report = get_report(db, report_id)
        if report.status != ReportStatus.PENDING:
            raise InvalidTransition(
                f"Only pending reports can be put under review (status is "
                f"{ReportStatus(report.status).value})"
            )
        report.status = ReportStatus.UNDER_REVIEW
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.REPORT,
            target_id=report.id,
            details=ReportReviewedDetails(report_id=report.id),
        )
    return ActionOutcome(report, entry)


def update_report_notes(
    db: Session,
    actor: AdminContext,
    report_id: str,
    *,
    notes: Optional[str],
) -> ActionOutcome:
    with atomic(db, f"updating notes on report {report_id}"):
        report = get_report(db, report_id)
        report.admin_notes = optional_text(notes)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.REPORT,
            target_id=report.id,
            details=ReportNotesUpdatedDetails(report_id=report.id),
        )
    return ActionOutcome(report, entry)


# =====================================
# RESOLVING ACTIONS
# =====================================

def resolve_with_warning(
    db: Session,
    actor: AdminContext,
    report_id: str,
    *,
    message: str,
    internal_notes: Optional[str] = None,
) -> ActionOutcome:
    message = required_text(message, "message")
    internal_notes = optional_text(internal_notes)

    with atomic(db, f"resolving report {report_id} with a warning"):
        report = _load_open_report(db, report_id)
        profile = _report_target_user(db, report)
        new_count = apply_warning(profile)
        _close_report(report, actor, ReportStatus.RESOLVED, ReportResolution.WARNING_ISSUED, internal_notes)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.USER,
            target_id=profile.id,
            details=WarningIssuedDetails(
                report_id=report.id,
                message=message,
                internal_notes=internal_notes,
                new_warning_count=new_count,
            ),
        )

    notification_service.notify_user_warned(profile, message)
    return ActionOutcome(report, entry)


def resolve_with_listing_removal(
    db: Session,
    actor: AdminContext,
    report_id: str,
    *,
    reason: str,
    notify_seller: bool = False,
    internal_notes: Optional[str] = None,
) -> ActionOutcome:
    reason = required_text(reason, "reason")
    internal_notes = optional_text(internal_notes)

    with atomic(db, f"resolving report {report_id} with listing removal"):
        report = _load_open_report(db, report_id)
        listing = _report_target_listing(report)
        apply_removal(listing, reason, actor.admin_id)
        _close_report(report, actor, ReportStatus.RESOLVED, ReportResolution.LISTING_REMOVED, internal_notes)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.LISTING,
            target_id=listing.id,
            details=ListingRemovedDetails(
                listing_id=listing.id,
                report_id=report.id,
                reason=reason,
                notify_seller=notify_seller,
                internal_notes=internal_notes,
            ),
        )

    if notify_seller:
        notification_service.notify_listing_removed(listing, reason)
    return ActionOutcome(report, entry)


def resolve_with_suspension(
    db: Session,
    actor: AdminContext,
    report_id: str,
    *,
    duration: Union[SuspensionDuration, str],
    reason: str,
    custom_days: Optional[int] = None,
    internal_notes: Optional[str] = None,
) -> ActionOutcome:
    reason = required_text(reason, "reason")
    internal_notes = optional_text(internal_notes)
    days = suspension_days(duration, custom_days)
    until = calculate_suspension_end(duration, custom_days)

    with atomic(db, f"resolving report {report_id} with a suspension"):
        report = _load_open_report(db, report_id)
        profile = _report_target_user(db, report)
        apply_suspension(profile, until)
        _close_report(report, actor, ReportStatus.RESOLVED, ReportResolution.USER_SUSPENDED, internal_notes)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.USER,
            target_id=profile.id,
            details=UserSuspendedDetails(
                report_id=report.id,
                duration=SuspensionDuration(duration).value,
                custom_days=custom_days,
                days=days,
                suspension_until=until,
                reason=reason,
                internal_notes=internal_notes,
            ),
        )
    return ActionOutcome(report, entry)


def resolve_with_ban(
    db: Session,
    actor: AdminContext,
    report_id: str,
    *,
    reason: str,
    internal_notes: Optional[str] = None,
) -> ActionOutcome:
    reason = required_text(reason, "reason")
    internal_notes = optional_text(internal_notes)

    with atomic(db, f"resolving report {report_id} with a ban"):
        report = _load_open_report(db, report_id)
        profile = _report_target_user(db, report)
        apply_ban(profile, reason)
        _close_report(report, actor, ReportStatus.RESOLVED, ReportResolution.USER_BANNED, internal_notes)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.USER,
            target_id=profile.id,
            details=UserBannedDetails(
                report_id=report.id,
                reason=reason,
                internal_notes=internal_notes,
            ),
        )

    return ActionOutcome(report, entry)
