# marketadmin/api/reports.py
"""
Abuse report endpoints.

Resolution is split per action so each path declares its own permission:
warn (warn_users), remove-listing (remove_listings), suspend (suspend_users),
ban (ban_users). Dismiss, under-review and notes need dismiss_reports.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marketadmin.api.deps import action_result, build_filters, page_params
from marketadmin.context import AdminContext
from marketadmin.crud import reports as reports_crud
from marketadmin.database import get_db
from marketadmin.exceptions import ModerationError, raise_http
from marketadmin.permissions import Permission
from marketadmin.schemas.common import ActionResult, Page
from marketadmin.schemas.detail import ReportDetail
from marketadmin.schemas.filters import ReportFilters
from marketadmin.schemas.listing import RemoveListingRequest
from marketadmin.schemas.report import DismissReportRequest, ReportNotesRequest, ReportWithParties
from marketadmin.schemas.user import BanUserRequest, SuspendUserRequest, WarnUserRequest
from marketadmin.services import report_resolution
from marketadmin.utils.security import require_permission

router = APIRouter(prefix="/reports", tags=["Reports"])


# ======================
# BROWSE
# ======================
@router.get("", response_model=Page[ReportWithParties])
def list_reports(
    status: Optional[str] = Query(None, description="pending | under_review | resolved | dismissed | all"),
    reason: List[str] = Query([], description="Repeat to match any of several reasons"),
    target_type: Optional[str] = Query(None, description="listing | user | all"),
    reporter_id: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    paging: dict = Depends(page_params),
    admin: AdminContext = Depends(require_permission(Permission.VIEW_REPORTS)),
    db: Session = Depends(get_db)
):
    filters = build_filters(
        ReportFilters,
        status=status,
        reasons=reason,
        target_type=target_type,
        reporter_id=reporter_id,
        date_from=date_from,
        date_to=date_to,
    )
    return reports_crud.search_reports(db, filters, **paging)


@router.get("/{report_id}", response_model=ReportDetail)
def get_report(
    report_id: str,
    admin: AdminContext = Depends(require_permission(Permission.VIEW_REPORTS)),
    db: Session = Depends(get_db)
):
    try:
        return reports_crud.get_report_detail(db, report_id)
    except ModerationError as e:
        raise_http(e)


# ======================
# TRIAGE
# ======================
@router.post("/{report_id}/dismiss", response_model=ActionResult)
def dismiss_report(
    report_id: str,
    body: Optional[DismissReportRequest] = None,
    admin: AdminContext = Depends(require_permission(Permission.DISMISS_REPORTS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = report_resolution.dismiss_report(
            db, admin, report_id,
            reason=body.reason if body else None,
        )
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Report dismissed", outcome.target.status, report_id=outcome.target.id)


@router.post("/{report_id}/under-review", response_model=ActionResult)
def mark_under_review(
    report_id: str,
    admin: AdminContext = Depends(require_permission(Permission.DISMISS_REPORTS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = report_resolution.mark_under_review(db, admin, report_id)
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Report marked under review", outcome.target.status, report_id=outcome.target.id)


@router.put("/{report_id}/notes", response_model=ActionResult)
def update_notes(
    report_id: str,
    body: ReportNotesRequest,
    admin: AdminContext = Depends(require_permission(Permission.DISMISS_REPORTS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = report_resolution.update_report_notes(db, admin, report_id, notes=body.notes)
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Notes updated", outcome.target.status, report_id=outcome.target.id)


# ======================
# RESOLUTION
# ======================
@router.post("/{report_id}/resolve/warn", response_model=ActionResult)
def resolve_with_warning(
    report_id: str,
    body: WarnUserRequest,
    admin: AdminContext = Depends(require_permission(Permission.WARN_USERS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = report_resolution.resolve_with_warning(
            db, admin, report_id,
            message=body.message,
            internal_notes=body.internal_notes,
        )
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Report resolved with a warning", outcome.target.status, report_id=outcome.target.id)


@router.post("/{report_id}/resolve/remove-listing", response_model=ActionResult)
def resolve_with_listing_removal(
    report_id: str,
    body: RemoveListingRequest,
    admin: AdminContext = Depends(require_permission(Permission.REMOVE_LISTINGS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = report_resolution.resolve_with_listing_removal(
            db, admin, report_id,
            reason=body.reason,
            notify_seller=body.notify_seller,
            internal_notes=body.internal_notes,
        )
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Report resolved; listing removed", outcome.target.status, report_id=outcome.target.id)


@router.post("/{report_id}/resolve/suspend", response_model=ActionResult)
def resolve_with_suspension(
    report_id: str,
    body: SuspendUserRequest,
    admin: AdminContext = Depends(require_permission(Permission.SUSPEND_USERS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = report_resolution.resolve_with_suspension(
            db, admin, report_id,
            duration=body.duration,
            reason=body.reason,
            custom_days=body.custom_days,
            internal_notes=body.internal_notes,
        )
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Report resolved; user suspended", outcome.target.status, report_id=outcome.target.id)


@router.post("/{report_id}/resolve/ban", response_model=ActionResult)
def resolve_with_ban(
    report_id: str,
    body: BanUserRequest,
    admin: AdminContext = Depends(require_permission(Permission.BAN_USERS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = report_resolution.resolve_with_ban(
            db, admin, report_id,
            reason=body.reason,
            internal_notes=body.internal_notes,
        )
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Report resolved; user banned", outcome.target.status, report_id=outcome.target.id)
