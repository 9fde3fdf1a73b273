from typing import Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload

from marketadmin.crud.audit import entries_for_targets
from marketadmin.crud.pagination import apply_date_range, paginate
from marketadmin.exceptions import NotFoundError
from marketadmin.models.audit_log import AuditTargetType
from marketadmin.models.listing import Listing
from marketadmin.models.report import Report
from marketadmin.schemas.common import Page
from marketadmin.schemas.detail import ReportDetail
from marketadmin.schemas.filters import ReportFilters
from marketadmin.schemas.report import ReportWithParties


def _with_parties(query):
    return query.options(
        joinedload(Report.reporter),
        joinedload(Report.reported_user),
        joinedload(Report.reported_listing).joinedload(Listing.seller),
    )


def search_reports(
    db: Session,
    filters: ReportFilters,
    page: int = 0,
    page_size: Optional[int] = None,
) -> Page[ReportWithParties]:
    query = _with_parties(db.query(Report))

    if filters.status:
        query = query.filter(Report.status == filters.status)
    if filters.reasons:
        query = query.filter(Report.reason.in_(filters.reasons))
    if filters.target_type == "listing":
        query = query.filter(Report.reported_listing_id.isnot(None))
    elif filters.target_type == "user":
        query = query.filter(Report.reported_user_id.isnot(None))
    if filters.reporter_id:
        query = query.filter(Report.reporter_id == filters.reporter_id)
    query = apply_date_range(query, Report.created_at, filters.date_from, filters.date_to)

    query = query.order_by(desc(Report.created_at), desc(Report.id))
    return paginate(query, page, page_size, ReportWithParties.model_validate)


def get_report_detail(db: Session, report_id: str) -> ReportDetail:
    report = _with_parties(db.query(Report)).filter(Report.id == report_id).first()
    if not report:
        raise NotFoundError("Report not found")

    history = entries_for_targets(
        db,
        [
            (AuditTargetType.REPORT, report.id),
            (AuditTargetType.USER, report.reported_user_id),
            (AuditTargetType.LISTING, report.reported_listing_id),
        ],
    )

    return ReportDetail.model_validate(
        {
            **ReportWithParties.model_validate(report).model_dump(),
            "action_history": history,
        },
        from_attributes=True,
    )
