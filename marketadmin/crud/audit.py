from typing import Iterable, List, Optional

from sqlalchemy import and_, desc, or_
from sqlalchemy.orm import Session

from marketadmin.crud.pagination import apply_date_range, paginate
from marketadmin.models.audit_log import AuditLogEntry, AuditTargetType
from marketadmin.schemas.audit import AuditLogRead
from marketadmin.schemas.common import Page
from marketadmin.schemas.filters import AuditLogFilters


def search_audit_log(
    db: Session,
    filters: AuditLogFilters,
    page: int = 0,
    page_size: Optional[int] = None,
) -> Page[AuditLogRead]:
    query = db.query(AuditLogEntry)

    if filters.admin_id:
        query = query.filter(AuditLogEntry.admin_id == filters.admin_id)
    if filters.action:
        query = query.filter(AuditLogEntry.action == filters.action)
    if filters.target_type:
        query = query.filter(AuditLogEntry.target_type == filters.target_type)
    if filters.target_id:
        query = query.filter(AuditLogEntry.target_id == filters.target_id)
    query = apply_date_range(query, AuditLogEntry.created_at, filters.date_from, filters.date_to)

    query = query.order_by(desc(AuditLogEntry.created_at), desc(AuditLogEntry.id))
    return paginate(query, page, page_size, AuditLogRead.model_validate)


def entries_for_target(db: Session, target_type: AuditTargetType, target_id) -> List[AuditLogEntry]:
    return (
        db.query(AuditLogEntry)
        .filter(
            AuditLogEntry.target_type == target_type,
            AuditLogEntry.target_id == str(target_id),
        )
        .order_by(desc(AuditLogEntry.created_at))
        .all()
    )


def entries_for_targets(db: Session, targets: Iterable[tuple]) -> List[AuditLogEntry]:
    """Entries matching any of the given (target_type, target_id) pairs, newest first."""
    clauses = [
        and_(AuditLogEntry.target_type == target_type, AuditLogEntry.target_id == str(target_id))
        for target_type, target_id in targets
        if target_id is not None
    ]
    if not clauses:
        return []
    return (
        db.query(AuditLogEntry)
        .filter(or_(*clauses))
        .order_by(desc(AuditLogEntry.created_at))
        .all()
    )
