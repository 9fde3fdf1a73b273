from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marketadmin.api.deps import build_filters, page_params
from marketadmin.context import AdminContext
from marketadmin.crud import audit as audit_crud
from marketadmin.database import get_db
from marketadmin.permissions import Permission
from marketadmin.schemas.audit import AuditLogRead
from marketadmin.schemas.common import Page
from marketadmin.schemas.filters import AuditLogFilters
from marketadmin.utils.security import require_permission

router = APIRouter(prefix="/audit-log", tags=["Audit Log"])


@router.get("", response_model=Page[AuditLogRead])
def list_audit_log(
    admin_id: Optional[str] = None,
    action: Optional[str] = Query(None, description="e.g. user_warned, listing_removed"),
    target_type: Optional[str] = Query(None, description="user | listing | report | feedback | admin | all"),
    target_id: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    paging: dict = Depends(page_params),
    admin: AdminContext = Depends(require_permission(Permission.VIEW_AUDIT_LOG)),
    db: Session = Depends(get_db)
):
    filters = build_filters(
        AuditLogFilters,
        admin_id=admin_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        date_from=date_from,
        date_to=date_to,
    )
    return audit_crud.search_audit_log(db, filters, **paging)
