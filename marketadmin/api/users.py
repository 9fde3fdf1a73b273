# marketadmin/api/users.py
"""
User moderation endpoints.

- GET  /users                       - Filtered, paginated profiles
- GET  /users/{user_id}             - Profile with listings, reports, feedback, audit
- POST /users/{user_id}/warn        - warn_users
- POST /users/{user_id}/reset-warnings - warn_users
- POST /users/{user_id}/suspend     - suspend_users
- POST /users/{user_id}/reactivate  - suspend_users
- POST /users/{user_id}/ban         - ban_users
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marketadmin.api.deps import action_result, build_filters, page_params
from marketadmin.context import AdminContext
from marketadmin.crud import users as users_crud
from marketadmin.database import get_db
from marketadmin.exceptions import ModerationError, raise_http
from marketadmin.permissions import Permission
from marketadmin.schemas.common import ActionResult, Page
from marketadmin.schemas.detail import UserDetail
from marketadmin.schemas.filters import UserFilters
from marketadmin.schemas.user import (
    BanUserRequest,
    ProfileListItem,
    ReactivateUserRequest,
    SuspendUserRequest,
    WarnUserRequest,
)
from marketadmin.services import user_moderation
from marketadmin.utils.security import get_current_admin, require_permission

router = APIRouter(prefix="/users", tags=["Users"])


# ======================
# BROWSE
# ======================
@router.get("", response_model=Page[ProfileListItem])
def list_users(
    search: Optional[str] = Query(None, description="Email, phone number or display name"),
    moderation_status: Optional[str] = Query(None, description="active | warned | suspended | banned | all"),
    email_verified: Optional[str] = Query(None, description="true | false | all"),
    has_avatar: Optional[str] = Query(None, description="true | false | all"),
    listings_count: Optional[str] = Query(None, description="0 | 1-5 | 5+ | all"),
    reports_against: Optional[str] = Query(None, description="0 | 1-3 | 3+ | all"),
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    paging: dict = Depends(page_params),
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    filters = build_filters(
        UserFilters,
        search=search,
        moderation_status=moderation_status,
        email_verified=email_verified,
        has_avatar=has_avatar,
        listings_count=listings_count,
        reports_against=reports_against,
        date_from=date_from,
        date_to=date_to,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return users_crud.search_users(db, filters, **paging)


@router.get("/{user_id}", response_model=UserDetail)
def get_user(
    user_id: str,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        return users_crud.get_user_detail(db, user_id)
    except ModerationError as e:
        raise_http(e)


# ======================
# MODERATION ACTIONS
# ======================
@router.post("/{user_id}/warn", response_model=ActionResult)
def warn_user(
    user_id: str,
    body: WarnUserRequest,
    admin: AdminContext = Depends(require_permission(Permission.WARN_USERS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = user_moderation.warn_user(
            db, admin, user_id,
            message=body.message,
            internal_notes=body.internal_notes,
        )
    except ModerationError as e:
        raise_http(e)

    profile = outcome.target
    return action_result(
        outcome,
        f"Warning issued ({profile.warning_count} on record)",
        profile.moderation_status,
    )


@router.post("/{user_id}/reset-warnings", response_model=ActionResult)
def reset_warnings(
    user_id: str,
    admin: AdminContext = Depends(require_permission(Permission.WARN_USERS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = user_moderation.reset_warnings(db, admin, user_id)
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Warnings reset", outcome.target.moderation_status)


@router.post("/{user_id}/suspend", response_model=ActionResult)
def suspend_user(
    user_id: str,
    body: SuspendUserRequest,
    admin: AdminContext = Depends(require_permission(Permission.SUSPEND_USERS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = user_moderation.suspend_user(
            db, admin, user_id,
            duration=body.duration,
            reason=body.reason,
            custom_days=body.custom_days,
            internal_notes=body.internal_notes,
        )
    except ModerationError as e:
        raise_http(e)

    until = outcome.target.suspension_until
    return action_result(
        outcome,
        f"User suspended until {until.isoformat()}",
        outcome.target.moderation_status,
    )


@router.post("/{user_id}/reactivate", response_model=ActionResult)
def reactivate_user(
    user_id: str,
    body: Optional[ReactivateUserRequest] = None,
    admin: AdminContext = Depends(require_permission(Permission.SUSPEND_USERS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = user_moderation.reactivate_user(
            db, admin, user_id,
            internal_notes=body.internal_notes if body else None,
        )
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "User reactivated", outcome.target.moderation_status)


@router.post("/{user_id}/ban", response_model=ActionResult)
def ban_user(
    user_id: str,
    body: BanUserRequest,
    admin: AdminContext = Depends(require_permission(Permission.BAN_USERS)),
    db: Session = Depends(get_db)
):
    try:
        outcome = user_moderation.ban_user(
            db, admin, user_id,
            reason=body.reason,
            internal_notes=body.internal_notes,
        )
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "User banned", outcome.target.moderation_status)
