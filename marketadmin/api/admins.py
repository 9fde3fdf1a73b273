# marketadmin/api/admins.py
"""
Admin account management. Everything here requires manage_admins.

- GET   /admins             - List admin accounts
- POST  /admins             - Grant admin access to an auth user
- PATCH /admins/{admin_id}  - Change role or deactivate
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marketadmin.context import AdminContext
from marketadmin.database import get_db
from marketadmin.exceptions import ModerationError, raise_http
from marketadmin.permissions import Permission
from marketadmin.schemas.admin import AdminCreateRequest, AdminUpdateRequest, AdminUserRead
from marketadmin.services import admin_service
from marketadmin.utils.security import require_permission

router = APIRouter(prefix="/admins", tags=["Admins"])

can_manage = require_permission(Permission.MANAGE_ADMINS)


@router.get("", response_model=List[AdminUserRead])
def list_admins(
    include_inactive: bool = True,
    admin: AdminContext = Depends(can_manage),
    db: Session = Depends(get_db)
):
    return admin_service.list_admins(db, include_inactive=include_inactive)


@router.post("", response_model=AdminUserRead, status_code=status.HTTP_201_CREATED)
def create_admin(
    body: AdminCreateRequest,
    admin: AdminContext = Depends(can_manage),
    db: Session = Depends(get_db)
):
    try:
        outcome = admin_service.create_admin(db, admin, user_id=body.user_id, role=body.role)
    except ModerationError as e:
        raise_http(e)
    return outcome.target


@router.patch("/{admin_id}", response_model=AdminUserRead)
def update_admin(
    admin_id: str,
    body: AdminUpdateRequest,
    admin: AdminContext = Depends(can_manage),
    db: Session = Depends(get_db)
):
    try:
        outcome = admin_service.update_admin(
            db, admin, admin_id,
            role=body.role,
            is_active=body.is_active,
        )
    except ModerationError as e:
        raise_http(e)
    return outcome.target
