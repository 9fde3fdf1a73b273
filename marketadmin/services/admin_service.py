from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from marketadmin.context import AdminContext
from marketadmin.exceptions import NotFoundError, ValidationFailed
from marketadmin.models.admin_user import AdminRole, AdminUser
from marketadmin.models.audit_log import AuditTargetType
from marketadmin.schemas.audit import AdminCreatedDetails, AdminUpdatedDetails
from marketadmin.services.audit_service import ActionOutcome, atomic, record_action
from marketadmin.services.validation import required_text


def list_admins(db: Session, include_inactive: bool = True) -> List[AdminUser]:
    query = db.query(AdminUser)
    if not include_inactive:
        query = query.filter(AdminUser.is_active.is_(True))
    return query.order_by(AdminUser.created_at.asc()).all()


def get_admin(db: Session, admin_id: str) -> AdminUser:
    admin = db.query(AdminUser).filter(AdminUser.id == admin_id).first()
    if not admin:
        raise NotFoundError("Admin not found")
    return admin


def get_active_admin_by_user_id(db: Session, user_id: str) -> Optional[AdminUser]:
    """The admin row for an auth user id, if it exists and is active."""
    return (
        db.query(AdminUser)
        .filter(AdminUser.user_id == user_id, AdminUser.is_active.is_(True))
        .first()
    )


def create_admin(
    db: Session,
    actor: AdminContext,
    *,
    user_id: str,
    role: AdminRole = AdminRole.MODERATOR,
) -> ActionOutcome:
    user_id = required_text(user_id, "user_id")
    role = AdminRole(role)

    with atomic(db, f"creating admin for user {user_id}"):
        if db.query(AdminUser).filter(AdminUser.user_id == user_id).first():
            raise ValidationFailed("This user is already an admin")
        admin = AdminUser(user_id=user_id, role=role, is_active=True, created_by=actor.admin_id)
        db.add(admin)
        db.flush()
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.ADMIN,
            target_id=admin.id,
            details=AdminCreatedDetails(user_id=user_id, role=role),
        )
    return ActionOutcome(admin, entry)


def update_admin(
    db: Session,
    actor: AdminContext,
    admin_id: str,
    *,
    role: Optional[AdminRole] = None,
    is_active: Optional[bool] = None,
) -> ActionOutcome:
    """Change an admin's role or active flag. Admins cannot demote or deactivate themselves."""
    if role is None and is_active is None:
        raise ValidationFailed("Nothing to update")

    with atomic(db, f"updating admin {admin_id}"):
        admin = get_admin(db, admin_id)
        previous_role = AdminRole(admin.role)

        if admin.id == actor.admin_id:
            if role is not None and AdminRole(role) != previous_role:
                raise ValidationFailed("You cannot change your own role")
            if is_active is False:
                raise ValidationFailed("You cannot deactivate yourself")

        if role is not None:
            admin.role = AdminRole(role)
        if is_active is not None:
            admin.is_active = is_active

        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.ADMIN,
            target_id=admin.id,
            details=AdminUpdatedDetails(
                user_id=admin.user_id,
                previous_role=previous_role,
                new_role=AdminRole(role) if role is not None else None,
                is_active=is_active,
            ),
        )
    return ActionOutcome(admin, entry)
