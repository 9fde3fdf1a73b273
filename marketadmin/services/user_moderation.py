# marketadmin/services/user_moderation.py
"""
User moderation: warn, suspend, ban, reactivate, reset warnings.

The ``apply_*`` functions are the state transitions on a Profile row and are
shared with report resolution. The public operations wrap one transition and
one audit row in a single transaction.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Union

from sqlalchemy.orm import Session

from marketadmin.config import settings
from marketadmin.context import AdminContext
from marketadmin.database import utcnow
from marketadmin.exceptions import NotFoundError, ValidationFailed
from marketadmin.models.audit_log import AuditTargetType
from marketadmin.models.profile import ModerationStatus, Profile
from marketadmin.schemas.audit import (
    UserBannedDetails,
    UserReactivatedDetails,
    UserSuspendedDetails,
    UserWarnedDetails,
    WarningsResetDetails,
)
from marketadmin.schemas.common import optional_text
from marketadmin.schemas.user import SuspensionDuration
from marketadmin.services import notification_service
from marketadmin.services.audit_service import ActionOutcome, atomic, record_action
from marketadmin.services.validation import required_text


SUSPENSION_DAYS = {
    SuspensionDuration.ONE_DAY: 1,
    SuspensionDuration.THREE_DAYS: 3,
    SuspensionDuration.SEVEN_DAYS: 7,
    SuspensionDuration.THIRTY_DAYS: 30,
}


# =====================================
# PURE HELPERS
# =====================================

def suspension_days(duration: Union[SuspensionDuration, str], custom_days: Optional[int] = None) -> int:
    """Resolve a duration choice to a day count; custom 0/None falls back to 1."""
    try:
        duration = SuspensionDuration(duration)
    except ValueError:
        raise ValidationFailed(f"Unknown suspension duration: {duration!r}")

    if duration is not SuspensionDuration.CUSTOM:
        return SUSPENSION_DAYS[duration]

    if custom_days is not None and custom_days < 0:
        raise ValidationFailed("custom_days cannot be negative")
    days = custom_days or 1
    if days > settings.MAX_CUSTOM_SUSPENSION_DAYS:
        raise ValidationFailed(
            f"custom_days cannot exceed {settings.MAX_CUSTOM_SUSPENSION_DAYS}"
        )
    return days


def calculate_suspension_end(
    duration: Union[SuspensionDuration, str],
    custom_days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> datetime:
    return (now or utcnow()) + timedelta(days=suspension_days(duration, custom_days))


def apply_warning(profile: Profile, threshold: Optional[int] = None) -> int:
    """
    Increment the warning count and return it.

    Status becomes WARNED at the threshold and stays there for higher counts.
    A suspended or banned account keeps its status.
    """
    threshold = threshold or settings.WARNING_THRESHOLD
    new_count = (profile.warning_count or 0) + 1
    profile.warning_count = new_count
    if profile.moderation_status not in (ModerationStatus.SUSPENDED, ModerationStatus.BANNED):
        profile.moderation_status = (
            ModerationStatus.WARNED if new_count >= threshold else ModerationStatus.ACTIVE
        )
    return new_count


def apply_suspension(profile: Profile, until: datetime) -> None:
    profile.moderation_status = ModerationStatus.SUSPENDED
    profile.suspension_until = until
    profile.ban_reason = None


def apply_ban(profile: Profile, reason: str) -> None:
    profile.moderation_status = ModerationStatus.BANNED
    profile.ban_reason = reason
    profile.suspension_until = None


def apply_reactivation(profile: Profile) -> None:
    profile.moderation_status = ModerationStatus.ACTIVE
    profile.suspension_until = None
    profile.ban_reason = None


def apply_warning_reset(profile: Profile) -> None:
    profile.warning_count = 0
    apply_reactivation(profile)


def get_profile(db: Session, user_id: str) -> Profile:
    profile = db.query(Profile).filter(Profile.id == user_id).first()
    if not profile:
        raise NotFoundError("User not found")
    return profile


# =====================================
# ACTIONS
# =====================================

def warn_user(
    db: Session,
    actor: AdminContext,
    user_id: str,
    *,
    message: str,
    internal_notes: Optional[str] = None,
) -> ActionOutcome:
    message = required_text(message, "message")
    internal_notes = optional_text(internal_notes)

    with atomic(db, f"warning user {user_id}"):
        profile = get_profile(db, user_id)
        new_count = apply_warning(profile)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.USER,
            target_id=profile.id,
            details=UserWarnedDetails(
                message=message,
                internal_notes=internal_notes,
                new_warning_count=new_count,
            ),
        )

    notification_service.notify_user_warned(profile, message)
    return ActionOutcome(profile, entry)


def suspend_user(
    db: Session,
    actor: AdminContext,
    user_id: str,
    *,
    duration: Union[SuspensionDuration, str],
    reason: str,
    custom_days: Optional[int] = None,
    internal_notes: Optional[str] = None,
) -> ActionOutcome:
    reason = required_text(reason, "reason")
    days = suspension_days(duration, custom_days)
    until = calculate_suspension_end(duration, custom_days)

    with atomic(db, f"suspending user {user_id}"):
        profile = get_profile(db, user_id)
        apply_suspension(profile, until)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.USER,
            target_id=profile.id,
            details=UserSuspendedDetails(
                duration=SuspensionDuration(duration).value,
                custom_days=custom_days,
                days=days,
                suspension_until=until,
                reason=reason,
                internal_notes=optional_text(internal_notes),
            ),
        )
    return ActionOutcome(profile, entry)


def ban_user(
    db: Session,
    actor: AdminContext,
    user_id: str,
    *,
    reason: str,
    internal_notes: Optional[str] = None,
) -> ActionOutcome:
    reason = required_text(reason, "reason")

    with atomic(db, f"banning user {user_id}"):
        profile = get_profile(db, user_id)
        apply_ban(profile, reason)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.USER,
            target_id=profile.id,
            details=UserBannedDetails(reason=reason, internal_notes=optional_text(internal_notes)),
        )
    return ActionOutcome(profile, entry)


def reactivate_user(
    db: Session,
    actor: AdminContext,
    user_id: str,
    *,
    internal_notes: Optional[str] = None,
) -> ActionOutcome:
    with atomic(db, f"reactivating user {user_id}"):
        profile = get_profile(db, user_id)
        previous = ModerationStatus(profile.moderation_status).value
        apply_reactivation(profile)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.USER,
            target_id=profile.id,
            details=UserReactivatedDetails(
                previous_status=previous,
                internal_notes=optional_text(internal_notes),
            ),
        )
    return ActionOutcome(profile, entry)


def reset_warnings(db: Session, actor: AdminContext, user_id: str) -> ActionOutcome:
    with atomic(db, f"resetting warnings for user {user_id}"):
        profile = get_profile(db, user_id)
        previous_count = profile.warning_count
        apply_warning_reset(profile)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.USER,
            target_id=profile.id,
            details=WarningsResetDetails(previous_warning_count=previous_count),
        )
    return ActionOutcome(profile, entry)
