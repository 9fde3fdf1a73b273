# tests/test_user_moderation.py
"""
User moderation: suspension durations, warning threshold, ban/reactivate
clearing rules, and the audit row each action leaves behind.
"""

from datetime import datetime, timedelta

import pytest

from marketadmin.database import utcnow
from marketadmin.exceptions import NotFoundError, ValidationFailed
from marketadmin.models import AuditLogEntry, ModerationStatus
from marketadmin.services import notification_service, user_moderation
from marketadmin.services.user_moderation import calculate_suspension_end, suspension_days

from factories import make_profile


# ======================
# SUSPENSION DURATION
# ======================

@pytest.mark.parametrize(
    "duration, expected",
    [("1_day", 1), ("3_days", 3), ("7_days", 7), ("30_days", 30)],
)
def test_fixed_suspension_durations(duration, expected):
    assert suspension_days(duration) == expected


@pytest.mark.parametrize("custom_days, expected", [(None, 1), (0, 1), (14, 14)])
def test_custom_suspension_days(custom_days, expected):
    assert suspension_days("custom", custom_days) == expected


def test_custom_suspension_rejects_negative_and_oversized():
    with pytest.raises(ValidationFailed):
        suspension_days("custom", -1)
    with pytest.raises(ValidationFailed):
        suspension_days("custom", 10_000)


def test_unknown_duration_is_rejected():
    with pytest.raises(ValidationFailed):
        suspension_days("fortnight")


def test_suspension_end_is_relative_to_now():
    now = datetime(2026, 3, 1, 12, 0, 0)
    assert calculate_suspension_end("7_days", now=now) == now + timedelta(days=7)


def test_suspend_user_sets_until_and_audits(db_session, actor):
    profile = make_profile(db_session, ban_reason="stale")
    before = utcnow()

    outcome = user_moderation.suspend_user(
        db_session, actor, profile.id,
        duration="7_days",
        reason="  Repeated spam  ",
    )

    db_session.refresh(profile)
    assert profile.moderation_status == ModerationStatus.SUSPENDED
    assert profile.ban_reason is None
    expected = before + timedelta(days=7)
    assert abs((profile.suspension_until - expected).total_seconds()) <= 1

    entry = outcome.audit_entry
    assert entry.action == "user_suspended"
    assert entry.target_type.value == "user"
    assert entry.target_id == profile.id
    assert entry.ip_address == "203.0.113.7"
    assert entry.details["duration"] == "7_days"
    assert entry.details["days"] == 7
    assert entry.details["reason"] == "Repeated spam"


# ======================
# WARNINGS
# ======================

def test_warn_below_threshold_stays_active(db_session, actor):
    profile = make_profile(db_session)

    user_moderation.warn_user(db_session, actor, profile.id, message="Be polite")

    db_session.refresh(profile)
    assert profile.warning_count == 1
    assert profile.moderation_status == ModerationStatus.ACTIVE


def test_third_warning_marks_user_warned(db_session, actor):
    profile = make_profile(db_session, warning_count=2)

    outcome = user_moderation.warn_user(
        db_session, actor, profile.id,
        message="Third strike",
        internal_notes="see report thread",
    )

    db_session.refresh(profile)
    assert profile.warning_count == 3
    assert profile.moderation_status == ModerationStatus.WARNED
    assert outcome.audit_entry.action == "user_warned"
    assert outcome.audit_entry.details == {
        "message": "Third strike",
        "internal_notes": "see report thread",
        "new_warning_count": 3,
    }


def test_warnings_above_threshold_stay_warned(db_session, actor):
    profile = make_profile(db_session, warning_count=5, moderation_status=ModerationStatus.WARNED)

    user_moderation.warn_user(db_session, actor, profile.id, message="Again")

    db_session.refresh(profile)
    assert profile.warning_count == 6
    assert profile.moderation_status == ModerationStatus.WARNED


def test_warning_a_banned_user_keeps_the_ban(db_session, actor):
    profile = make_profile(db_session, moderation_status=ModerationStatus.BANNED, ban_reason="fraud")

    user_moderation.warn_user(db_session, actor, profile.id, message="Noted")

    db_session.refresh(profile)
    assert profile.moderation_status == ModerationStatus.BANNED
    assert profile.ban_reason == "fraud"
    assert profile.warning_count == 1


def test_warn_requires_a_message(db_session, actor):
    profile = make_profile(db_session)

    with pytest.raises(ValidationFailed):
        user_moderation.warn_user(db_session, actor, profile.id, message="   ")

    assert db_session.query(AuditLogEntry).count() == 0


def test_warn_sends_notification_after_commit(db_session, actor, monkeypatch):
    sent = []
    monkeypatch.setattr(
        notification_service, "notify_user_warned",
        lambda profile, message: sent.append((profile.id, message)) or True,
    )
    profile = make_profile(db_session)

    user_moderation.warn_user(db_session, actor, profile.id, message="Heads up")

    assert sent == [(profile.id, "Heads up")]


def test_unknown_user_is_not_found(db_session, actor):
    with pytest.raises(NotFoundError):
        user_moderation.ban_user(db_session, actor, "missing", reason="x")


# ======================
# BAN / REACTIVATE / RESET
# ======================

def test_ban_clears_suspension(db_session, actor):
    profile = make_profile(
        db_session,
        moderation_status=ModerationStatus.SUSPENDED,
        suspension_until=datetime(2030, 1, 1),
    )

    outcome = user_moderation.ban_user(db_session, actor, profile.id, reason="Fraud ring")

    db_session.refresh(profile)
    assert profile.moderation_status == ModerationStatus.BANNED
    assert profile.ban_reason == "Fraud ring"
    assert profile.suspension_until is None
    assert outcome.audit_entry.action == "user_banned"


def test_reactivate_clears_ban_and_suspension(db_session, actor):
    profile = make_profile(
        db_session,
        moderation_status=ModerationStatus.BANNED,
        ban_reason="Fraud ring",
        warning_count=2,
    )

    outcome = user_moderation.reactivate_user(db_session, actor, profile.id)

    db_session.refresh(profile)
    assert profile.moderation_status == ModerationStatus.ACTIVE
    assert profile.ban_reason is None
    assert profile.suspension_until is None
    assert profile.warning_count == 2
    assert outcome.audit_entry.action == "user_reactivated"
    assert outcome.audit_entry.details["previous_status"] == "banned"


def test_reset_warnings_returns_user_to_active(db_session, actor):
    profile = make_profile(db_session, warning_count=4, moderation_status=ModerationStatus.WARNED)

    outcome = user_moderation.reset_warnings(db_session, actor, profile.id)

    db_session.refresh(profile)
    assert profile.warning_count == 0
    assert profile.moderation_status == ModerationStatus.ACTIVE
    assert outcome.audit_entry.action == "warnings_reset"
    assert outcome.audit_entry.details == {"previous_warning_count": 4}
