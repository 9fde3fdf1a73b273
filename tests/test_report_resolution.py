# tests/test_report_resolution.py
"""
Report resolution: each report closes exactly once, and the target change,
report change and audit row are committed together or not at all.
"""

import pytest
from sqlalchemy.exc import OperationalError

from marketadmin.exceptions import (
    ConcurrentUpdateError,
    InvalidTransition,
    ReportAlreadyClosed,
    ValidationFailed,
)
from marketadmin.models import (
    AuditLogEntry,
    ListingModerationStatus,
    ModerationStatus,
    Report,
    ReportResolution,
    ReportStatus,
)
from marketadmin.services import report_resolution

from factories import make_listing, make_profile, make_report


@pytest.fixture
def offender(db_session):
    return make_profile(db_session, display_name="Offender")


@pytest.fixture
def user_report(db_session, reporter, offender):
    return make_report(db_session, reporter, user=offender, id="r1")


@pytest.fixture
def listing_report(db_session, reporter, seller):
    listing = make_listing(db_session, seller, id=7)
    return make_report(db_session, reporter, listing=listing)


# ======================
# DISMISS / TRIAGE
# ======================

def test_dismiss_without_reason(db_session, actor, user_report):
    outcome = report_resolution.dismiss_report(db_session, actor, "r1")

    db_session.refresh(user_report)
    assert user_report.status == ReportStatus.DISMISSED
    assert user_report.resolution == ReportResolution.NO_ACTION
    assert user_report.admin_notes is None
    assert user_report.resolved_by == actor.admin_id
    assert user_report.resolved_at is not None

    entry = outcome.audit_entry
    assert entry.action == "report_dismissed"
    assert entry.target_type.value == "report"
    assert entry.target_id == "r1"
    assert entry.details == {"report_id": "r1"}


def test_dismiss_reason_becomes_admin_notes(db_session, actor, user_report):
    report_resolution.dismiss_report(db_session, actor, "r1", reason="Duplicate of an older report")

    db_session.refresh(user_report)
    assert user_report.admin_notes == "Duplicate of an older report"


def test_mark_under_review_only_from_pending(db_session, actor, user_report):
    report_resolution.mark_under_review(db_session, actor, "r1")
    db_session.refresh(user_report)
    assert user_report.status == ReportStatus.UNDER_REVIEW

    with pytest.raises(InvalidTransition):
        report_resolution.mark_under_review(db_session, actor, "r1")


def test_under_review_report_can_still_be_resolved(db_session, actor, user_report, offender):
    report_resolution.mark_under_review(db_session, actor, "r1")

    report_resolution.resolve_with_ban(db_session, actor, "r1", reason="Scam ring")

    db_session.refresh(user_report)
    db_session.refresh(offender)
    assert user_report.status == ReportStatus.RESOLVED
    assert user_report.resolution == ReportResolution.USER_BANNED
    assert offender.moderation_status == ModerationStatus.BANNED


def test_notes_can_be_updated_after_closing(db_session, actor, user_report):
    report_resolution.dismiss_report(db_session, actor, "r1")

    outcome = report_resolution.update_report_notes(db_session, actor, "r1", notes="Reporter contacted")

    db_session.refresh(user_report)
    assert user_report.admin_notes == "Reporter contacted"
    assert outcome.audit_entry.action == "report_notes_updated"


# ======================
# RESOLUTION PATHS
# ======================

def test_resolve_with_warning_targets_reported_user(db_session, actor, user_report, offender):
    outcome = report_resolution.resolve_with_warning(
        db_session, actor, "r1",
        message="Do not ask for off-platform payment",
        internal_notes="first offence",
    )

    db_session.refresh(user_report)
    db_session.refresh(offender)
    assert offender.warning_count == 1
    assert user_report.status == ReportStatus.RESOLVED
    assert user_report.resolution == ReportResolution.WARNING_ISSUED
    assert user_report.admin_notes == "first offence"

    entry = outcome.audit_entry
    assert entry.action == "warning_issued"
    assert entry.target_type.value == "user"
    assert entry.target_id == offender.id
    assert entry.details["report_id"] == "r1"
    assert entry.details["new_warning_count"] == 1


def test_warning_on_listing_report_targets_the_seller(db_session, actor, listing_report, seller):
    outcome = report_resolution.resolve_with_warning(
        db_session, actor, listing_report.id, message="Listing misleading"
    )

    db_session.refresh(seller)
    assert seller.warning_count == 1
    assert outcome.audit_entry.target_id == seller.id


def test_resolve_with_listing_removal(db_session, actor, listing_report):
    outcome = report_resolution.resolve_with_listing_removal(
        db_session, actor, listing_report.id, reason="Counterfeit goods"
    )

    listing = listing_report.reported_listing
    db_session.refresh(listing)
    assert listing.moderation_status == ListingModerationStatus.REMOVED
    assert listing.removed_by == actor.admin_id
    assert outcome.target.resolution == ReportResolution.LISTING_REMOVED
    assert outcome.audit_entry.target_id == "7"
    assert outcome.audit_entry.details["report_id"] == listing_report.id


def test_listing_removal_on_user_report_is_invalid(db_session, actor, user_report):
    with pytest.raises(ValidationFailed):
        report_resolution.resolve_with_listing_removal(db_session, actor, "r1", reason="n/a")

    db_session.refresh(user_report)
    assert user_report.status == ReportStatus.PENDING


def test_resolve_with_suspension(db_session, actor, user_report, offender):
    outcome = report_resolution.resolve_with_suspension(
        db_session, actor, "r1",
        duration="custom",
        custom_days=0,
        reason="Harassment",
    )

    db_session.refresh(offender)
    assert offender.moderation_status == ModerationStatus.SUSPENDED
    assert offender.suspension_until is not None
    assert outcome.target.resolution == ReportResolution.USER_SUSPENDED
    assert outcome.audit_entry.details["days"] == 1


# ======================
# INVARIANTS
# ======================

def test_report_cannot_be_resolved_twice(db_session, actor, user_report, offender):
    report_resolution.dismiss_report(db_session, actor, "r1")

    with pytest.raises(ReportAlreadyClosed):
        report_resolution.resolve_with_ban(db_session, actor, "r1", reason="late")

    db_session.refresh(offender)
    assert offender.moderation_status == ModerationStatus.ACTIVE
    assert db_session.query(AuditLogEntry).count() == 1


def test_failed_audit_insert_rolls_back_everything(db_session, actor, user_report, offender, monkeypatch):
    def broken_record_action(*args, **kwargs):
        raise OperationalError("INSERT INTO admin_audit_log", {}, Exception("disk I/O error"))

    monkeypatch.setattr(report_resolution, "record_action", broken_record_action)

    with pytest.raises(OperationalError):
        report_resolution.resolve_with_warning(db_session, actor, "r1", message="warn")

    db_session.refresh(user_report)
    db_session.refresh(offender)
    assert user_report.status == ReportStatus.PENDING
    assert user_report.resolution is None
    assert offender.warning_count == 0
    assert db_session.query(AuditLogEntry).count() == 0


def test_concurrent_resolution_conflicts(db_session, session_factory, actor, user_report):
    other = session_factory()
    try:
        # Second admin loads the report before the first one commits.
        stale = other.query(Report).filter(Report.id == "r1").one()
        assert stale.status == ReportStatus.PENDING

        report_resolution.dismiss_report(db_session, actor, "r1")

        with pytest.raises(ConcurrentUpdateError):
            report_resolution.dismiss_report(other, actor, "r1")
    finally:
        other.close()

    assert db_session.query(AuditLogEntry).count() == 1
