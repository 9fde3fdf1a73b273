import pytest

from marketadmin.exceptions import NotFoundError, ValidationFailed
from marketadmin.models import AuditLogEntry, Listing, ListingModerationStatus
from marketadmin.services import listing_moderation, notification_service

from factories import make_listing


def test_remove_listing_records_who_and_why(db_session, actor, seller):
    listing = make_listing(db_session, seller, id=42)

    outcome = listing_moderation.remove_listing(
        db_session, actor, 42,
        reason="counterfeit",
    )

    db_session.refresh(listing)
    assert listing.moderation_status == ListingModerationStatus.REMOVED
    assert listing.removal_reason == "counterfeit"
    assert listing.removed_by == actor.admin_id
    assert listing.removed_at is not None

    entry = outcome.audit_entry
    assert entry.action == "listing_removed"
    assert entry.target_type.value == "listing"
    assert entry.target_id == "42"
    assert entry.details == {"listing_id": 42, "reason": "counterfeit", "notify_seller": False}


def test_remove_with_notify_emails_seller(db_session, actor, seller, monkeypatch):
    sent = []
    monkeypatch.setattr(
        notification_service, "notify_listing_removed",
        lambda listing, reason: sent.append((listing.id, reason)) or True,
    )
    listing = make_listing(db_session, seller)

    listing_moderation.remove_listing(
        db_session, actor, listing.id,
        reason="prohibited item",
        notify_seller=True,
    )

    assert sent == [(listing.id, "prohibited item")]


def test_remove_without_notify_sends_nothing(db_session, actor, seller, monkeypatch):
    monkeypatch.setattr(
        notification_service, "notify_listing_removed",
        lambda *args: pytest.fail("seller should not be notified"),
    )
    listing = make_listing(db_session, seller)

    listing_moderation.remove_listing(db_session, actor, listing.id, reason="spam")


def test_reject_keeps_reason_and_no_removal_fields(db_session, actor, seller):
    listing = make_listing(db_session, seller)

    listing_moderation.reject_listing(db_session, actor, listing.id, reason="Blurry photos")

    db_session.refresh(listing)
    assert listing.moderation_status == ListingModerationStatus.REJECTED
    assert listing.removal_reason == "Blurry photos"
    assert listing.removed_by is None
    assert listing.removed_at is None


def test_restore_clears_removal_fields(db_session, actor, seller):
    listing = make_listing(db_session, seller)
    listing_moderation.remove_listing(db_session, actor, listing.id, reason="spam")

    outcome = listing_moderation.restore_listing(db_session, actor, listing.id)

    db_session.refresh(listing)
    assert listing.moderation_status == ListingModerationStatus.APPROVED
    assert listing.removal_reason is None
    assert listing.removed_by is None
    assert listing.removed_at is None
    assert outcome.audit_entry.action == "listing_restored"


def test_approve_with_notes(db_session, actor, seller):
    listing = make_listing(db_session, seller)

    outcome = listing_moderation.approve_listing(
        db_session, actor, listing.id, internal_notes="  checked serial  "
    )

    assert outcome.target.moderation_status == ListingModerationStatus.APPROVED
    assert outcome.audit_entry.details == {"listing_id": listing.id, "internal_notes": "checked serial"}


def test_reject_requires_reason(db_session, actor, seller):
    listing = make_listing(db_session, seller)

    with pytest.raises(ValidationFailed):
        listing_moderation.reject_listing(db_session, actor, listing.id, reason="")


# ======================
# BULK
# ======================

def test_bulk_approve_writes_one_audit_row_per_listing(db_session, actor, seller):
    for listing_id in (1, 2, 3):
        make_listing(db_session, seller, id=listing_id)

    listings, entries = listing_moderation.bulk_approve(db_session, actor, [3, 1, 2, 2])

    assert [listing.id for listing in listings] == [1, 2, 3]
    assert len(entries) == 3
    rows = db_session.query(AuditLogEntry).order_by(AuditLogEntry.target_id).all()
    assert [row.target_id for row in rows] == ["1", "2", "3"]
    assert all(row.action == "listing_approved" for row in rows)
    assert all(row.details["bulk_action"] is True for row in rows)
    assert {
        listing.moderation_status
        for listing in db_session.query(Listing).all()
    } == {ListingModerationStatus.APPROVED}


def test_bulk_remove_applies_reason_to_every_listing(db_session, actor, seller):
    first = make_listing(db_session, seller)
    second = make_listing(db_session, seller)

    listings, entries = listing_moderation.bulk_remove(
        db_session, actor, [first.id, second.id], reason="Duplicate posts"
    )

    assert len(entries) == 2
    for listing in listings:
        db_session.refresh(listing)
        assert listing.moderation_status == ListingModerationStatus.REMOVED
        assert listing.removal_reason == "Duplicate posts"
        assert listing.removed_by == actor.admin_id


def test_bulk_with_missing_id_changes_nothing(db_session, actor, seller):
    listing = make_listing(db_session, seller)

    with pytest.raises(NotFoundError):
        listing_moderation.bulk_approve(db_session, actor, [listing.id, 9999])

    db_session.refresh(listing)
    assert listing.moderation_status == ListingModerationStatus.PENDING
    assert db_session.query(AuditLogEntry).count() == 0


def test_bulk_with_empty_list_is_rejected(db_session, actor):
    with pytest.raises(ValidationFailed):
        listing_moderation.bulk_approve(db_session, actor, [])
