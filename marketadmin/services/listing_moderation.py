# marketadmin/services/listing_moderation.py
"""
Listing moderation: approve, reject, remove, restore and their bulk variants.

Removal fields (removed_by, removed_at) are only populated while a listing is
REMOVED; every other transition clears them.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from marketadmin.context import AdminContext
from marketadmin.database import utcnow
from marketadmin.exceptions import NotFoundError, ValidationFailed
from marketadmin.models.audit_log import AuditLogEntry, AuditTargetType
from marketadmin.models.listing import Listing, ListingModerationStatus
from marketadmin.schemas.audit import (
    ListingApprovedDetails,
    ListingRejectedDetails,
    ListingRemovedDetails,
    ListingRestoredDetails,
)
from marketadmin.schemas.common import optional_text
from marketadmin.services import notification_service
from marketadmin.services.audit_service import ActionOutcome, atomic, record_action
from marketadmin.services.validation import required_text


# =====================================
# TRANSITIONS
# =====================================

def _clear_removal(listing: Listing) -> None:
    listing.removal_reason = None
    listing.removed_by = None
    listing.removed_at = None


def apply_approval(listing: Listing) -> None:
    listing.moderation_status = ListingModerationStatus.APPROVED
    _clear_removal(listing)


def apply_rejection(listing: Listing, reason: str) -> None:
    listing.moderation_status = ListingModerationStatus.REJECTED
    _clear_removal(listing)
    listing.removal_reason = reason


def apply_removal(listing: Listing, reason: str, removed_by: str) -> None:
    listing.moderation_status = ListingModerationStatus.REMOVED
    listing.removal_reason = reason
    listing.removed_by = removed_by
    listing.removed_at = utcnow()


def get_listing(db: Session, listing_id: int) -> Listing:
    listing = db.query(Listing).filter(Listing.id == listing_id).first()
    if not listing:
        raise NotFoundError("Listing not found")
    return listing


def _get_listings(db: Session, listing_ids: Iterable[int]) -> List[Listing]:
    """Load every requested listing in id order, failing if any is missing."""
    wanted = sorted(set(listing_ids))
    if not wanted:
        raise ValidationFailed("listing_ids cannot be empty")
    listings = db.query(Listing).filter(Listing.id.in_(wanted)).order_by(Listing.id).all()
    missing = set(wanted) - {listing.id for listing in listings}
    if missing:
        raise NotFoundError(f"Listings not found: {sorted(missing)}")
    return listings


# =====================================
# SINGLE-LISTING ACTIONS
# =====================================

def approve_listing(
    db: Session,
    actor: AdminContext,
    listing_id: int,
    *,
    internal_notes: Optional[str] = None,
) -> ActionOutcome:
    with atomic(db, f"approving listing {listing_id}"):
        listing = get_listing(db, listing_id)
        apply_approval(listing)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.LISTING,
            target_id=listing.id,
            details=ListingApprovedDetails(
                listing_id=listing.id,
                internal_notes=optional_text(internal_notes),
            ),
        )
    return ActionOutcome(listing, entry)


def reject_listing(
    db: Session,
    actor: AdminContext,
    listing_id: int,
    *,
    reason: str,
    internal_notes: Optional[str] = None,
) -> ActionOutcome:
    reason = required_text(reason, "reason")

    with atomic(db, f"rejecting listing {listing_id}"):
        listing = get_listing(db, listing_id)
        apply_rejection(listing, reason)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.LISTING,
            target_id=listing.id,
            details=ListingRejectedDetails(
                listing_id=listing.id,
                reason=reason,
                internal_notes=optional_text(internal_notes),
            ),
        )
    return ActionOutcome(listing, entry)


def remove_listing(
    db: Session,
    actor: AdminContext,
    listing_id: int,
    *,
    reason: str,
    notify_seller: bool = False,
    internal_notes: Optional[str] = None,
) -> ActionOutcome:
    reason = required_text(reason, "reason")

    with atomic(db, f"removing listing {listing_id}"):
        listing = get_listing(db, listing_id)
        apply_removal(listing, reason, actor.admin_id)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.LISTING,
            target_id=listing.id,
            details=ListingRemovedDetails(
                listing_id=listing.id,
                reason=reason,
                notify_seller=notify_seller,
                internal_notes=optional_text(internal_notes),
            ),
        )

    if notify_seller:
        notification_service.notify_listing_removed(listing, reason)
    return ActionOutcome(listing, entry)


def restore_listing(db: Session, actor: AdminContext, listing_id: int) -> ActionOutcome:
    with atomic(db, f"restoring listing {listing_id}"):
        listing = get_listing(db, listing_id)
        apply_approval(listing)
        entry = record_action(
            db,
            actor=actor,
            target_type=AuditTargetType.LISTING,
            target_id=listing.id,
            details=ListingRestoredDetails(listing_id=listing.id),
        )
    return ActionOutcome(listing, entry)


# =====================================
# BULK ACTIONS
# =====================================

def bulk_approve(
    db: Session,
    actor: AdminContext,
    listing_ids: Iterable[int],
) -> Tuple[List[Listing], List[AuditLogEntry]]:
    """Approve every listing and write one audit row per id, all or nothing."""
    entries: List[AuditLogEntry] = []
    with atomic(db, "bulk-approving listings"):
        listings = _get_listings(db, listing_ids)
        for listing in listings:
            apply_approval(listing)
            entries.append(record_action(
                db,
                actor=actor,
                target_type=AuditTargetType.LISTING,
                target_id=listing.id,
                details=ListingApprovedDetails(listing_id=listing.id, bulk_action=True),
            ))
    return listings, entries


def bulk_remove(
    db: Session,
    actor: AdminContext,
    listing_ids: Iterable[int],
    *,
    reason: str,
) -> Tuple[List[Listing], List[AuditLogEntry]]:
    reason = required_text(reason, "reason")

    entries: List[AuditLogEntry] = []
    with atomic(db, "bulk-removing listings"):
        listings = _get_listings(db, listing_ids)
        for listing in listings:
            apply_removal(listing, reason, actor.admin_id)
            entries.append(record_action(
                db,
                actor=actor,
                target_type=AuditTargetType.LISTING,
                target_id=listing.id,
                details=ListingRemovedDetails(
                    listing_id=listing.id,
                    reason=reason,
                    bulk_action=True,
                ),
            ))
    return listings, entries
