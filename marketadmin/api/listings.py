# marketadmin/api/listings.py
"""
Listing moderation endpoints. Every mutation requires remove_listings.

- GET  /listings                      - Filtered, paginated listings
- GET  /listings/{listing_id}         - Listing with seller, reports, audit
- POST /listings/{listing_id}/approve
- POST /listings/{listing_id}/reject
- POST /listings/{listing_id}/remove
- POST /listings/{listing_id}/restore
- POST /listings/bulk/approve
- POST /listings/bulk/remove
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marketadmin.api.deps import action_result, build_filters, page_params
from marketadmin.context import AdminContext
from marketadmin.crud import listings as listings_crud
from marketadmin.database import get_db
from marketadmin.exceptions import ModerationError, raise_http
from marketadmin.models.listing import ListingModerationStatus
from marketadmin.permissions import Permission
from marketadmin.schemas.common import ActionResult, Page
from marketadmin.schemas.detail import ListingDetail
from marketadmin.schemas.filters import ListingFilters
from marketadmin.schemas.listing import (
    ApproveListingRequest,
    BulkActionResult,
    BulkApproveRequest,
    BulkRemoveRequest,
    ListingWithSeller,
    RejectListingRequest,
    RemoveListingRequest,
)
from marketadmin.services import listing_moderation
from marketadmin.utils.security import get_current_admin, require_permission

router = APIRouter(prefix="/listings", tags=["Listings"])

can_moderate = require_permission(Permission.REMOVE_LISTINGS)


# ======================
# BROWSE
# ======================
@router.get("", response_model=Page[ListingWithSeller])
def list_listings(
    search: Optional[str] = Query(None, description="Title or description"),
    category_id: Optional[int] = None,
    subcategory_id: Optional[int] = None,
    status: Optional[str] = Query(None, description="active | sold | inactive | all"),
    moderation_status: Optional[str] = Query(None, description="pending | approved | rejected | removed | all"),
    price_min: Optional[float] = None,
    price_max: Optional[float] = None,
    has_images: Optional[str] = Query(None, description="true | false | all"),
    location: Optional[str] = None,
    seller_id: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    paging: dict = Depends(page_params),
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    filters = build_filters(
        ListingFilters,
        search=search,
        category_id=category_id,
        subcategory_id=subcategory_id,
        status=status,
        moderation_status=moderation_status,
        price_min=price_min,
        price_max=price_max,
        has_images=has_images,
        location=location,
        seller_id=seller_id,
        date_from=date_from,
        date_to=date_to,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return listings_crud.search_listings(db, filters, **paging)


@router.get("/{listing_id}", response_model=ListingDetail)
def get_listing(
    listing_id: int,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        return listings_crud.get_listing_detail(db, listing_id)
    except ModerationError as e:
        raise_http(e)


# ======================
# BULK ACTIONS
# ======================
@router.post("/bulk/approve", response_model=BulkActionResult)
def bulk_approve(
    body: BulkApproveRequest,
    admin: AdminContext = Depends(can_moderate),
    db: Session = Depends(get_db)
):
    try:
        listings, entries = listing_moderation.bulk_approve(db, admin, body.listing_ids)
    except ModerationError as e:
        raise_http(e)

    return BulkActionResult(
        message=f"{len(listings)} listing(s) approved",
        listing_ids=[listing.id for listing in listings],
        moderation_status=ListingModerationStatus.APPROVED,
        audit_entries=len(entries),
    )


@router.post("/bulk/remove", response_model=BulkActionResult)
def bulk_remove(
    body: BulkRemoveRequest,
    admin: AdminContext = Depends(can_moderate),
    db: Session = Depends(get_db)
):
    try:
        listings, entries = listing_moderation.bulk_remove(
            db, admin, body.listing_ids, reason=body.reason
        )
    except ModerationError as e:
        raise_http(e)

    return BulkActionResult(
        message=f"{len(listings)} listing(s) removed",
        listing_ids=[listing.id for listing in listings],
        moderation_status=ListingModerationStatus.REMOVED,
        audit_entries=len(entries),
    )


# ======================
# SINGLE-LISTING ACTIONS
# ======================
@router.post("/{listing_id}/approve", response_model=ActionResult)
def approve_listing(
    listing_id: int,
    body: Optional[ApproveListingRequest] = None,
    admin: AdminContext = Depends(can_moderate),
    db: Session = Depends(get_db)
):
    try:
        outcome = listing_moderation.approve_listing(
            db, admin, listing_id,
            internal_notes=body.internal_notes if body else None,
        )
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Listing approved", outcome.target.moderation_status)


@router.post("/{listing_id}/reject", response_model=ActionResult)
def reject_listing(
    listing_id: int,
    body: RejectListingRequest,
    admin: AdminContext = Depends(can_moderate),
    db: Session = Depends(get_db)
):
    try:
        outcome = listing_moderation.reject_listing(
            db, admin, listing_id,
            reason=body.reason,
            internal_notes=body.internal_notes,
        )
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Listing rejected", outcome.target.moderation_status)


@router.post("/{listing_id}/remove", response_model=ActionResult)
def remove_listing(
    listing_id: int,
    body: RemoveListingRequest,
    admin: AdminContext = Depends(can_moderate),
    db: Session = Depends(get_db)
):
    try:
        outcome = listing_moderation.remove_listing(
            db, admin, listing_id,
            reason=body.reason,
            notify_seller=body.notify_seller,
            internal_notes=body.internal_notes,
        )
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Listing removed", outcome.target.moderation_status)


@router.post("/{listing_id}/restore", response_model=ActionResult)
def restore_listing(
    listing_id: int,
    admin: AdminContext = Depends(can_moderate),
    db: Session = Depends(get_db)
):
    try:
        outcome = listing_moderation.restore_listing(db, admin, listing_id)
    except ModerationError as e:
        raise_http(e)
    return action_result(outcome, "Listing restored", outcome.target.moderation_status)
