from typing import Optional

from sqlalchemy import desc, func, or_
from sqlalchemy.orm import Session, joinedload

from marketadmin.crud.audit import entries_for_target
from marketadmin.crud.pagination import apply_date_range, order, paginate
from marketadmin.exceptions import NotFoundError
from marketadmin.models.audit_log import AuditTargetType
from marketadmin.models.listing import Listing
from marketadmin.models.report import Report
from marketadmin.schemas.common import Page
from marketadmin.schemas.detail import ListingDetail
from marketadmin.schemas.filters import ListingFilters
from marketadmin.schemas.listing import ListingWithSeller

SORT_COLUMNS = {
    "created_at": Listing.created_at,
    "price": Listing.price,
    "title": Listing.title,
}

image_count = func.coalesce(func.json_array_length(Listing.images), 0)


def search_listings(
    db: Session,
    filters: ListingFilters,
    page: int = 0,
    page_size: Optional[int] = None,
) -> Page[ListingWithSeller]:
    query = db.query(Listing).options(joinedload(Listing.seller))

    if filters.search:
        like = f"%{filters.search}%"
        query = query.filter(or_(Listing.title.ilike(like), Listing.description.ilike(like)))
    if filters.category_id is not None:
        query = query.filter(Listing.category_id == filters.category_id)
    if filters.subcategory_id is not None:
        query = query.filter(Listing.subcategory_id == filters.subcategory_id)
    if filters.status:
        query = query.filter(Listing.status == filters.status)
    if filters.moderation_status:
        query = query.filter(Listing.moderation_status == filters.moderation_status)
    if filters.price_min is not None:
        query = query.filter(Listing.price >= filters.price_min)
    if filters.price_max is not None:
        query = query.filter(Listing.price <= filters.price_max)
    if filters.has_images is True:
        query = query.filter(image_count > 0)
    elif filters.has_images is False:
        query = query.filter(image_count == 0)
    if filters.location:
        query = query.filter(Listing.location.ilike(f"%{filters.location}%"))
    if filters.seller_id:
        query = query.filter(Listing.user_id == filters.seller_id)
    query = apply_date_range(query, Listing.created_at, filters.date_from, filters.date_to)

    query = query.order_by(
        order(SORT_COLUMNS[filters.sort_by], filters.sort_order),
        desc(Listing.id),
    )
    return paginate(query, page, page_size, ListingWithSeller.model_validate)


def get_listing_detail(db: Session, listing_id: int) -> ListingDetail:
    listing = (
        db.query(Listing)
        .options(joinedload(Listing.seller))
        .filter(Listing.id == listing_id)
        .first()
    )
    if not listing:
        raise NotFoundError("Listing not found")

    reports = (
        db.query(Report)
        .filter(Report.reported_listing_id == listing_id)
        .order_by(desc(Report.created_at))
        .all()
    )

    return ListingDetail.model_validate(
        {
            **ListingWithSeller.model_validate(listing).model_dump(),
            "reports": reports,
            "audit_log": entries_for_target(db, AuditTargetType.LISTING, listing_id),
        },
        from_attributes=True,
    )
