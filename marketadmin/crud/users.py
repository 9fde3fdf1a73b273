from typing import Optional

from sqlalchemy import desc, func, or_, select
from sqlalchemy.orm import Session

from marketadmin.crud.audit import entries_for_target
from marketadmin.crud.pagination import apply_date_range, order, paginate
from marketadmin.exceptions import NotFoundError
from marketadmin.models.audit_log import AuditTargetType
from marketadmin.models.feedback import UserFeedback
from marketadmin.models.listing import Listing
from marketadmin.models.profile import Profile
from marketadmin.models.report import Report
from marketadmin.schemas.common import Page
from marketadmin.schemas.detail import UserDetail
from marketadmin.schemas.filters import UserFilters
from marketadmin.schemas.user import ProfileListItem, ProfileRead


# Correlated counts so bucket filters and totals stay in SQL.
listings_count = (
    select(func.count(Listing.id))
    .where(Listing.user_id == Profile.id)
    .correlate(Profile)
    .scalar_subquery()
)

reports_count = (
    select(func.count(Report.id))
    .where(Report.reported_user_id == Profile.id)
    .correlate(Profile)
    .scalar_subquery()
)

LISTINGS_COUNT_BUCKETS = {
    "0": lambda c: c == 0,
    "1-5": lambda c: c.between(1, 5),
    "5+": lambda c: c > 5,
}

REPORTS_AGAINST_BUCKETS = {
    "0": lambda c: c == 0,
    "1-3": lambda c: c.between(1, 3),
    "3+": lambda c: c > 3,
}

SORT_COLUMNS = {
    "created_at": Profile.created_at,
    "display_name": Profile.display_name,
    "email": Profile.email,
}


def _to_list_item(row) -> ProfileListItem:
    profile, n_listings, n_reports = row
    return ProfileListItem(
        **ProfileRead.model_validate(profile).model_dump(),
        listings_count=n_listings or 0,
        reports_count=n_reports or 0,
    )


def search_users(
    db: Session,
    filters: UserFilters,
    page: int = 0,
    page_size: Optional[int] = None,
) -> Page[ProfileListItem]:
    query = (
        db.query(
            Profile,
            listings_count.label("listings_count"),
            reports_count.label("reports_count"),
        )
        .filter(Profile.deleted_at.is_(None))
    )

    if filters.search:
        like = f"%{filters.search}%"
        query = query.filter(
            or_(
                Profile.email.ilike(like),
                Profile.phone_number.ilike(like),
                Profile.display_name.ilike(like),
            )
        )
    if filters.moderation_status:
        query = query.filter(Profile.moderation_status == filters.moderation_status)
    if filters.email_verified is not None:
        query = query.filter(Profile.email_verified.is_(filters.email_verified))
    if filters.has_avatar is True:
        query = query.filter(Profile.avatar_url.isnot(None))
    elif filters.has_avatar is False:
        query = query.filter(Profile.avatar_url.is_(None))
    query = apply_date_range(query, Profile.created_at, filters.date_from, filters.date_to)

    if filters.listings_count:
        query = query.filter(LISTINGS_COUNT_BUCKETS[filters.listings_count](listings_count))
    if filters.reports_against:
        query = query.filter(REPORTS_AGAINST_BUCKETS[filters.reports_against](reports_count))

    query = query.order_by(
        order(SORT_COLUMNS[filters.sort_by], filters.sort_order),
        desc(Profile.id),
    )
    return paginate(query, page, page_size, _to_list_item)


def get_user_detail(db: Session, user_id: str) -> UserDetail:
    profile = db.query(Profile).filter(Profile.id == user_id).first()
    if not profile:
        raise NotFoundError("User not found")

    listings = (
        db.query(Listing)
        .filter(Listing.user_id == user_id)
        .order_by(desc(Listing.created_at))
        .all()
    )
    reports_against = (
        db.query(Report)
        .filter(Report.reported_user_id == user_id)
        .order_by(desc(Report.created_at))
        .all()
    )
    reports_filed = (
        db.query(Report)
        .filter(Report.reporter_id == user_id)
        .order_by(desc(Report.created_at))
        .all()
    )
    feedback = (
        db.query(UserFeedback)
        .filter(UserFeedback.user_id == user_id)
        .order_by(desc(UserFeedback.created_at))
        .all()
    )

    return UserDetail.model_validate(
        {
            **ProfileRead.model_validate(profile).model_dump(),
            "listings": listings,
            "reports_against": reports_against,
            "reports_filed": reports_filed,
            "feedback": feedback,
            "audit_log": entries_for_target(db, AuditTargetType.USER, user_id),
        },
        from_attributes=True,
    )
