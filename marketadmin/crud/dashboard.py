from sqlalchemy import func
from sqlalchemy.orm import Session

from marketadmin.models.feedback import FeedbackStatus, UserFeedback
from marketadmin.models.listing import Listing, ListingModerationStatus, ListingStatus
from marketadmin.models.profile import ModerationStatus, Profile
from marketadmin.models.report import Report, ReportStatus


def get_dashboard_stats(db: Session) -> dict:
    pending_reports = db.query(Report).filter(Report.status == ReportStatus.PENDING).count()
    under_review_reports = db.query(Report).filter(Report.status == ReportStatus.UNDER_REVIEW).count()

    active_listings = db.query(Listing).filter(Listing.status == ListingStatus.ACTIVE).count()
    pending_listings = (
        db.query(Listing)
        .filter(Listing.moderation_status == ListingModerationStatus.PENDING)
        .count()
    )

    live_profiles = db.query(Profile).filter(Profile.deleted_at.is_(None))
    total_users = live_profiles.count()
    by_status = dict(
        live_profiles
        .with_entities(Profile.moderation_status, func.count(Profile.id))
        .group_by(Profile.moderation_status)
        .all()
    )

    new_feedback = db.query(UserFeedback).filter(UserFeedback.status == FeedbackStatus.NEW).count()

    return {
        "reports": {
            "pending": pending_reports,
            "under_review": under_review_reports,
        },
        "listings": {
            "active": active_listings,
            "pending": pending_listings,
        },
        "users": {
            "total": total_users,
            "by_moderation_status": {
                status.value: by_status.get(status, 0) for status in ModerationStatus
            },
        },
        "feedback": {
            "new": new_feedback,
        },
    }
