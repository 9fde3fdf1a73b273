from typing import Optional

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session

from marketadmin.crud.pagination import apply_date_range, paginate
from marketadmin.exceptions import NotFoundError
from marketadmin.models.feedback import UserFeedback
from marketadmin.schemas.common import Page
from marketadmin.schemas.feedback import FeedbackRead
from marketadmin.schemas.filters import FeedbackFilters


def search_feedback(
    db: Session,
    filters: FeedbackFilters,
    page: int = 0,
    page_size: Optional[int] = None,
) -> Page[FeedbackRead]:
    query = db.query(UserFeedback)

    if filters.type:
        query = query.filter(UserFeedback.type == filters.type)
    if filters.status:
        query = query.filter(UserFeedback.status == filters.status)
    if filters.search:
        like = f"%{filters.search}%"
        query = query.filter(or_(UserFeedback.subject.ilike(like), UserFeedback.message.ilike(like)))
    query = apply_date_range(query, UserFeedback.created_at, filters.date_from, filters.date_to)

    query = query.order_by(desc(UserFeedback.created_at), desc(UserFeedback.id))
    return paginate(query, page, page_size, FeedbackRead.model_validate)


def get_feedback(db: Session, feedback_id: str) -> UserFeedback:
    feedback = db.query(UserFeedback).filter(UserFeedback.id == feedback_id).first()
    if not feedback:
        raise NotFoundError("Feedback not found")
    return feedback
