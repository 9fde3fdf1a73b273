from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marketadmin.api.deps import build_filters, page_params
from marketadmin.context import AdminContext
from marketadmin.crud import feedback as feedback_crud
from marketadmin.database import get_db
from marketadmin.exceptions import ModerationError, raise_http
from marketadmin.schemas.common import Page
from marketadmin.schemas.feedback import FeedbackRead
from marketadmin.schemas.filters import FeedbackFilters
from marketadmin.utils.security import get_current_admin

router = APIRouter(prefix="/feedback", tags=["Feedback"])


@router.get("", response_model=Page[FeedbackRead])
def list_feedback(
    search: Optional[str] = Query(None, description="Subject or message"),
    type: Optional[str] = Query(None, description="bug | feature_request | complaint | praise | question | other | all"),
    status: Optional[str] = Query(None, description="new | read | in_progress | resolved | closed | all"),
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    paging: dict = Depends(page_params),
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    filters = build_filters(
        FeedbackFilters,
        search=search,
        type=type,
        status=status,
        date_from=date_from,
        date_to=date_to,
    )
    return feedback_crud.search_feedback(db, filters, **paging)


@router.get("/{feedback_id}", response_model=FeedbackRead)
def get_feedback(
    feedback_id: str,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        return feedback_crud.get_feedback(db, feedback_id)
    except ModerationError as e:
        raise_http(e)
