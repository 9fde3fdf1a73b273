from typing import Any, Callable, Optional

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from marketadmin.config import settings
from marketadmin.schemas.common import Page


def clamp_page_size(page_size: Optional[int]) -> int:
    if not page_size or page_size < 1:
        return settings.DEFAULT_PAGE_SIZE
    return min(page_size, settings.MAX_PAGE_SIZE)


def order(column, sort_order: str):
    return asc(column) if sort_order == "asc" else desc(column)


def apply_date_range(query: Query, column, date_from=None, date_to=None) -> Query:
    """Inclusive on both ends."""
    if date_from is not None:
        query = query.filter(column >= date_from)
    if date_to is not None:
        query = query.filter(column <= date_to)
    return query


def paginate(
    query: Query,
    page: Optional[int],
    page_size: Optional[int],
    convert: Callable[[Any], Any],
) -> Page:
    """
    Run an ordered query for one 0-based page and wrap it in a Page.

    ``total`` counts every matching row; ``next_page`` is None on the last page.
    """
    page = max(page or 0, 0)
    page_size = clamp_page_size(page_size)

    total = query.order_by(None).count()
    rows = query.offset(page * page_size).limit(page_size).all()
    return Page(
        items=[convert(row) for row in rows],
        total=total,
        page=page,
        page_size=page_size,
        next_page=page + 1 if (page + 1) * page_size < total else None,
    )
