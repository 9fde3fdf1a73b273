from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


def require_text(value: Optional[str], field_name: str = "value") -> str:
    """Strip and reject blank strings for required free-text fields."""
    if value is None or not value.strip():
        raise ValueError(f"{field_name} cannot be empty or just whitespace")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Strip optional free text, collapsing blank strings to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    page_size: int
    next_page: Optional[int] = None


class ActionResult(BaseModel):
    """Response returned by every moderation mutation."""
    message: str
    target_type: str
    target_id: str
    status: Optional[str] = None
    audit_log_id: Optional[str] = None
    # Set on report endpoints; target_* then names the user or listing acted on.
    report_id: Optional[str] = None
