from typing import Optional, Type, TypeVar

from fastapi import Query
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from marketadmin.schemas.common import ActionResult
from marketadmin.services.audit_service import ActionOutcome

F = TypeVar("F", bound=BaseModel)


def build_filters(model: Type[F], **params) -> F:
    """Validate query parameters into a filter model; failures become 422s."""
    try:
        return model(**params)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


def page_params(
    page: int = Query(0, ge=0, description="0-based page number"),
    page_size: Optional[int] = Query(None, ge=1, description="Defaults to DEFAULT_PAGE_SIZE, capped at MAX_PAGE_SIZE"),
):
    return {"page": page, "page_size": page_size}


def action_result(outcome: ActionOutcome, message: str, status_value=None, report_id=None) -> ActionResult:
    entry = outcome.audit_entry
    return ActionResult(
        message=message,
        target_type=entry.target_type.value,
        target_id=entry.target_id,
        status=getattr(status_value, "value", status_value),
        audit_log_id=entry.id,
        report_id=report_id,
    )
