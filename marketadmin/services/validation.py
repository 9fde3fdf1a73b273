from typing import Optional

from marketadmin.exceptions import ValidationFailed
from marketadmin.schemas.common import require_text


def required_text(value: Optional[str], field_name: str) -> str:
    """Re-check required free text at the service boundary."""
    try:
        return require_text(value, field_name)
    except ValueError as exc:
        raise ValidationFailed(str(exc)) from exc
