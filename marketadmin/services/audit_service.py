from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, NamedTuple, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from marketadmin.context import AdminContext
from marketadmin.exceptions import ConcurrentUpdateError
from marketadmin.models.audit_log import AuditLogEntry, AuditTargetType
from marketadmin.schemas.audit import AuditDetails

logger = logging.getLogger(__name__)


class ActionOutcome(NamedTuple):
    target: Any
    audit_entry: AuditLogEntry


@contextmanager
def atomic(db: Session, description: str):
    """
    Commit everything done inside the block as one transaction.

    Entity updates and their audit rows either land together or not at all.
    A version-column conflict surfaces as ConcurrentUpdateError.
    """
    try:
        yield
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        logger.warning("Concurrent update while %s: %s", description, exc)
        raise ConcurrentUpdateError(
            "The record was modified by another admin; reload and try again"
        ) from exc
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error while %s", description)
        raise
    except Exception:
        db.rollback()
        raise


def record_action(
    db: Session,
    *,
    actor: AdminContext,
    target_type: Union[AuditTargetType, str],
    target_id: Union[str, int],
    details: AuditDetails,
) -> AuditLogEntry:
    """Stage one audit row in the caller's transaction. The caller commits."""
    entry = AuditLogEntry(
        admin_id=actor.admin_id,
        action=details.action,
        target_type=AuditTargetType(target_type),
        target_id=str(target_id),
        details=details.to_record(),
        ip_address=actor.ip_address,
    )
    db.add(entry)
    db.flush()
    logger.info(
        "Admin action %s by admin_id=%s on %s:%s",
        entry.action,
        actor.admin_id,
        entry.target_type.value,
        entry.target_id,
    )
    return entry
