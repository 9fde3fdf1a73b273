import enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from marketadmin.database import Base, enum_column, new_uuid, utcnow


class AuditTargetType(str, enum.Enum):
    USER = "user"
    LISTING = "listing"
    REPORT = "report"
    FEEDBACK = "feedback"
    ADMIN = "admin"


class AuditLogEntry(Base):
    """Append-only: rows are inserted by ``audit_service`` and never updated."""

    __tablename__ = "admin_audit_log"

    id = Column(String(36), primary_key=True, default=new_uuid)
    admin_id = Column(String(36), ForeignKey("admin_users.id", ondelete="RESTRICT"), nullable=False, index=True)
    action = Column(String(64), nullable=False, index=True)
    target_type = Column(enum_column(AuditTargetType), nullable=False, index=True)
    target_id = Column(String(64), nullable=False, index=True)
    details = Column(JSON, nullable=True)
    ip_address = Column(String(45), nullable=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False, index=True)

    admin = relationship("AdminUser")
