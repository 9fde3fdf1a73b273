import enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from marketadmin.database import Base, enum_column, new_uuid, utcnow


class AdminRole(str, enum.Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MODERATOR = "moderator"


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    # Auth-provider user id (the JWT "sub" claim)
    user_id = Column(String(36), unique=True, nullable=False, index=True)
    role = Column(enum_column(AdminRole), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(String(36), ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

    creator = relationship("AdminUser", remote_side=[id])
