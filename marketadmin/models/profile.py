import enum

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func
from sqlalchemy.orm import relationship

from marketadmin.database import Base, enum_column, new_uuid, utcnow


class ModerationStatus(str, enum.Enum):
    ACTIVE = "active"
    WARNED = "warned"
    SUSPENDED = "suspended"
    BANNED = "banned"


# ---------------- END-USER PROFILE ----------------
class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_uuid)
    email = Column(String(255), nullable=True, index=True)
    phone_number = Column(String(32), nullable=True)
    display_name = Column(String(100), nullable=True)
    avatar_url = Column(String(512), nullable=True)
    email_verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime, nullable=True)

    moderation_status = Column(
        enum_column(ModerationStatus),
        default=ModerationStatus.ACTIVE,
        nullable=False,
        index=True,
    )
    warning_count = Column(Integer, default=0, nullable=False)
    suspension_until = Column(DateTime, nullable=True)   # only while suspended
    ban_reason = Column(Text, nullable=True)             # only while banned

    version = Column(Integer, nullable=False, default=1)

    listings = relationship("Listing", back_populates="seller")

    __mapper_args__ = {"version_id_col": version}
