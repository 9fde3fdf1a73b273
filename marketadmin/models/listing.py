import enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from marketadmin.database import Base, enum_column, utcnow


class ListingStatus(str, enum.Enum):
    ACTIVE = "active"
    SOLD = "sold"
    INACTIVE = "inactive"


class ListingModerationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REMOVED = "removed"


class Listing(Base):
    __tablename__ = "listings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    category_id = Column(Integer, nullable=False, index=True)
    subcategory_id = Column(Integer, nullable=True, index=True)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    currency = Column(String(8), nullable=False, default="USD")
    phone_number = Column(String(32), nullable=True)
    images = Column(JSON, nullable=False, default=list)
    status = Column(enum_column(ListingStatus), default=ListingStatus.ACTIVE, nullable=False, index=True)
    location = Column(String(200), nullable=False, default="")
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    moderation_status = Column(
        enum_column(ListingModerationStatus),
        default=ListingModerationStatus.PENDING,
        nullable=False,
        index=True,
    )
    # Rejection reason while rejected; removal reason while removed.
    removal_reason = Column(Text, nullable=True)
    removed_by = Column(String(36), ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True)
    removed_at = Column(DateTime, nullable=True)

    version = Column(Integer, nullable=False, default=1)

    seller = relationship("Profile", back_populates="listings")

    __mapper_args__ = {"version_id_col": version}
