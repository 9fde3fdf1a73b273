import enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from marketadmin.database import Base, enum_column, new_uuid, utcnow


class ReportReason(str, enum.Enum):
    SCAM = "scam"
    FRAUD = "fraud"
    FAKE_ITEM = "fake_item"
    OFFENSIVE = "offensive"
    SPAM = "spam"
    HARASSMENT = "harassment"
    PROHIBITED_ITEM = "prohibited_item"
    OTHER = "other"


class ReportStatus(str, enum.Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


OPEN_REPORT_STATUSES = (ReportStatus.PENDING, ReportStatus.UNDER_REVIEW)


class ReportResolution(str, enum.Enum):
    NO_ACTION = "no_action"
    WARNING_ISSUED = "warning_issued"
    LISTING_REMOVED = "listing_removed"
    USER_SUSPENDED = "user_suspended"
    USER_BANNED = "user_banned"


class Report(Base):
    __tablename__ = "reports"
    __table_args__ = (
        CheckConstraint(
            "(reported_user_id IS NULL) <> (reported_listing_id IS NULL)",
            name="ck_reports_single_target",
        ),
    )

    id = Column(String(36), primary_key=True, default=new_uuid)
    reporter_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    reported_user_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True, index=True)
    reported_listing_id = Column(Integer, ForeignKey("listings.id", ondelete="CASCADE"), nullable=True, index=True)
    reason = Column(enum_column(ReportReason), nullable=False, index=True)
    description = Column(Text, nullable=True)
    status = Column(enum_column(ReportStatus), nullable=False, default=ReportStatus.PENDING, index=True)
    resolution = Column(enum_column(ReportResolution), nullable=True)
    resolved_by = Column(String(36), ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True, index=True)
    resolved_at = Column(DateTime, nullable=True)
    admin_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

    version = Column(Integer, nullable=False, default=1)

    reporter = relationship("Profile", foreign_keys=[reporter_id])
    reported_user = relationship("Profile", foreign_keys=[reported_user_id])
    reported_listing = relationship("Listing", foreign_keys=[reported_listing_id])
    resolver = relationship("AdminUser", foreign_keys=[resolved_by])

    __mapper_args__ = {"version_id_col": version}

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_REPORT_STATUSES
