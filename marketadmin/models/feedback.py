import enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import relationship

from marketadmin.database import Base, enum_column, new_uuid, utcnow


class FeedbackType(str, enum.Enum):
    BUG = "bug"
    FEATURE_REQUEST = "feature_request"
    COMPLAINT = "complaint"
    PRAISE = "praise"
    QUESTION = "question"
    OTHER = "other"


class FeedbackStatus(str, enum.Enum):
    NEW = "new"
    READ = "read"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class UserFeedback(Base):
    __tablename__ = "user_feedback"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True, index=True)
    type = Column(enum_column(FeedbackType), nullable=False, index=True)
    subject = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    app_version = Column(String(32), nullable=True)
    device_info = Column(JSON, nullable=True)
    screenshot_urls = Column(JSON, nullable=True)
    status = Column(enum_column(FeedbackStatus), nullable=False, default=FeedbackStatus.NEW, index=True)
    assigned_to = Column(String(36), ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True)
    admin_response = Column(Text, nullable=True)
    responded_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

    user = relationship("Profile")
