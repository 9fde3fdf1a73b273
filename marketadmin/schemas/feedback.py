from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from marketadmin.models.feedback import FeedbackStatus, FeedbackType


class FeedbackRead(BaseModel):
    id: str
    user_id: Optional[str] = None
    type: FeedbackType
    subject: str
    message: str
    app_version: Optional[str] = None
    device_info: Optional[Dict[str, Any]] = None
    screenshot_urls: Optional[List[str]] = None
    status: FeedbackStatus
    assigned_to: Optional[str] = None
    admin_response: Optional[str] = None
    responded_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
