"""
Notification settings schema
"""

from typing import Optional
from pydantic import BaseModel

class NotificationSettings(BaseModel):
    """Admin notification settings loaded once per request"""
    admin_email: Optional[str] = None
    enable_admin_notifications: bool = False
