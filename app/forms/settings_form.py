"""
Admin notification settings form
"""

from typing import Dict, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.errors import FormValidationError, ValidationError
from app.schemas.settings import NotificationSettings
from app.services.repositories import SettingsRepo
from app.utils.validators import add_error, check_required, is_valid_email

SUCCESS_MESSAGE = "The configuration options have been saved."


class SettingsFormView(BaseModel):
    values: NotificationSettings = NotificationSettings()
    errors: Dict[str, str] = {}
    status_message: Optional[str] = None
    error_message: Optional[str] = None


def validate_settings(values: NotificationSettings) -> Dict[str, ValidationError]:
    errors: Dict[str, ValidationError] = {}
    if check_required(errors, "admin_email", "Admin Notification Email Address", values.admin_email):
        if not is_valid_email(values.admin_email):
            add_error(errors, ValidationError("admin_email", "Please enter a valid email address."))
    return errors


def submit_settings(db: Session, values: NotificationSettings) -> None:
    """Persist both fields, or neither when validation fails"""
    errors = validate_settings(values)
    if errors:
        raise FormValidationError(errors)
    SettingsRepo.save_notification_settings(db, values)
