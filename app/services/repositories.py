"""
Repository for persisted key/value settings.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import StorageError
from app.models import Setting
from app.schemas.settings import NotificationSettings

logger = logging.getLogger(__name__)

ADMIN_EMAIL_KEY = "admin_email"
ENABLE_NOTIFICATIONS_KEY = "enable_admin_notifications"


class SettingsRepo:
    @staticmethod
    def get_all(db: Session) -> Dict[str, Optional[str]]:
        return {row.key: row.value for row in db.query(Setting).all()}

    @staticmethod
    def load_notification_settings(db: Session) -> NotificationSettings:
        """Read the notification settings, falling back to environment seeds for unset keys"""
        stored = SettingsRepo.get_all(db)

        admin_email = stored.get(ADMIN_EMAIL_KEY)
        if admin_email is None:
            admin_email = settings.ADMIN_EMAIL or None

        enabled = stored.get(ENABLE_NOTIFICATIONS_KEY)
        if enabled is None:
            enabled_flag = settings.ENABLE_ADMIN_NOTIFICATIONS
        else:
            enabled_flag = enabled == "1"

        return NotificationSettings(admin_email=admin_email, enable_admin_notifications=enabled_flag)

    @staticmethod
    def save_notification_settings(db: Session, values: NotificationSettings) -> None:
        """Persist both keys in one commit"""
        pairs = {
            ADMIN_EMAIL_KEY: values.admin_email or "",
            ENABLE_NOTIFICATIONS_KEY: "1" if values.enable_admin_notifications else "0",
        }
        try:
            for key, value in pairs.items():
                db.merge(Setting(key=key, value=value))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error saving settings: %s", e)
            raise StorageError("Could not save settings") from e
