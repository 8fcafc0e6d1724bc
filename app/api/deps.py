"""
Request-scoped dependencies shared by the routers
"""

from datetime import date, datetime
from typing import Optional

from fastapi import Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.clock import get_now
from app.core.db import get_db
from app.schemas.settings import NotificationSettings
from app.services.email_service import EmailService, MailTransport
from app.services.repositories import SettingsRepo
from app.utils.validators import parse_id, parse_iso_date


class ListingFilter(BaseModel):
    """Admin listing filter; the event id takes precedence over the date"""
    event_date: Optional[date] = None
    event_id: Optional[int] = None
    raw_event_date: str = ""
    raw_event_name: str = ""


def get_today(now: datetime = Depends(get_now)) -> date:
    return now.date()


def get_mail_transport() -> MailTransport:
    return MailTransport()


def get_email_service(transport: MailTransport = Depends(get_mail_transport)) -> EmailService:
    return EmailService(transport)


def get_notification_settings(db: Session = Depends(get_db)) -> NotificationSettings:
    """Loaded once at request start and handed to the notifier"""
    return SettingsRepo.load_notification_settings(db)


def get_listing_filter(
    event_date: str = Query(""),
    event_name: str = Query(""),
) -> ListingFilter:
    """Parse the listing query; blank values mean "not filtered", malformed ones are rejected"""
    event_date = event_date.strip()
    event_name = event_name.strip()

    parsed_date = parse_iso_date(event_date)
    if event_date and parsed_date is None:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Invalid event_date")

    parsed_id = parse_id(event_name)
    if event_name and parsed_id is None:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Invalid event_name")

    return ListingFilter(
        event_date=parsed_date,
        event_id=parsed_id,
        raw_event_date=event_date,
        raw_event_name=event_name,
    )
