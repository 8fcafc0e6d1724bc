"""
Admin routes - requires authentication
"""

import logging
from datetime import datetime
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.orm import Session

from app.api.deps import ListingFilter, get_listing_filter
from app.core.clock import get_now
from app.core.db import get_db
from app.core.errors import FormValidationError, StorageError
from app.core.templating import templates
from app.forms import config_form, settings_form
from app.forms.config_form import EventConfigFormValues
from app.schemas.settings import NotificationSettings
from app.services.event_service import EventService
from app.services.export_service import ExportService
from app.services.registration_service import RegistrationService
from app.services.repositories import SettingsRepo
from app.utils.security import verify_admin_token

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(verify_admin_token)])

EXPORT_URL = "/admin/event-registration/export-csv"

def export_url_for(listing_filter: ListingFilter) -> str:
    """Export link carrying the current filter"""
    if not listing_filter.raw_event_date and not listing_filter.raw_event_name:
        return EXPORT_URL
    return EXPORT_URL + "?" + urlencode({
        "event_date": listing_filter.raw_event_date,
        "event_name": listing_filter.raw_event_name,
    })

@router.get("/event-registration", response_class=HTMLResponse)
def registration_listing(
    request: Request,
    listing_filter: ListingFilter = Depends(get_listing_filter),
    db: Session = Depends(get_db)
):
    """Filterable list of all registrations"""
    event_names = {}
    if listing_filter.event_date:
        event_names = EventService.get_event_names_by_date(db, listing_filter.event_date)

    registrations = RegistrationService.filter_registrations(
        db, listing_filter.event_date, listing_filter.event_id
    )

    return templates.TemplateResponse(request, "admin/listing.html", {
        "date_options": EventService.get_all_event_dates(db),
        "name_options": {str(event_id): name for event_id, name in event_names.items()},
        "selected_date": listing_filter.raw_event_date,
        "selected_event": listing_filter.raw_event_name,
        "export_url": export_url_for(listing_filter),
        "participant_count": len(registrations),
        "table_header": ExportService.TABLE_COLUMNS,
        "table_rows": ExportService.table_rows(registrations),
    })

@router.get("/event-registration/export-csv")
def export_csv(
    listing_filter: ListingFilter = Depends(get_listing_filter),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now)
):
    """Download the filtered registrations as CSV"""
    registrations = RegistrationService.filter_registrations(
        db, listing_filter.event_date, listing_filter.event_id
    )
    content = ExportService.build_csv(registrations)
    filename = ExportService.export_filename(now)

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

@router.get("/event-registration/config", response_class=HTMLResponse)
def event_config_page(request: Request, db: Session = Depends(get_db)):
    """Create-event form with the existing events below it"""
    view = config_form.build_form(db)
    return templates.TemplateResponse(request, "admin/config_form.html", {"form": view})

@router.post("/event-registration/config", response_class=HTMLResponse)
def submit_event_config(
    request: Request,
    registration_start_date: str = Form(""),
    registration_end_date: str = Form(""),
    event_date: str = Form(""),
    event_name: str = Form(""),
    event_category: str = Form(""),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now)
):
    """Validate and save a new event configuration"""
    values = EventConfigFormValues(
        registration_start_date=registration_start_date.strip(),
        registration_end_date=registration_end_date.strip(),
        event_date=event_date.strip(),
        event_name=event_name.strip(),
        event_category=event_category,
    )

    try:
        event = config_form.submit_event_config(db, values, now)
    except FormValidationError as e:
        view = config_form.build_form(db, values=values, errors=e.messages)
        return templates.TemplateResponse(request, "admin/config_form.html", {"form": view}, status_code=422)
    except StorageError:
        view = config_form.build_form(db, values=values, error_message=config_form.FAILURE_MESSAGE)
        return templates.TemplateResponse(request, "admin/config_form.html", {"form": view}, status_code=500)

    logger.info("Event configuration %s created", event.id)
    view = config_form.build_form(db, status_message=config_form.SUCCESS_MESSAGE)
    return templates.TemplateResponse(request, "admin/config_form.html", {"form": view})

@router.get("/event-registration/settings", response_class=HTMLResponse)
def settings_page(request: Request, db: Session = Depends(get_db)):
    """Admin notification settings"""
    view = settings_form.SettingsFormView(values=SettingsRepo.load_notification_settings(db))
    return templates.TemplateResponse(request, "admin/settings_form.html", {"form": view})

@router.post("/event-registration/settings", response_class=HTMLResponse)
def submit_settings(
    request: Request,
    admin_email: str = Form(""),
    enable_admin_notifications: Optional[str] = Form(None),
    db: Session = Depends(get_db)
):
    """Persist the notification settings"""
    values = NotificationSettings(
        admin_email=admin_email.strip(),
        enable_admin_notifications=bool(enable_admin_notifications),
    )

    try:
        settings_form.submit_settings(db, values)
    except FormValidationError as e:
        view = settings_form.SettingsFormView(values=values, errors=e.messages)
        return templates.TemplateResponse(request, "admin/settings_form.html", {"form": view}, status_code=422)
    except StorageError:
        view = settings_form.SettingsFormView(
            values=values, error_message="An error occurred while saving the configuration."
        )
        return templates.TemplateResponse(request, "admin/settings_form.html", {"form": view}, status_code=500)

    view = settings_form.SettingsFormView(
        values=SettingsRepo.load_notification_settings(db),
        status_message=settings_form.SUCCESS_MESSAGE,
    )
    return templates.TemplateResponse(request, "admin/settings_form.html", {"form": view})
