"""
Public registration routes - no authentication required
"""

import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_email_service, get_notification_settings, get_today
from app.core.clock import get_now
from app.core.db import get_db
from app.core.errors import FormValidationError, StorageError
from app.core.templating import templates
from app.forms import registration_form
from app.forms.registration_form import (
    PLACEHOLDERS,
    STAGE_DATE,
    STAGE_NAME,
    RegistrationFormValues,
    build_form,
    options_for,
    submit_registration,
)
from app.schemas.settings import NotificationSettings
from app.services.email_service import EmailService
from app.utils.responses import rate_limit_error
from app.utils.security import get_client_ip, rate_limit_check

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/event-registration", response_class=HTMLResponse)
def registration_form_page(
    request: Request,
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """Render the public registration form, or the notice when nothing is open"""
    view = build_form(db, today)
    return templates.TemplateResponse(request, "registration_form.html", {"form": view})

@router.post("/event-registration", response_class=HTMLResponse)
def submit_registration_form(
    request: Request,
    full_name: str = Form(""),
    email: str = Form(""),
    college_name: str = Form(""),
    department: str = Form(""),
    event_category: str = Form(""),
    event_date: str = Form(""),
    event_name: str = Form(""),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    email_service: EmailService = Depends(get_email_service),
    notification_settings: NotificationSettings = Depends(get_notification_settings)
):
    """Validate and store a registration, then send the notifications"""
    if not rate_limit_check(get_client_ip(request)):
        raise rate_limit_error()

    values = RegistrationFormValues(
        full_name=full_name.strip(),
        email=email.strip(),
        college_name=college_name.strip(),
        department=department.strip(),
        event_category=event_category,
        event_date=event_date,
        event_name=event_name,
    )
    today = now.date()

    try:
        submit_registration(db, values, now, email_service, notification_settings)
    except FormValidationError as e:
        view = build_form(db, today, values=values, errors=e.messages)
        return templates.TemplateResponse(request, "registration_form.html", {"form": view}, status_code=422)
    except SQLAlchemyError as e:
        logger.error("Registration lookup failed: %s", e)
        db.rollback()
        view = build_form(db, today, values=values, error_message=registration_form.FAILURE_MESSAGE)
        return templates.TemplateResponse(request, "registration_form.html", {"form": view}, status_code=500)
    except StorageError:
        view = build_form(db, today, values=values, error_message=registration_form.FAILURE_MESSAGE)
        return templates.TemplateResponse(request, "registration_form.html", {"form": view}, status_code=500)

    view = build_form(db, today, status_message=registration_form.SUCCESS_MESSAGE.format(email=values.email))
    return templates.TemplateResponse(request, "registration_form.html", {"form": view})

@router.get("/event-registration/fragment/event-date", response_class=HTMLResponse)
def event_date_fragment(
    request: Request,
    event_category: str = Query(""),
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """Re-rendered date and (reset) event-name dropdowns after a category change"""
    selections = {"event_category": event_category}
    return templates.TemplateResponse(request, "partials/cascade_selects.html", {
        "selects": [
            _select(STAGE_DATE, "Event Date", options_for(db, STAGE_DATE, selections, today)),
            _select(STAGE_NAME, "Event Name", {}),
        ]
    })

@router.get("/event-registration/fragment/event-name", response_class=HTMLResponse)
def event_name_fragment(
    request: Request,
    event_category: str = Query(""),
    event_date: str = Query(""),
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """Re-rendered event-name dropdown after a date change"""
    selections = {"event_category": event_category, "event_date": event_date}
    return templates.TemplateResponse(request, "partials/cascade_selects.html", {
        "selects": [
            _select(STAGE_NAME, "Event Name", options_for(db, STAGE_NAME, selections, today)),
        ]
    })

def _select(stage: str, label: str, options: dict) -> dict:
    return {
        "name": stage,
        "label": label,
        "placeholder": PLACEHOLDERS[stage],
        "options": options,
        "selected": "",
    }
