"""
Public event registration form.

The form walks through category -> event date -> event name. Each dropdown's
options depend on the selections above it, and only events whose
registration window contains today are offered. ``options_for`` is the single
place those option lists are computed; the full page render, the fragment
endpoints and the JSON endpoints all go through it.
"""

import logging
from datetime import date, datetime
from typing import Dict, Mapping, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.errors import FormValidationError, DuplicateError, ValidationError
from app.models import Registration
from app.schemas.registration import RegistrationCreate
from app.schemas.settings import NotificationSettings
from app.services.email_service import EmailService
from app.services.event_service import EventService
from app.services.registration_service import RegistrationService
from app.utils.validators import (
    ALPHANUMERIC_PATTERN,
    PERSON_NAME_PATTERN,
    add_error,
    check_max_length,
    check_required,
    is_valid_email,
    parse_id,
    parse_iso_date,
)

logger = logging.getLogger(__name__)

STAGE_CATEGORY = "event_category"
STAGE_DATE = "event_date"
STAGE_NAME = "event_name"

PLACEHOLDERS = {
    STAGE_CATEGORY: "- Select Category -",
    STAGE_DATE: "- Select Event Date -",
    STAGE_NAME: "- Select Event Name -",
}

NO_EVENTS_MESSAGE = "No events are currently open for registration. Please check back later."
SUCCESS_MESSAGE = "Thank you for registering! A confirmation email has been sent to {email}."
FAILURE_MESSAGE = "An error occurred while processing your registration. Please try again."
EVENT_CLOSED_MESSAGE = "The selected event is no longer open for registration."


class RegistrationFormValues(BaseModel):
    """Raw submitted values; ``event_name`` holds the selected event id"""
    full_name: str = ""
    email: str = ""
    college_name: str = ""
    department: str = ""
    event_category: str = ""
    event_date: str = ""
    event_name: str = ""


class RegistrationFormView(BaseModel):
    """Everything the template needs to render the form"""
    is_open: bool
    notice: Optional[str] = None
    values: RegistrationFormValues = RegistrationFormValues()
    errors: Dict[str, str] = {}
    category_options: Dict[str, str] = {}
    date_options: Dict[str, str] = {}
    name_options: Dict[str, str] = {}
    status_message: Optional[str] = None
    error_message: Optional[str] = None


def options_for(db: Session, stage: str, selections: Mapping[str, str], today: date) -> Dict[str, str]:
    """Options for one dropdown given the upstream selections.

    Keys are the submitted values, labels the displayed text. A missing or
    unusable upstream selection yields no options.
    """
    if stage == STAGE_CATEGORY:
        return EventService.get_available_categories(db, today)

    category = (selections.get(STAGE_CATEGORY) or "").strip()
    if not category:
        return {}

    if stage == STAGE_DATE:
        return EventService.get_event_dates_by_category(db, category, today)

    if stage == STAGE_NAME:
        event_date = parse_iso_date(selections.get(STAGE_DATE))
        if event_date is None:
            return {}
        names = EventService.get_event_names_by_category_and_date(db, category, event_date, today)
        return {str(event_id): name for event_id, name in names.items()}

    raise ValueError(f"Unknown form stage: {stage}")


def build_form(
    db: Session,
    today: date,
    values: Optional[RegistrationFormValues] = None,
    errors: Optional[Dict[str, str]] = None,
    status_message: Optional[str] = None,
    error_message: Optional[str] = None,
) -> RegistrationFormView:
    """Build the view model, resetting any downstream selection the new options no longer contain"""
    category_options = options_for(db, STAGE_CATEGORY, {}, today)
    if not category_options:
        return RegistrationFormView(is_open=False, notice=NO_EVENTS_MESSAGE, status_message=status_message)

    values = (values or RegistrationFormValues()).model_copy()
    if values.event_category not in category_options:
        values.event_category = ""

    date_options = options_for(db, STAGE_DATE, values.model_dump(), today)
    if values.event_date not in date_options:
        values.event_date = ""

    name_options = options_for(db, STAGE_NAME, values.model_dump(), today)
    if values.event_name not in name_options:
        values.event_name = ""

    return RegistrationFormView(
        is_open=True,
        values=values,
        errors=errors or {},
        category_options=category_options,
        date_options=date_options,
        name_options=name_options,
        status_message=status_message,
        error_message=error_message,
    )


def validate_registration(db: Session, values: RegistrationFormValues, today: date) -> Dict[str, ValidationError]:
    """Collect every field error; nothing is written"""
    errors: Dict[str, ValidationError] = {}

    has_name = check_required(errors, "full_name", "Full Name", values.full_name)
    has_email = check_required(errors, "email", "Email Address", values.email)
    has_college = check_required(errors, "college_name", "College Name", values.college_name)
    has_department = check_required(errors, "department", "Department", values.department)
    check_required(errors, "event_category", "Category of the Event", values.event_category)
    check_required(errors, "event_date", "Event Date", values.event_date)
    has_event = check_required(errors, "event_name", "Event Name", values.event_name)

    check_max_length(errors, "full_name", "Full Name", values.full_name)
    check_max_length(errors, "email", "Email Address", values.email)
    check_max_length(errors, "college_name", "College Name", values.college_name)
    check_max_length(errors, "department", "Department", values.department)

    if has_name and not PERSON_NAME_PATTERN.match(values.full_name):
        add_error(errors, ValidationError("full_name", "Full name should only contain letters, spaces, and hyphens."))

    if has_email and not is_valid_email(values.email):
        add_error(errors, ValidationError("email", "Please enter a valid email address."))

    if has_college and not ALPHANUMERIC_PATTERN.match(values.college_name):
        add_error(errors, ValidationError(
            "college_name", "College name should only contain letters, numbers, spaces, and hyphens."
        ))

    if has_department and not ALPHANUMERIC_PATTERN.match(values.department):
        add_error(errors, ValidationError(
            "department", "Department should only contain letters, numbers, spaces, and hyphens."
        ))

    event_id = parse_id(values.event_name) if has_event else None

    if has_email and event_id is not None:
        if RegistrationService.is_duplicate_registration(db, values.email, event_id):
            add_error(errors, DuplicateError())

    if has_event:
        event = EventService.get_event_by_id(db, event_id) if event_id is not None else None
        if event is None or not EventService.is_event_open_for_registration(event, today):
            add_error(errors, ValidationError("event_name", EVENT_CLOSED_MESSAGE))

    return errors


def submit_registration(
    db: Session,
    values: RegistrationFormValues,
    now: datetime,
    email_service: EmailService,
    notification_settings: NotificationSettings,
) -> Registration:
    """Validate, store, then notify.

    Raises FormValidationError (possibly holding a DuplicateError) or
    StorageError. Email failures are logged by the email service only.
    """
    errors = validate_registration(db, values, now.date())
    if errors:
        raise FormValidationError(errors)

    event = EventService.get_event_by_id(db, parse_id(values.event_name))

    data = RegistrationCreate(
        full_name=values.full_name,
        email=values.email,
        college_name=values.college_name,
        department=values.department,
        event_category=values.event_category,
        event_config_id=event.id,
    )
    try:
        registration = RegistrationService.create_registration(db, data, now)
    except DuplicateError as e:
        raise FormValidationError({e.field: e}) from e

    email_params = {
        "full_name": data.full_name,
        "email": data.email,
        "college_name": data.college_name,
        "department": data.department,
        "event_name": event.event_name,
        "event_date": event.event_date.isoformat(),
        "event_category": data.event_category,
    }
    email_service.send_user_confirmation(data.email, email_params)
    email_service.send_admin_notification(notification_settings, email_params)

    logger.info("Registration %s created for event %s", registration.id, event.id)
    return registration
