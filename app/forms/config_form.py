"""
Admin form for creating event configurations
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.errors import FormValidationError, ValidationError
from app.models import EventConfig, EVENT_CATEGORIES
from app.schemas.event import EventConfigCreate, EventConfigResponse
from app.services.event_service import EventService
from app.utils.validators import (
    ALPHANUMERIC_PATTERN,
    add_error,
    check_max_length,
    check_required,
    parse_iso_date,
)

SUCCESS_MESSAGE = "Event configuration has been saved successfully."
FAILURE_MESSAGE = "An error occurred while saving the event configuration."


class EventConfigFormValues(BaseModel):
    registration_start_date: str = ""
    registration_end_date: str = ""
    event_date: str = ""
    event_name: str = ""
    event_category: str = ""


class EventConfigFormView(BaseModel):
    values: EventConfigFormValues = EventConfigFormValues()
    errors: Dict[str, str] = {}
    category_options: Dict[str, str] = {}
    events: List[EventConfigResponse] = []
    status_message: Optional[str] = None
    error_message: Optional[str] = None


def build_form(
    db: Session,
    values: Optional[EventConfigFormValues] = None,
    errors: Optional[Dict[str, str]] = None,
    status_message: Optional[str] = None,
    error_message: Optional[str] = None,
) -> EventConfigFormView:
    """The existing-events table is read fresh on every render"""
    events = [EventConfigResponse.model_validate(event) for event in EventService.get_all_events(db)]
    return EventConfigFormView(
        values=values or EventConfigFormValues(),
        errors=errors or {},
        category_options={category: category for category in EVENT_CATEGORIES},
        events=events,
        status_message=status_message,
        error_message=error_message,
    )


def validate_event_config(values: EventConfigFormValues) -> Dict[str, ValidationError]:
    """Required fields first, then the window checks in order, then the name pattern.

    The event date is only compared with the registration start date.
    """
    errors: Dict[str, ValidationError] = {}

    date_labels = {
        "registration_start_date": "Event Registration Start Date",
        "registration_end_date": "Event Registration End Date",
        "event_date": "Event Date",
    }
    parsed = {}
    for field, label in date_labels.items():
        raw = getattr(values, field)
        if check_required(errors, field, label, raw):
            parsed[field] = parse_iso_date(raw)
            if parsed[field] is None:
                add_error(errors, ValidationError(field, f"{label} must be a valid date."))

    has_name = check_required(errors, "event_name", "Event Name", values.event_name)
    check_max_length(errors, "event_name", "Event Name", values.event_name)

    if check_required(errors, "event_category", "Category of the Event", values.event_category):
        if values.event_category not in EVENT_CATEGORIES:
            add_error(errors, ValidationError("event_category", "An illegal choice has been detected."))

    start = parsed.get("registration_start_date")
    end = parsed.get("registration_end_date")
    event_date = parsed.get("event_date")

    if start and end and end < start:
        add_error(errors, ValidationError(
            "registration_end_date", "Registration end date must be after or equal to the start date."
        ))

    if start and event_date and event_date < start:
        add_error(errors, ValidationError(
            "event_date", "Event date must be after or equal to the registration start date."
        ))

    if has_name and not ALPHANUMERIC_PATTERN.match(values.event_name):
        add_error(errors, ValidationError(
            "event_name", "Event name should only contain letters, numbers, spaces, and hyphens."
        ))

    return errors


def submit_event_config(db: Session, values: EventConfigFormValues, now: datetime) -> EventConfig:
    """Raises FormValidationError or StorageError"""
    errors = validate_event_config(values)
    if errors:
        raise FormValidationError(errors)

    data = EventConfigCreate(
        event_name=values.event_name,
        event_category=values.event_category,
        event_date=parse_iso_date(values.event_date),
        registration_start_date=parse_iso_date(values.registration_start_date),
        registration_end_date=parse_iso_date(values.registration_end_date),
    )
    return EventService.create_event(db, data, now)
