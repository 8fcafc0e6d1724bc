"""
JSON endpoints behind the cascading dropdowns and the live admin filter
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import ListingFilter, get_listing_filter, get_today
from app.core.db import get_db
from app.forms.registration_form import STAGE_DATE, STAGE_NAME, options_for
from app.schemas.event import EventDatesResponse, EventNamesResponse
from app.schemas.registration import FilteredRegistrations, RegistrationListItem
from app.services.event_service import EventService
from app.services.registration_service import RegistrationService
from app.utils.security import verify_admin_token
from app.utils.validators import parse_iso_date

router = APIRouter()

@router.get("/event-registration/ajax/get-event-dates", response_model=EventDatesResponse)
def get_event_dates(
    category: str = Query(""),
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """Open event dates for a category"""
    dates = options_for(db, STAGE_DATE, {"event_category": category}, today)
    return EventDatesResponse(dates=dates)

@router.get("/event-registration/ajax/get-event-names", response_model=EventNamesResponse)
def get_event_names(
    category: str = Query(""),
    event_date: str = Query("", alias="date"),
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """Open events for a category and date"""
    names = options_for(db, STAGE_NAME, {"event_category": category, "event_date": event_date}, today)
    return EventNamesResponse(events={int(event_id): name for event_id, name in names.items()})

@router.get("/admin/event-registration/ajax/get-event-names", response_model=EventNamesResponse)
def get_admin_event_names(
    event_date: str = Query("", alias="date"),
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Every event on a date, open or not"""
    parsed_date = parse_iso_date(event_date)
    events = EventService.get_event_names_by_date(db, parsed_date) if parsed_date else {}
    return EventNamesResponse(events=events)

@router.get("/admin/event-registration/ajax/filter-registrations", response_model=FilteredRegistrations)
def filter_registrations(
    listing_filter: ListingFilter = Depends(get_listing_filter),
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Registrations for the live admin table"""
    rows = RegistrationService.filter_registrations(db, listing_filter.event_date, listing_filter.event_id)
    items = [RegistrationListItem.from_row(row) for row in rows]
    return FilteredRegistrations(registrations=items, count=len(items))
