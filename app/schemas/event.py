"""
Event configuration schemas
"""

from datetime import date, datetime
from typing import Dict
from pydantic import BaseModel

class EventConfigCreate(BaseModel):
    """Validated data for creating an event configuration"""
    event_name: str
    event_category: str
    event_date: date
    registration_start_date: date
    registration_end_date: date

class EventConfigResponse(BaseModel):
    """Event configuration as listed to admins"""
    id: int
    event_name: str
    event_category: str
    event_date: date
    registration_start_date: date
    registration_end_date: date
    created: datetime

    class Config:
        from_attributes = True

class EventDatesResponse(BaseModel):
    """Distinct event dates keyed by ISO date"""
    dates: Dict[str, str]

class EventNamesResponse(BaseModel):
    """Event names keyed by event id"""
    events: Dict[int, str]
