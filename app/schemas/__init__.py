"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .registration import *
from .settings import *

__all__ = [
    "ErrorResponse",
    "EventConfigCreate",
    "EventConfigResponse",
    "EventDatesResponse",
    "EventNamesResponse",
    "RegistrationCreate",
    "RegistrationRow",
    "RegistrationListItem",
    "FilteredRegistrations",
    "NotificationSettings",
    "SUBMISSION_DATE_FORMAT",
]
