"""
Registration schemas
"""

from datetime import date, datetime
from typing import List
from pydantic import BaseModel

SUBMISSION_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

class RegistrationCreate(BaseModel):
    """Validated data for creating a registration"""
    full_name: str
    email: str
    college_name: str
    department: str
    event_category: str
    event_config_id: int

class RegistrationRow(BaseModel):
    """A registration joined with its event's name and date"""
    id: int
    full_name: str
    email: str
    college_name: str
    department: str
    event_category: str
    event_config_id: int
    created: datetime
    event_name: str
    event_date: date

    class Config:
        from_attributes = True

    @property
    def submission_date(self) -> str:
        return self.created.strftime(SUBMISSION_DATE_FORMAT)

class RegistrationListItem(BaseModel):
    """Row shape used by the live admin table"""
    full_name: str
    email: str
    event_date: str
    college_name: str
    department: str
    submission_date: str

    @classmethod
    def from_row(cls, row: RegistrationRow) -> "RegistrationListItem":
        return cls(
            full_name=row.full_name,
            email=row.email,
            event_date=row.event_date.isoformat(),
            college_name=row.college_name,
            department=row.department,
            submission_date=row.submission_date,
        )

class FilteredRegistrations(BaseModel):
    """Response of the live filter endpoint"""
    registrations: List[RegistrationListItem]
    count: int
