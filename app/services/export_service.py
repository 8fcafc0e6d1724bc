"""
CSV export of registrations
"""

from datetime import datetime
from typing import List

import pandas as pd

from app.schemas.registration import RegistrationRow

class ExportService:
    """Service for exporting registrations"""

    CSV_COLUMNS = [
        'Full Name',
        'Email',
        'College Name',
        'Department',
        'Event Category',
        'Event Name',
        'Event Date',
        'Submission Date',
    ]

    # The on-page table is a narrower projection than the CSV
    TABLE_COLUMNS = [
        'Name',
        'Email',
        'Event Date',
        'College Name',
        'Department',
        'Submission Date',
    ]

    @staticmethod
    def build_csv(registrations: List[RegistrationRow]) -> str:
        """Render registrations as CSV text with a fixed header"""
        data = []
        for registration in registrations:
            data.append({
                'Full Name': registration.full_name,
                'Email': registration.email,
                'College Name': registration.college_name,
                'Department': registration.department,
                'Event Category': registration.event_category,
                'Event Name': registration.event_name,
                'Event Date': registration.event_date.isoformat(),
                'Submission Date': registration.submission_date,
            })

        df = pd.DataFrame(data, columns=ExportService.CSV_COLUMNS)
        return df.to_csv(index=False)

    @staticmethod
    def table_rows(registrations: List[RegistrationRow]) -> List[List[str]]:
        """Cells for the admin listing table, in TABLE_COLUMNS order"""
        return [
            [
                registration.full_name,
                registration.email,
                registration.event_date.isoformat(),
                registration.college_name,
                registration.department,
                registration.submission_date,
            ]
            for registration in registrations
        ]

    @staticmethod
    def export_filename(now: datetime) -> str:
        return f"event_registrations_{now.strftime('%Y-%m-%d_%H-%M-%S')}.csv"
