"""
Field validation helpers shared by the forms
"""

import re
from datetime import date
from typing import Dict, Optional

from email_validator import validate_email, EmailNotValidError

from app.core.errors import ValidationError

PERSON_NAME_PATTERN = re.compile(r"^[A-Za-z\s\-]+$")
ALPHANUMERIC_PATTERN = re.compile(r"^[A-Za-z0-9\s\-]+$")
MAX_LENGTH = 255

def is_valid_email(value: str) -> bool:
    """Syntax-only address check, no DNS lookups"""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True

def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse ``YYYY-MM-DD``; blank or malformed input gives None"""
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None

def parse_id(value: Optional[str]) -> Optional[int]:
    """Parse a positive integer id; anything else gives None"""
    if value is None:
        return None
    value = str(value).strip()
    # isdigit alone accepts superscripts and other non-ASCII digits
    if not (value.isascii() and value.isdigit()):
        return None
    parsed = int(value)
    return parsed if parsed > 0 else None

def add_error(errors: Dict[str, ValidationError], error: ValidationError) -> None:
    """Record an error unless the field already has one"""
    errors.setdefault(error.field, error)

def check_required(errors: Dict[str, ValidationError], field: str, label: str, value) -> bool:
    """Record a required-field error for blank values; True when a value is present"""
    if value is None or (isinstance(value, str) and not value.strip()):
        add_error(errors, ValidationError(field, f"{label} field is required."))
        return False
    return True

def check_max_length(errors: Dict[str, ValidationError], field: str, label: str, value: str) -> None:
    if value and len(value) > MAX_LENGTH:
        add_error(errors, ValidationError(
            field, f"{label} cannot be longer than {MAX_LENGTH} characters but is currently {len(value)} characters long."
        ))
