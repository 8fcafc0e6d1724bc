"""
Error taxonomy for event registration
"""

from typing import Dict


class EventRegistrationError(Exception):
    """Base class for all event registration errors"""


class ValidationError(EventRegistrationError):
    """A user-correctable problem with a single form field"""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class DuplicateError(ValidationError):
    """The (email, event) pair is already registered"""

    def __init__(self, message: str = "You have already registered for this event with this email address."):
        super().__init__("email", message)


class FormValidationError(EventRegistrationError):
    """Carries every field error collected for one form submission"""

    def __init__(self, errors: Dict[str, ValidationError]):
        super().__init__("; ".join(f"{field}: {error.message}" for field, error in errors.items()))
        self.errors = errors

    @property
    def messages(self) -> Dict[str, str]:
        return {field: error.message for field, error in self.errors.items()}


class StorageError(EventRegistrationError):
    """Insert or query failure in the relational store"""


class NotificationError(EventRegistrationError):
    """Outgoing email could not be sent"""
