"""
Tests for email notifications
"""

import smtplib

import pytest

from app.core.errors import NotificationError
from app.schemas.settings import NotificationSettings
from app.services import email_service
from app.services.email_service import EmailService, MailTransport

PARAMS = {
    "full_name": "Jane Doe",
    "email": "jane@example.com",
    "college_name": "MIT",
    "department": "CS",
    "event_name": "Hack Day",
    "event_date": "2024-07-01",
    "event_category": "Hackathon",
}

class RecordingTransport:
    def __init__(self, result=True, error=None):
        self.calls = []
        self.result = result
        self.error = error

    def send(self, template_id, to, langcode, params):
        self.calls.append((template_id, to, langcode))
        if self.error:
            raise self.error
        return self.result

def test_render_confirmation():
    subject, body = MailTransport().render("registration_confirmation", "en", PARAMS)
    assert subject == "Registration confirmation: Hack Day"
    assert "Dear Jane Doe" in body
    assert "2024-07-01" in body

def test_render_admin_notification():
    subject, body = MailTransport().render("admin_notification", "en", PARAMS)
    assert subject == "New registration for Hack Day"
    assert "jane@example.com" in body

def test_render_unknown_template():
    with pytest.raises(NotificationError):
        MailTransport().render("password_reset", "en", PARAMS)

def test_send_wraps_smtp_errors(monkeypatch):
    class BrokenSMTP:
        def __init__(self, *args, **kwargs):
            raise smtplib.SMTPConnectError(421, "unavailable")

    monkeypatch.setattr(email_service.smtplib, "SMTP", BrokenSMTP)
    with pytest.raises(NotificationError):
        MailTransport().send("registration_confirmation", "jane@example.com", "en", PARAMS)

def test_send_user_confirmation():
    transport = RecordingTransport()
    assert EmailService(transport, langcode="en").send_user_confirmation("jane@example.com", PARAMS) is True
    assert transport.calls == [("registration_confirmation", "jane@example.com", "en")]

def test_send_user_confirmation_failure_is_swallowed():
    transport = RecordingTransport(error=NotificationError("connection refused"))
    assert EmailService(transport).send_user_confirmation("jane@example.com", PARAMS) is False

def test_send_user_confirmation_unsuccessful_result():
    transport = RecordingTransport(result=False)
    assert EmailService(transport).send_user_confirmation("jane@example.com", PARAMS) is False

def test_admin_notification_disabled():
    transport = RecordingTransport()
    settings = NotificationSettings(admin_email="admin@example.com", enable_admin_notifications=False)
    assert EmailService(transport).send_admin_notification(settings, PARAMS) is False
    assert transport.calls == []

def test_admin_notification_without_address():
    transport = RecordingTransport()
    settings = NotificationSettings(admin_email=None, enable_admin_notifications=True)
    assert EmailService(transport).send_admin_notification(settings, PARAMS) is False
    assert transport.calls == []

def test_admin_notification_sent():
    transport = RecordingTransport()
    settings = NotificationSettings(admin_email="admin@example.com", enable_admin_notifications=True)
    assert EmailService(transport).send_admin_notification(settings, PARAMS) is True
    assert transport.calls[0][:2] == ("admin_notification", "admin@example.com")

def test_admin_notification_failure_is_swallowed():
    transport = RecordingTransport(error=NotificationError("timeout"))
    settings = NotificationSettings(admin_email="admin@example.com", enable_admin_notifications=True)
    assert EmailService(transport).send_admin_notification(settings, PARAMS) is False
