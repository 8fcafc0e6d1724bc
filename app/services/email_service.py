"""
Email notifications for new registrations
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from app.core.config import settings
from app.core.errors import NotificationError
from app.schemas.settings import NotificationSettings

logger = logging.getLogger(__name__)

MAIL_TEMPLATE_DIR = Path(__file__).resolve().parents[2] / "templates" / "mail"

SUBJECTS = {
    "registration_confirmation": "Registration confirmation: {event_name}",
    "admin_notification": "New registration for {event_name}",
}


class MailTransport:
    """Renders a mail template and hands it to the SMTP server"""

    def __init__(self, template_dir: Path = MAIL_TEMPLATE_DIR):
        self.env = Environment(loader=FileSystemLoader(str(template_dir)), autoescape=False)

    def render(self, template_id: str, langcode: str, params: Dict[str, Any]) -> tuple[str, str]:
        """Return (subject, body); a ``<id>.<langcode>.txt`` template wins over ``<id>.txt``"""
        if template_id not in SUBJECTS:
            raise NotificationError(f"Unknown mail template: {template_id}")
        try:
            template = self.env.get_template(f"{template_id}.{langcode}.txt")
        except TemplateNotFound:
            template = self.env.get_template(f"{template_id}.txt")
        subject = SUBJECTS[template_id].format(**params)
        return subject, template.render(**params)

    def send(self, template_id: str, to: str, langcode: str, params: Dict[str, Any]) -> bool:
        subject, body = self.render(template_id, langcode, params)

        message = MIMEMultipart()
        message["From"] = settings.MAIL_FROM
        message["To"] = to
        message["Subject"] = subject
        message.attach(MIMEText(body, "plain", "utf-8"))

        try:
            with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as server:
                if settings.SMTP_USE_TLS:
                    server.starttls()
                if settings.SMTP_USERNAME and settings.SMTP_PASSWORD:
                    server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
                server.sendmail(settings.MAIL_FROM, [to], message.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(str(e)) from e
        return True


class EmailService:
    """Sends the user confirmation and the admin notification.

    Both methods report success as a boolean and never raise: a failed
    email is logged and must not affect the registration that triggered it.
    """

    def __init__(self, transport: MailTransport, langcode: str = settings.DEFAULT_LANGCODE):
        self.transport = transport
        self.langcode = langcode

    def send_user_confirmation(self, to: str, params: Dict[str, Any]) -> bool:
        try:
            result = self.transport.send("registration_confirmation", to, self.langcode, params)
        except (NotificationError, TemplateNotFound) as e:
            logger.error("Error sending confirmation email: %s", e)
            return False

        if result is not True:
            logger.error("Failed to send confirmation email to %s", to)
            return False

        logger.info("Confirmation email sent to %s", to)
        return True

    def send_admin_notification(self, notification_settings: NotificationSettings, params: Dict[str, Any]) -> bool:
        if not notification_settings.enable_admin_notifications:
            return False

        admin_email = notification_settings.admin_email
        if not admin_email:
            logger.warning("Admin notification email is not configured.")
            return False

        try:
            result = self.transport.send("admin_notification", admin_email, self.langcode, params)
        except (NotificationError, TemplateNotFound) as e:
            logger.error("Error sending admin notification email: %s", e)
            return False

        if result is not True:
            logger.error("Failed to send admin notification email to %s", admin_email)
            return False

        logger.info("Admin notification email sent to %s", admin_email)
        return True
