"""Outgoing email for account notifications and password reset codes."""

import logging
import smtplib
from email.message import EmailMessage
from html import escape

from config import MailSettings
from core.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)


class Mailer:
    """Sends single messages through SMTP."""

    def __init__(self, settings: MailSettings):
        self.settings = settings

    @property
    def configured(self) -> bool:
        return bool(self.settings.host)

    def send(self, to: str, subject: str, body: str) -> None:
        """Send one email.

        Args:
            to: Recipient address.
            subject: Subject line.
            body: Plain text body; an HTML alternative is derived from it.

        Raises:
            MailDeliveryError: If the SMTP exchange fails.
        """
        if not self.configured:
            logger.warning("SMTP_HOST not set, skipping email '%s' to %s", subject, to)
            return

        msg = EmailMessage()
        msg["From"] = self.settings.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(body)
        msg.add_alternative(f"<p>{escape(body)}</p>", subtype="html")

        try:
            if self.settings.use_ssl:
                with smtplib.SMTP_SSL(self.settings.host, self.settings.port) as server:
                    self._deliver(server, msg)
            else:
                with smtplib.SMTP(self.settings.host, self.settings.port) as server:
                    server.starttls()
                    self._deliver(server, msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Email send failed: %s", exc)
            raise MailDeliveryError() from exc

        logger.info("Sent email '%s' to %s", subject, to)

    def _deliver(self, server: smtplib.SMTP, msg: EmailMessage) -> None:
        if self.settings.user and self.settings.password:
            server.login(self.settings.user, self.settings.password)
        server.send_message(msg)
