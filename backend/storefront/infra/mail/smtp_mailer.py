# storefront/infra/mail/smtp_mailer.py
from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from storefront.services._shared.errors import UpstreamFailureError
from storefront.services._shared.ports import Mailer

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SMTPMailer(Mailer):
    """
    SMTP transport for outbound HTML email.

    :param host: SMTP server host.
    :param port: SMTP server port.
    :param sender: ``From`` address.
    :param username: Optional login user.
    :param password: Optional login password.
    :param use_tls: Issue ``STARTTLS`` after connecting.
    :param timeout: Socket timeout in seconds.
    """

    host: str
    port: int
    sender: str
    username: str | None = None
    password: str | None = None
    use_tls: bool = True
    timeout: float = 10.0

    def send(self, to_address: str, subject: str, body_html: str) -> None:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to_address
        msg.attach(MIMEText(body_html, "html"))

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise UpstreamFailureError("Mail transport unavailable") from exc


class ConsoleMailer(Mailer):
    """Writes messages to the log instead of sending them (local development)."""

    def send(self, to_address: str, subject: str, body_html: str) -> None:
        log.info("mail.console to=%s subject=%s\n%s", to_address, subject, body_html)
