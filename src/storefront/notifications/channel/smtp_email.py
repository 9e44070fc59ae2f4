"""SMTP email adapter built on the standard library's smtplib."""

import os
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid

from storefront.notifications.channel.email_port import (
    DeliveryResult,
    DeliveryStatus,
    EmailPort,
    OutgoingEmail,
)
from storefront.notifications.channel.fake_email import FakeEmailAdapter


class SmtpEmailAdapter(EmailPort):
    """Deliver mail through an SMTP server with STARTTLS and optional login."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        sender: str = "Burgerhub <noreply@burgerhub.local>",
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> "SmtpEmailAdapter":
        return cls(
            host=os.environ["SMTP_HOST"],
            port=int(os.getenv("SMTP_PORT", "587")),
            username=os.getenv("SMTP_USERNAME"),
            password=os.getenv("SMTP_PASSWORD"),
            sender=os.getenv("SMTP_SENDER", "Burgerhub <noreply@burgerhub.local>"),
        )

    def _build_message(self, email: OutgoingEmail) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = self.sender
        message["To"] = email.to
        message["Subject"] = email.subject
        message["Message-ID"] = make_msgid(domain="burgerhub.local")
        message.attach(MIMEText(email.body, "plain"))
        if email.html_body:
            message.attach(MIMEText(email.html_body, "html"))
        return message

    def send(self, email: OutgoingEmail) -> DeliveryResult:
        message = self._build_message(email)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            return DeliveryResult(DeliveryStatus.FAILED, error=str(exc))

        return DeliveryResult(DeliveryStatus.SENT, message_id=message["Message-ID"])


def email_adapter_from_env() -> EmailPort:
    """SMTP adapter when ``SMTP_HOST`` is set, the in-memory fake otherwise."""
    if os.getenv("SMTP_HOST"):
        return SmtpEmailAdapter.from_env()
    return FakeEmailAdapter()
