"""In-memory email adapter."""

from uuid import uuid4

from storefront.notifications.channel.email_port import (
    DeliveryResult,
    DeliveryStatus,
    EmailPort,
    OutgoingEmail,
)


class FakeEmailAdapter(EmailPort):
    """Keeps delivered messages in ``outbox`` instead of sending them.

    Used in tests and whenever no SMTP server is configured. ``fail_with``
    makes every following delivery fail with the given reason.
    """

    def __init__(self):
        self.outbox: list[OutgoingEmail] = []
        self.failure: str | None = None

    def fail_with(self, reason: str = "Email delivery failed"):
        self.failure = reason

    def send(self, email: OutgoingEmail) -> DeliveryResult:
        if self.failure:
            return DeliveryResult(DeliveryStatus.FAILED, error=self.failure)

        self.outbox.append(email)
        return DeliveryResult(DeliveryStatus.SENT, message_id=f"email-{uuid4().hex[:12]}")

    def sent_to(self, address: str) -> list[OutgoingEmail]:
        return [email for email in self.outbox if email.to == address]
