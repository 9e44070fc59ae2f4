"""Email channel — the outgoing message, its delivery outcome and the adapter port."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class DeliveryStatus(Enum):
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class OutgoingEmail:
    to: str
    subject: str
    body: str
    html_body: str | None = None


@dataclass(frozen=True)
class DeliveryResult:
    status: DeliveryStatus
    message_id: str | None = None
    error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.status is DeliveryStatus.SENT


class EmailPort(ABC):
    """Outbound email adapter."""

    @abstractmethod
    def send(self, email: OutgoingEmail) -> DeliveryResult:
        """Deliver one message.

        Transport problems are reported as a FAILED result rather than raised.
        """
        ...
