"""Notifier — renders a template and hands it to the email channel.

Delivery is best-effort. Callers schedule ``notify`` after the response has
been sent, so a failure is logged and reported through the returned
DeliveryResult but never raised.
"""

import structlog

from storefront.notifications.channel.email_port import (
    DeliveryResult,
    DeliveryStatus,
    EmailPort,
    OutgoingEmail,
)
from storefront.notifications.kind import NotificationKind
from storefront.notifications.templates import get_template

logger = structlog.get_logger(__name__)


class Notifier:
    def __init__(self, email_port: EmailPort):
        self.email_port = email_port

    def notify(self, kind: NotificationKind, to: str | None, context: dict) -> DeliveryResult:
        if not to:
            logger.warning("notification_skipped", kind=kind.value, reason="no recipient")
            return DeliveryResult(DeliveryStatus.SKIPPED)

        try:
            content = get_template(kind).render(context)
            result = self.email_port.send(OutgoingEmail(to=to, subject=content["subject"], body=content["body"]))
        except Exception as exc:  # noqa: BLE001
            logger.exception("notification_failed", kind=kind.value, to=to)
            return DeliveryResult(DeliveryStatus.FAILED, error=str(exc))

        if result.delivered:
            logger.info("notification_sent", kind=kind.value, to=to, message_id=result.message_id)
        else:
            logger.warning("notification_failed", kind=kind.value, to=to, error=result.error)
        return result
