"""Template registry — maps NotificationKind to template classes."""

from storefront.notifications.kind import NotificationKind
from storefront.notifications.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notifications.templates.welcome import WelcomeTemplate

TEMPLATE_REGISTRY: dict[NotificationKind, type] = {
    NotificationKind.WELCOME: WelcomeTemplate,
    NotificationKind.ORDER_CONFIRMATION: OrderConfirmationTemplate,
}


def get_template(kind: NotificationKind):
    """Look up a template class by notification kind."""
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for notification kind: {kind}")
    return template_cls
