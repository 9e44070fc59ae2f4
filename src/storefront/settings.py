"""Typed access to the ``[custom]`` table of ``domain.toml``.

Each accessor falls back to the built-in default when a key is absent so
that a bare configuration still yields the documented business rules.
"""

from protean.utils.globals import current_domain

from storefront.ordering.status import StatusPolicy, parse_status
from storefront.pricing.engine import PricingPolicy


def custom_settings() -> dict:
    return current_domain.config.get("custom", {}) or {}


def pricing_policy() -> PricingPolicy:
    custom = custom_settings()
    defaults = PricingPolicy()
    return PricingPolicy(
        custom_burger_base_price=float(custom.get("custom_burger_base_price", defaults.custom_burger_base_price)),
        free_delivery_threshold=float(custom.get("free_delivery_threshold", defaults.free_delivery_threshold)),
        delivery_fee=float(custom.get("delivery_fee", defaults.delivery_fee)),
        currency=custom.get("currency", defaults.currency),
    )


def status_policy() -> StatusPolicy:
    custom = custom_settings()
    defaults = StatusPolicy()
    return StatusPolicy(
        allow_skip_ahead=bool(custom.get("allow_status_skip_ahead", defaults.allow_skip_ahead)),
        customer_cancel_cutoff=parse_status(custom.get("customer_cancel_cutoff", defaults.customer_cancel_cutoff)),
    )


def delivery_eta_minutes() -> int:
    return int(custom_settings().get("delivery_eta_minutes", 45))


def sales_window_days() -> int:
    return int(custom_settings().get("sales_window_days", 30))
