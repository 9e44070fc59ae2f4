"""Storefront bounded context — burger menu, ordering, reviews and back-office.

A single Protean domain hosts the catalog (burgers and ingredients), the
order lifecycle, reviews with rating aggregation, and customer identity.
Aggregates are CQRS (not event sourced): every admin rollup is a plain
repository query recomputed on demand.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
