from storefront.ordering.order import repository  # noqa: F401
