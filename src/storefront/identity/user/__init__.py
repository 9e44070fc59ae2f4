from storefront.identity.user import repository  # noqa: F401
