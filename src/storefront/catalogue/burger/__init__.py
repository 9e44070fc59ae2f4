from storefront.catalogue.burger import rating, repository  # noqa: F401
