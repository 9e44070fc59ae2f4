from storefront.catalogue.ingredient import repository  # noqa: F401
