from storefront.reviews.review import repository  # noqa: F401
