"""Domain events for the Burger aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Burger")
class BurgerAdded:
    """A burger was added to the menu."""

    __version__ = 1

    burger_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Burger")
class BurgerPriceChanged:
    """The menu price of a burger changed. Existing orders keep their snapshot."""

    __version__ = 1

    burger_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)
    changed_at: DateTime(required=True)


@storefront.event(part_of="Burger")
class BurgerActivated:
    __version__ = 1

    burger_id: Identifier(required=True)
    activated_at: DateTime(required=True)


@storefront.event(part_of="Burger")
class BurgerDeactivated:
    __version__ = 1

    burger_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@storefront.event(part_of="Burger")
class BurgerRatingRecalculated:
    """Average rating and review count were recomputed from all reviews."""

    __version__ = 1

    burger_id: Identifier(required=True)
    rating: Float(required=True)
    review_count: Integer(required=True)
    recalculated_at: DateTime(required=True)
