"""Domain events for the Ingredient aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Ingredient")
class IngredientAdded:
    """A new ingredient became available to the burger builder."""

    __version__ = 1

    ingredient_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Ingredient")
class IngredientStockUpdated:
    """An administrator set a new stock level for an ingredient."""

    __version__ = 1

    ingredient_id: Identifier(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    is_low_stock: Boolean(required=True)
    updated_at: DateTime(required=True)
