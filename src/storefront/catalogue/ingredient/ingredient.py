"""Ingredient aggregate — builder ingredients with price and stock."""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String

from storefront.catalogue.ingredient.events import IngredientAdded, IngredientStockUpdated
from storefront.domain import storefront


class IngredientCategory(Enum):
    PROTEIN = "protein"
    VEGETABLE = "vegetable"
    SAUCE = "sauce"
    CHEESE = "cheese"
    BREAD = "bread"


@storefront.aggregate
class Ingredient:
    """An ingredient customers can stack into a custom burger.

    Stock is a plain counter maintained by administrators; placing an order
    does not consume it.
    """

    name: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    category: String(choices=IngredientCategory, required=True)
    stock: Integer(default=0, min_value=0)
    min_stock: Integer(default=10, min_value=0)
    is_veg: Boolean(default=True)
    is_vegan: Boolean(default=False)
    image: String(max_length=500)
    created_at: DateTime()
    updated_at: DateTime()

    @property
    def is_low_stock(self) -> bool:
        return (self.stock or 0) <= (self.min_stock or 0)

    @classmethod
    def add(cls, name, price, category, stock=0, min_stock=10, is_veg=True, is_vegan=False, image=None):
        now = datetime.now(UTC)
        ingredient = cls(
            name=name.strip() if name else name,
            price=price,
            category=category,
            stock=stock,
            min_stock=min_stock,
            is_veg=is_veg,
            is_vegan=is_vegan,
            image=image,
            created_at=now,
            updated_at=now,
        )
        ingredient.raise_(
            IngredientAdded(
                ingredient_id=ingredient.id,
                name=ingredient.name,
                category=ingredient.category,
                price=ingredient.price,
                stock=ingredient.stock,
                added_at=now,
            )
        )
        return ingredient

    def update_stock(self, new_stock):
        if new_stock is None or new_stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        previous = self.stock
        now = datetime.now(UTC)
        self.stock = new_stock
        self.updated_at = now

        self.raise_(
            IngredientStockUpdated(
                ingredient_id=self.id,
                previous_stock=previous,
                new_stock=new_stock,
                is_low_stock=self.is_low_stock,
                updated_at=now,
            )
        )
