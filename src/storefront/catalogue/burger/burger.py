"""Burger aggregate — a menu item with price, category and derived rating."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.catalogue.burger.events import (
    BurgerActivated,
    BurgerAdded,
    BurgerDeactivated,
    BurgerPriceChanged,
    BurgerRatingRecalculated,
)
from storefront.domain import storefront


class BurgerCategory(Enum):
    VEG = "veg"
    NON_VEG = "non-veg"
    VEGAN = "vegan"


@storefront.aggregate
class Burger:
    """A burger on the menu.

    ``rating`` and ``review_count`` are derived from the burger's reviews and
    are only written by the rating recomputation handler.
    """

    name: String(required=True, max_length=100)
    description: String(max_length=500)
    price: Float(required=True, min_value=0.0)
    category: String(choices=BurgerCategory, required=True)
    ingredient_ids: Text()  # JSON array of ingredient ids
    image: String(max_length=500)
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    review_count: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    preparation_time: Integer(default=15, min_value=1)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def ingredient_ids_must_be_a_json_list(self):
        if not self.ingredient_ids:
            return
        try:
            value = json.loads(self.ingredient_ids)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"ingredient_ids": ["Ingredient ids must be a JSON list"]}) from None
        if not isinstance(value, list):
            raise ValidationError({"ingredient_ids": ["Ingredient ids must be a JSON list"]})

    @property
    def ingredient_id_list(self) -> list[str]:
        return json.loads(self.ingredient_ids) if self.ingredient_ids else []

    @classmethod
    def add(
        cls,
        name,
        price,
        category,
        description=None,
        ingredient_ids=None,
        image=None,
        preparation_time=15,
    ):
        now = datetime.now(UTC)
        unique_ids = list(dict.fromkeys(str(i) for i in ingredient_ids or []))
        burger = cls(
            name=name.strip() if name else name,
            description=description,
            price=price,
            category=category,
            ingredient_ids=json.dumps(unique_ids),
            image=image,
            preparation_time=preparation_time,
            created_at=now,
            updated_at=now,
        )
        burger.raise_(
            BurgerAdded(
                burger_id=burger.id,
                name=burger.name,
                category=burger.category,
                price=burger.price,
                added_at=now,
            )
        )
        return burger

    def change_price(self, new_price):
        if new_price is None or new_price < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})

        previous = self.price
        now = datetime.now(UTC)
        self.price = new_price
        self.updated_at = now

        self.raise_(
            BurgerPriceChanged(
                burger_id=self.id,
                previous_price=previous,
                new_price=new_price,
                changed_at=now,
            )
        )

    def activate(self):
        if self.is_active:
            return
        now = datetime.now(UTC)
        self.is_active = True
        self.updated_at = now
        self.raise_(BurgerActivated(burger_id=self.id, activated_at=now))

    def deactivate(self):
        if not self.is_active:
            return
        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(BurgerDeactivated(burger_id=self.id, deactivated_at=now))

    def record_rating(self, rating: float, review_count: int):
        now = datetime.now(UTC)
        self.rating = rating
        self.review_count = review_count
        self.updated_at = now

        self.raise_(
            BurgerRatingRecalculated(
                burger_id=self.id,
                rating=rating,
                review_count=review_count,
                recalculated_at=now,
            )
        )
