"""Ingredient management — admin commands for adding ingredients and setting stock."""

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.ingredient.ingredient import Ingredient
from storefront.domain import storefront
from storefront.shared.errors import ConflictError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Ingredient")
class AddIngredient:
    name: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    category: String(required=True, max_length=20)
    stock: Integer(default=0)
    min_stock: Integer(default=10)
    is_veg: Boolean(default=True)
    is_vegan: Boolean(default=False)
    image: String(max_length=500)


@storefront.command(part_of="Ingredient")
class UpdateIngredientStock:
    ingredient_id: Identifier(required=True)
    stock: Integer(required=True)


@storefront.command_handler(part_of=Ingredient)
class IngredientManagementHandler:
    @handle(AddIngredient)
    def add_ingredient(self, command):
        repo = current_domain.repository_for(Ingredient)
        if repo.find_by_name(command.name) is not None:
            raise ConflictError({"name": [f"Ingredient {command.name!r} already exists"]})

        ingredient = Ingredient.add(
            name=command.name,
            price=command.price,
            category=command.category,
            stock=command.stock,
            min_stock=command.min_stock,
            is_veg=command.is_veg,
            is_vegan=command.is_vegan,
            image=command.image,
        )
        repo.add(ingredient)
        logger.info("ingredient_added", ingredient_id=str(ingredient.id), name=ingredient.name)
        return str(ingredient.id)

    @handle(UpdateIngredientStock)
    def update_stock(self, command):
        repo = current_domain.repository_for(Ingredient)
        ingredient = repo.get(command.ingredient_id)
        ingredient.update_stock(command.stock)
        repo.add(ingredient)
        logger.info(
            "ingredient_stock_updated",
            ingredient_id=str(ingredient.id),
            stock=ingredient.stock,
            low_stock=ingredient.is_low_stock,
        )
        return ingredient.stock
