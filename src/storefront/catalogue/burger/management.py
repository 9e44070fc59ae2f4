"""Menu management — admin commands for adding burgers, pricing and availability."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.burger.burger import Burger
from storefront.catalogue.ingredient.ingredient import Ingredient
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Burger")
class AddBurger:
    name: String(required=True, max_length=100)
    description: String(max_length=500)
    price: Float(required=True, min_value=0.0)
    category: String(required=True, max_length=20)
    ingredient_ids: Text()  # JSON array of ingredient ids
    image: String(max_length=500)
    preparation_time: Integer(default=15)


@storefront.command(part_of="Burger")
class ChangeBurgerPrice:
    burger_id: Identifier(required=True)
    price: Float(required=True)


@storefront.command(part_of="Burger")
class ActivateBurger:
    burger_id: Identifier(required=True)


@storefront.command(part_of="Burger")
class DeactivateBurger:
    burger_id: Identifier(required=True)


@storefront.command_handler(part_of=Burger)
class BurgerManagementHandler:
    @handle(AddBurger)
    def add_burger(self, command):
        ingredient_ids = json.loads(command.ingredient_ids) if command.ingredient_ids else []
        known = current_domain.repository_for(Ingredient).find_many(ingredient_ids)
        unknown = [i for i in ingredient_ids if str(i) not in known]
        if unknown:
            raise ValidationError({"ingredient_ids": [f"Unknown ingredient: {i}" for i in unknown]})

        burger = Burger.add(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            ingredient_ids=ingredient_ids,
            image=command.image,
            preparation_time=command.preparation_time,
        )
        current_domain.repository_for(Burger).add(burger)
        logger.info("burger_added", burger_id=str(burger.id), name=burger.name, price=burger.price)
        return str(burger.id)

    @handle(ChangeBurgerPrice)
    def change_price(self, command):
        repo = current_domain.repository_for(Burger)
        burger = repo.get(command.burger_id)
        burger.change_price(command.price)
        repo.add(burger)
        logger.info("burger_price_changed", burger_id=str(burger.id), price=burger.price)

    @handle(ActivateBurger)
    def activate(self, command):
        repo = current_domain.repository_for(Burger)
        burger = repo.get(command.burger_id)
        burger.activate()
        repo.add(burger)

    @handle(DeactivateBurger)
    def deactivate(self, command):
        repo = current_domain.repository_for(Burger)
        burger = repo.get(command.burger_id)
        burger.deactivate()
        repo.add(burger)
