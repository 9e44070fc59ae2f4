"""Demo menu: ingredients for the builder and a handful of burgers.

Loaded through the same commands the back office uses, so every seeded
record goes through domain validation.
"""

import json

from protean.utils.globals import current_domain

from storefront.catalogue.burger.burger import Burger
from storefront.catalogue.burger.management import AddBurger
from storefront.catalogue.ingredient.ingredient import Ingredient
from storefront.catalogue.ingredient.management import AddIngredient
from storefront.identity.user.registration import RegisterUser
from storefront.identity.user.user import User, UserRole

INGREDIENTS = [
    {"name": "Sesame Bun", "category": "bread", "price": 0.0, "stock": 200},
    {"name": "Whole Wheat Bun", "category": "bread", "price": 10.0, "stock": 120},
    {"name": "Aloo Tikki", "category": "protein", "price": 30.0, "stock": 80},
    {"name": "Paneer Slab", "category": "protein", "price": 45.0, "stock": 60},
    {"name": "Chicken Patty", "category": "protein", "price": 60.0, "stock": 70, "is_veg": False},
    {"name": "Cheddar", "category": "cheese", "price": 20.0, "stock": 90},
    {"name": "Lettuce", "category": "vegetable", "price": 10.0, "stock": 150, "is_vegan": True},
    {"name": "Tomato", "category": "vegetable", "price": 10.0, "stock": 150, "is_vegan": True},
    {"name": "Jalapeno", "category": "vegetable", "price": 15.0, "stock": 8, "is_vegan": True},
    {"name": "Peri Peri Mayo", "category": "sauce", "price": 15.0, "stock": 100},
    {"name": "Smoky BBQ", "category": "sauce", "price": 15.0, "stock": 100, "is_vegan": True},
]

BURGERS = [
    {
        "name": "Classic Aloo Tikki",
        "description": "Crispy potato patty, lettuce, tomato and mayo",
        "price": 129.0,
        "category": "veg",
        "ingredients": ["Sesame Bun", "Aloo Tikki", "Lettuce", "Tomato", "Peri Peri Mayo"],
    },
    {
        "name": "Paneer Royale",
        "description": "Grilled paneer with cheddar and smoky BBQ",
        "price": 189.0,
        "category": "veg",
        "ingredients": ["Whole Wheat Bun", "Paneer Slab", "Cheddar", "Smoky BBQ"],
    },
    {
        "name": "Firecracker Chicken",
        "description": "Chicken patty, jalapenos and peri peri mayo",
        "price": 219.0,
        "category": "non-veg",
        "ingredients": ["Sesame Bun", "Chicken Patty", "Jalapeno", "Peri Peri Mayo"],
    },
    {
        "name": "Garden Vegan",
        "description": "Lettuce, tomato and BBQ on a wheat bun",
        "price": 149.0,
        "category": "vegan",
        "ingredients": ["Whole Wheat Bun", "Lettuce", "Tomato", "Smoky BBQ"],
    },
]


def seed_menu() -> dict:
    """Add the demo ingredients and burgers that are not present yet."""
    repo = current_domain.repository_for(Ingredient)
    added = {"ingredients": 0, "burgers": 0}

    ids_by_name = {}
    for data in INGREDIENTS:
        existing = repo.find_by_name(data["name"])
        if existing is not None:
            ids_by_name[data["name"]] = str(existing.id)
            continue
        ids_by_name[data["name"]] = current_domain.process(AddIngredient(**data), asynchronous=False)
        added["ingredients"] += 1

    on_menu = {b.name.lower() for b in current_domain.repository_for(Burger).everything()}
    for data in BURGERS:
        if data["name"].lower() in on_menu:
            continue
        command = AddBurger(
            name=data["name"],
            description=data["description"],
            price=data["price"],
            category=data["category"],
            ingredient_ids=json.dumps([ids_by_name[name] for name in data["ingredients"]]),
        )
        current_domain.process(command, asynchronous=False)
        added["burgers"] += 1

    return added


def seed_admin(name: str, email: str, phone: str) -> tuple[str, bool]:
    """Create the first back-office account; returns (user_id, created)."""
    existing = current_domain.repository_for(User).find_by_email(email)
    if existing is not None:
        return str(existing.id), False

    command = RegisterUser(name=name, email=email, phone=phone, role=UserRole.ADMIN.value)
    return current_domain.process(command, asynchronous=False), True
