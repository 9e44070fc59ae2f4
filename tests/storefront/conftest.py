import json

import pytest


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Catalog and account fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def ingredients():
    """Builder ingredients keyed by lower-case name.

    lettuce sits below its minimum stock and patty is out of stock.
    """
    from protean import current_domain

    from storefront.catalogue.ingredient.management import AddIngredient

    rows = [
        ("Bun", "bread", 0.0, 100),
        ("Cheese", "cheese", 20.0, 50),
        ("Lettuce", "vegetable", 10.0, 5),
        ("Patty", "protein", 40.0, 0),
    ]
    return {
        name.lower(): current_domain.process(
            AddIngredient(name=name, category=category, price=price, stock=stock),
            asynchronous=False,
        )
        for name, category, price, stock in rows
    }


@pytest.fixture
def burgers(ingredients):
    """Menu burgers keyed by a short handle."""
    from protean import current_domain

    from storefront.catalogue.burger.management import AddBurger

    rows = {
        "classic": ("Classic Veg", "Crunchy lettuce and cheese", 150.0, "veg", ["bun", "cheese", "lettuce"]),
        "paneer": ("Paneer Tikka", "Smoky paneer stack", 200.0, "veg", ["bun", "cheese"]),
        "chicken": ("Chicken Zinger", "Fried chicken and mayo", 250.0, "non-veg", ["bun", "patty"]),
        "vegan": ("Vegan Delight", "Lettuce on a soft bun", 120.0, "vegan", ["bun", "lettuce"]),
    }
    return {
        handle: current_domain.process(
            AddBurger(
                name=name,
                description=description,
                price=price,
                category=category,
                ingredient_ids=json.dumps([ingredients[i] for i in parts]),
            ),
            asynchronous=False,
        )
        for handle, (name, description, price, category, parts) in rows.items()
    }


@pytest.fixture
def customer_id():
    from protean import current_domain

    from storefront.identity.user.registration import RegisterUser

    return current_domain.process(
        RegisterUser(name="Asha Rao", email="asha@example.com", phone="9876543210", address="Indiranagar"),
        asynchronous=False,
    )


@pytest.fixture
def other_customer_id():
    from protean import current_domain

    from storefront.identity.user.registration import RegisterUser

    return current_domain.process(
        RegisterUser(name="Ravi Kumar", email="ravi@example.com", phone="8123456789"),
        asynchronous=False,
    )


@pytest.fixture
def admin_id():
    from protean import current_domain

    from storefront.identity.user.registration import RegisterUser

    return current_domain.process(
        RegisterUser(name="Store Admin", email="admin@example.com", phone="7000000000", role="admin"),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Order helpers
# ---------------------------------------------------------------------------
ADDRESS = {"street": "12 MG Road", "city": "Bengaluru", "state": "Karnataka", "pincode": "560001"}


@pytest.fixture
def place_order():
    """Return a function placing an order for a customer and returning its id."""
    from protean import current_domain

    from storefront.ordering.order.placement import PlaceOrder

    def _place(customer_id, items, phone="9876543210", payment_method="cod"):
        return current_domain.process(
            PlaceOrder(
                customer_id=customer_id,
                items=json.dumps(items),
                phone=phone,
                payment_method=payment_method,
                **ADDRESS,
            ),
            asynchronous=False,
        )

    return _place


@pytest.fixture
def set_status():
    """Return a function moving an order to a status as an administrator."""
    from protean import current_domain

    from storefront.ordering.order.lifecycle import UpdateOrderStatus

    def _set(order_id, status, actor_role="admin"):
        return current_domain.process(
            UpdateOrderStatus(order_id=order_id, status=status, actor_role=actor_role),
            asynchronous=False,
        )

    return _set


@pytest.fixture
def delivered_order(place_order, set_status):
    """Return a function placing an order and walking it to delivered."""

    def _delivered(customer_id, items):
        order_id = place_order(customer_id, items)
        set_status(order_id, "delivered")
        return order_id

    return _delivered
