"""Pydantic request/response schemas for the storefront API.

These are the external contract, kept separate from Protean commands.
Range and format rules live in the domain, so most fields here are plain
types and the domain reports the violation.
"""

from typing import Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CartItemSchema(BaseModel):
    kind: Literal["burger", "custom"] | None = None
    burger_id: str | None = None
    name: str | None = None
    ingredient_ids: list[str] | None = None
    quantity: int = 1


class DeliveryAddressSchema(BaseModel):
    street: str
    city: str
    state: str
    pincode: str


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CartQuoteRequest(BaseModel):
    items: list[CartItemSchema]


class CustomBurgerQuoteRequest(BaseModel):
    ingredient_ids: list[str]


class PlaceOrderRequest(BaseModel):
    items: list[CartItemSchema]
    delivery_address: DeliveryAddressSchema
    phone: str
    payment_method: str = "cod"

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {"burger_id": "b-1", "quantity": 2},
                        {"name": "My Stack", "ingredient_ids": ["i-1", "i-2"], "quantity": 1},
                    ],
                    "delivery_address": {
                        "street": "12 MG Road",
                        "city": "Bengaluru",
                        "state": "Karnataka",
                        "pincode": "560001",
                    },
                    "phone": "9876543210",
                    "payment_method": "cod",
                }
            ]
        }
    }


class CancelOrderRequest(BaseModel):
    reason: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str
    reason: str | None = None


class SubmitReviewRequest(BaseModel):
    burger_id: str
    rating: int
    comment: str


class RegisterUserRequest(BaseModel):
    name: str
    email: str
    phone: str
    address: str | None = None


class RegisterAdminRequest(RegisterUserRequest):
    role: Literal["customer", "admin"] = "admin"


class AddIngredientRequest(BaseModel):
    name: str
    price: float
    category: str
    stock: int = 0
    min_stock: int = 10
    is_veg: bool = True
    is_vegan: bool = False
    image: str | None = None


class UpdateStockRequest(BaseModel):
    stock: int


class AddBurgerRequest(BaseModel):
    name: str
    description: str | None = None
    price: float
    category: str
    ingredient_ids: list[str] = Field(default_factory=list)
    image: str | None = None
    preparation_time: int = 15


class ChangePriceRequest(BaseModel):
    price: float


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class PricedLineResponse(BaseModel):
    kind: str
    title: str
    quantity: int
    unit_price: float
    line_total: float
    burger_id: str | None = None
    ingredient_ids: list[str] = Field(default_factory=list)
    ingredients_price: float = 0.0


class CartQuoteResponse(BaseModel):
    lines: list[PricedLineResponse]
    subtotal: float
    delivery_fee: float
    total_amount: float
    currency: str
    notes: list[str] = Field(default_factory=list)


class QuotedIngredient(BaseModel):
    ingredient_id: str
    name: str
    price: float
    category: str | None = None


class CustomBurgerQuoteResponse(BaseModel):
    base_price: float
    ingredients_price: float
    total_price: float
    ingredients: list[QuotedIngredient]


class OrderPlacedResponse(BaseModel):
    order_id: str
    order_number: str
    total_amount: float


class ReviewIdResponse(BaseModel):
    review_id: str


class UserIdResponse(BaseModel):
    user_id: str


class IdResponse(BaseModel):
    id: str


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str


class StockResponse(BaseModel):
    ingredient_id: str
    stock: int


class StatusResponse(BaseModel):
    status: str = "ok"
