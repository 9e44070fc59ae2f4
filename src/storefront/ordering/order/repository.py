"""Repository for the Order aggregate."""

import time

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.ordering.status import OrderStatus
from storefront.utils.query import fetch_all, iterate


@storefront.repository(part_of=Order)
class OrderRepository:
    def everything(self) -> list[Order]:
        return fetch_all(self._dao.query)

    def for_customer(self, customer_id) -> list[Order]:
        """All orders of a customer, newest first."""
        return fetch_all(self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at"))

    def delivered_order_with_burger(self, customer_id, burger_id) -> Order | None:
        """The first delivered order of ``customer_id`` that contains ``burger_id``, if any."""
        delivered = self._dao.query.filter(
            customer_id=str(customer_id),
            status=OrderStatus.DELIVERED.value,
        )
        for order in iterate(delivered):
            if any(item.burger_id and str(item.burger_id) == str(burger_id) for item in order.items):
                return order
        return None

    def newest(self, limit: int) -> list[Order]:
        return self._dao.query.order_by("-created_at").limit(limit).all().items

    def count(self) -> int:
        return self._dao.query.all().total

    def next_order_number(self) -> str:
        """``BRG<epoch-ms><sequence>``; the sequence is the current order count + 1."""
        return f"BRG{int(time.time() * 1000)}{self.count() + 1}"
