from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from django.db import transaction
from django.db.models import QuerySet

from apps.catalog.services.inventory_service import InventoryService
from apps.customers.domain.errors import CustomerNotFoundError
from apps.customers.models import Customer

from ..domain.errors import OrderNotFoundError, OrderValidationError
from ..domain.state_machine import OrderStateMachine, OrderStatus
from ..models import Order, OrderItem

logger = logging.getLogger("orderdesk.orders")

_ADDRESS_LIMITS = {"street": 150, "city": 100, "postal_code": 10}


@dataclass(frozen=True)
class OrderLine:
    product_id: int
    quantity: int


def _validated_address(*, street: str, city: str, postal_code: str) -> dict[str, str]:
    address = {"street": street, "city": city, "postal_code": postal_code}
    cleaned = {}
    for field, raw in address.items():
        value = (raw or "").strip()
        if not value:
            raise OrderValidationError(f"Shipping {field} is required.", field=field)
        if len(value) > _ADDRESS_LIMITS[field]:
            raise OrderValidationError(
                f"Shipping {field} must be {_ADDRESS_LIMITS[field]} characters or fewer.", field=field
            )
        cleaned[field] = value
    return cleaned


class OrderService:
    @staticmethod
    def _orders() -> QuerySet[Order]:
        return Order.objects.select_related("customer").prefetch_related("items__product")

    @staticmethod
    @transaction.atomic
    def create_order(
        *,
        customer_id: int,
        items: Sequence[OrderLine],
        street: str,
        city: str,
        postal_code: str,
    ) -> Order:
        """
        Place an order for ``customer_id``.

        Each line is checked against current stock, stock is decremented, and
        the product's current price is frozen on the line item. Lines are
        processed in the given order, so the first failing line is the one
        reported. Any error rolls back every decrement made so far.
        """
        customer = Customer.objects.filter(id=customer_id).first()
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        if not items:
            raise OrderValidationError("Cannot place an empty order.", field="items")
        address = _validated_address(street=street, city=city, postal_code=postal_code)

        order_items: list[OrderItem] = []
        for line in items:
            if line.quantity is None or line.quantity < 1:
                raise OrderValidationError("Quantity must be at least 1.", field="quantity")
            product = InventoryService.reserve(line.product_id, line.quantity)
            order_items.append(
                OrderItem(product=product, quantity=line.quantity, unit_price=product.price)
            )

        order = Order.objects.create(customer=customer, status=Order.STATUS_PENDING, **address)
        for item in order_items:
            item.order = order
        OrderItem.objects.bulk_create(order_items)

        order = OrderService._orders().get(id=order.id)
        logger.info(
            "order_created",
            extra={"order_id": order.id, "customer_id": customer.id, "total": str(order.total)},
        )
        return order

    @staticmethod
    def get_order(order_id: int) -> Order:
        order = OrderService._orders().filter(id=order_id).first()
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    @staticmethod
    def list_for_customer(customer_id: int) -> QuerySet[Order]:
        return OrderService._orders().filter(customer_id=customer_id)

    @staticmethod
    def list_by_status(status: str) -> QuerySet[Order]:
        try:
            status = OrderStatus((status or "").strip().upper())
        except ValueError as exc:
            raise OrderValidationError(f"Unknown order status: {status}", field="status") from exc
        return OrderService._orders().filter(status=status.value)

    @staticmethod
    def _transition(order_id: int, target: OrderStatus) -> Order:
        order = Order.objects.select_for_update().filter(id=order_id).first()
        if order is None:
            raise OrderNotFoundError(order_id)
        previous = order.status
        order.status = OrderStateMachine.ensure_transition(order.status, target).value
        order.save(update_fields=["status"])
        logger.info(
            "order_status_changed",
            extra={"order_id": order.id, "from_status": previous, "to_status": order.status},
        )
        return OrderService.get_order(order.id)

    @staticmethod
    @transaction.atomic
    def cancel_order(order_id: int) -> Order:
        # Stock is not restored on cancellation.
        return OrderService._transition(order_id, OrderStatus.CANCELLED)

    @staticmethod
    @transaction.atomic
    def mark_as_shipped(order_id: int) -> Order:
        return OrderService._transition(order_id, OrderStatus.SHIPPED)

    @staticmethod
    @transaction.atomic
    def mark_as_delivered(order_id: int) -> Order:
        return OrderService._transition(order_id, OrderStatus.DELIVERED)
