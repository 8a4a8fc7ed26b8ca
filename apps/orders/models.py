from __future__ import annotations

from decimal import Decimal

from django.db import models

from .domain.state_machine import OrderStatus


class Order(models.Model):
    STATUS_PENDING = OrderStatus.PENDING.value
    STATUS_SHIPPED = OrderStatus.SHIPPED.value
    STATUS_DELIVERED = OrderStatus.DELIVERED.value
    STATUS_CANCELLED = OrderStatus.CANCELLED.value

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    customer = models.ForeignKey(
        "customers.Customer", on_delete=models.PROTECT, related_name="orders"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)

    # Shipping address is copied at checkout so later customer edits or
    # anonymization never rewrite where a past order was sent.
    street = models.CharField(max_length=150)
    city = models.CharField(max_length=100)
    postal_code = models.CharField(max_length=10)

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["customer", "created_at"], name="order_customer_created_idx"),
            models.Index(fields=["status"], name="order_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.status})"

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self.items.all()), Decimal("0.00"))


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.PROTECT, related_name="items")
    product = models.ForeignKey("catalog.Product", on_delete=models.PROTECT, related_name="order_items")
    quantity = models.PositiveIntegerField()
    # Unit price frozen at order time; catalog price changes never touch it.
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(condition=models.Q(quantity__gte=1), name="ck_order_item_quantity_positive"),
        ]

    def __str__(self) -> str:
        return f"{self.quantity}x product {self.product_id} in order #{self.order_id}"

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity
