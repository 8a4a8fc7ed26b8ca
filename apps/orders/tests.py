from __future__ import annotations

from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from rest_framework.test import APIClient

from apps.catalog.domain.errors import InsufficientStockError, ProductNotFoundError
from apps.catalog.models import Product
from apps.catalog.services.product_service import ProductService
from apps.customers.domain.errors import CustomerNotFoundError
from apps.customers.models import Customer
from apps.orders.domain.errors import InvalidStateTransitionError, OrderNotFoundError, OrderValidationError
from apps.orders.domain.state_machine import OrderStateMachine, OrderStatus
from apps.orders.models import Order, OrderItem
from apps.orders.services.order_service import OrderLine, OrderService

ADDRESS = {"street": "1 Main Street", "city": "Springfield", "postal_code": "12345"}


class OrderServiceTestMixin:
    def setUp(self) -> None:
        super().setUp()
        self.customer = Customer.objects.create(full_name="Carlos", email="carlos@example.com")
        self.widget = Product.objects.create(name="Widget", price=Decimal("10.00"), stock=5)
        self.gadget = Product.objects.create(name="Gadget", price=Decimal("2.35"), stock=10)

    def _create(self, *lines: tuple[Product, int], customer_id: int | None = None) -> Order:
        return OrderService.create_order(
            customer_id=customer_id if customer_id is not None else self.customer.id,
            items=[OrderLine(product_id=product.id, quantity=qty) for product, qty in lines],
            **ADDRESS,
        )

    def _stock(self, product: Product) -> int:
        product.refresh_from_db()
        return product.stock


class CreateOrderTests(OrderServiceTestMixin, TestCase):
    def test_widget_scenario(self):
        order = self._create((self.widget, 3))

        self.assertEqual(self._stock(self.widget), 2)
        item = order.items.get()
        self.assertEqual(item.unit_price, Decimal("10.00"))
        self.assertEqual(item.subtotal, Decimal("30.00"))
        self.assertEqual(order.total, Decimal("30.00"))

        ProductService.save_product(
            product_id=self.widget.id, name="Widget", price=Decimal("20.00"), stock=self._stock(self.widget)
        )

        order = OrderService.get_order(order.id)
        self.assertEqual(order.items.get().unit_price, Decimal("10.00"))
        self.assertEqual(order.total, Decimal("30.00"))

    def test_new_order_is_pending_with_copied_address(self):
        order = self._create((self.widget, 1))
        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertEqual(order.customer_id, self.customer.id)
        self.assertIsNotNone(order.created_at)
        self.assertEqual((order.street, order.city, order.postal_code), ("1 Main Street", "Springfield", "12345"))

    def test_total_is_exact_sum_of_subtotals(self):
        cheap = Product.objects.create(name="Penny sweet", price=Decimal("0.10"), stock=100)
        order = self._create((cheap, 3), (self.gadget, 7), (self.widget, 1))

        subtotals = [item.subtotal for item in order.items.all()]
        self.assertEqual(sum(subtotals, Decimal("0")), order.total)
        self.assertEqual(order.total, Decimal("26.75"))

    def test_stock_decrement_sums_repeated_products(self):
        self._create((self.gadget, 3), (self.widget, 1), (self.gadget, 4))
        self.assertEqual(self._stock(self.gadget), 3)
        self.assertEqual(self._stock(self.widget), 4)

    def test_unknown_customer_raises_not_found(self):
        with self.assertRaises(CustomerNotFoundError):
            self._create((self.widget, 1), customer_id=9999)
        self.assertEqual(self._stock(self.widget), 5)

    def test_empty_order_is_rejected_without_stock_changes(self):
        with self.assertRaises(OrderValidationError):
            self._create()
        self.assertEqual(self._stock(self.widget), 5)
        self.assertEqual(self._stock(self.gadget), 10)
        self.assertEqual(Order.objects.count(), 0)

    def test_insufficient_stock_rolls_back_earlier_lines(self):
        with self.assertRaises(InsufficientStockError) as ctx:
            self._create((self.gadget, 4), (self.widget, 6))

        self.assertIn("Widget", str(ctx.exception))
        self.assertEqual(self._stock(self.gadget), 10)
        self.assertEqual(self._stock(self.widget), 5)
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(OrderItem.objects.count(), 0)

    def test_first_failing_line_is_reported(self):
        with self.assertRaises(ProductNotFoundError):
            self._create((self.widget, 1), (Product(id=9999, name="ghost"), 1), (self.gadget, 999))
        self.assertEqual(self._stock(self.widget), 5)

    def test_non_positive_quantity_is_rejected(self):
        with self.assertRaises(OrderValidationError):
            self._create((self.widget, 0))
        self.assertEqual(self._stock(self.widget), 5)

    def test_missing_address_is_rejected(self):
        with self.assertRaises(OrderValidationError) as ctx:
            OrderService.create_order(
                customer_id=self.customer.id,
                items=[OrderLine(product_id=self.widget.id, quantity=1)],
                street="1 Main Street",
                city="  ",
                postal_code="12345",
            )
        self.assertEqual(ctx.exception.field, "city")
        self.assertEqual(self._stock(self.widget), 5)


class CancelOrderTests(OrderServiceTestMixin, TestCase):
    def test_cancel_pending_order(self):
        order = self._create((self.widget, 2))
        cancelled = OrderService.cancel_order(order.id)
        self.assertEqual(cancelled.status, Order.STATUS_CANCELLED)

    def test_cancel_does_not_restore_stock(self):
        order = self._create((self.widget, 2))
        OrderService.cancel_order(order.id)
        self.assertEqual(self._stock(self.widget), 3)

    def test_cancel_shipped_or_delivered_order_is_rejected(self):
        shipped = self._create((self.widget, 1))
        OrderService.mark_as_shipped(shipped.id)
        delivered = self._create((self.widget, 1))
        OrderService.mark_as_shipped(delivered.id)
        OrderService.mark_as_delivered(delivered.id)

        for order, expected in ((shipped, Order.STATUS_SHIPPED), (delivered, Order.STATUS_DELIVERED)):
            with self.subTest(status=expected):
                with self.assertRaises(InvalidStateTransitionError):
                    OrderService.cancel_order(order.id)
                order.refresh_from_db()
                self.assertEqual(order.status, expected)

    def test_cancel_already_cancelled_order_is_a_no_op(self):
        order = self._create((self.widget, 1))
        OrderService.cancel_order(order.id)
        self.assertEqual(OrderService.cancel_order(order.id).status, Order.STATUS_CANCELLED)

    def test_cancel_unknown_order_raises_not_found(self):
        with self.assertRaises(OrderNotFoundError):
            OrderService.cancel_order(4242)


class FulfilmentTests(OrderServiceTestMixin, TestCase):
    def test_ship_then_deliver(self):
        order = self._create((self.widget, 1))
        self.assertEqual(OrderService.mark_as_shipped(order.id).status, Order.STATUS_SHIPPED)
        self.assertEqual(OrderService.mark_as_delivered(order.id).status, Order.STATUS_DELIVERED)

    def test_deliver_pending_order_is_rejected(self):
        order = self._create((self.widget, 1))
        with self.assertRaises(InvalidStateTransitionError):
            OrderService.mark_as_delivered(order.id)

    def test_ship_cancelled_order_is_rejected(self):
        order = self._create((self.widget, 1))
        OrderService.cancel_order(order.id)
        with self.assertRaises(InvalidStateTransitionError):
            OrderService.mark_as_shipped(order.id)

    def test_state_machine_table(self):
        self.assertTrue(OrderStateMachine.can_transition(OrderStatus.PENDING, OrderStatus.CANCELLED))
        self.assertFalse(OrderStateMachine.can_transition(OrderStatus.SHIPPED, OrderStatus.CANCELLED))
        self.assertFalse(OrderStateMachine.can_transition(OrderStatus.DELIVERED, OrderStatus.CANCELLED))
        self.assertFalse(OrderStateMachine.can_transition(OrderStatus.DELIVERED, OrderStatus.SHIPPED))


class OrderQueryTests(OrderServiceTestMixin, TestCase):
    def test_list_for_customer_returns_all_statuses(self):
        other = Customer.objects.create(full_name="Other", email="other@example.com")
        first = self._create((self.widget, 1))
        second = self._create((self.gadget, 1))
        OrderService.cancel_order(second.id)
        self._create((self.gadget, 1), customer_id=other.id)

        ids = {order.id for order in OrderService.list_for_customer(self.customer.id)}
        self.assertEqual(ids, {first.id, second.id})

    def test_list_by_status(self):
        pending = self._create((self.widget, 1))
        cancelled = self._create((self.widget, 1))
        OrderService.cancel_order(cancelled.id)

        self.assertEqual([o.id for o in OrderService.list_by_status("PENDING")], [pending.id])
        self.assertEqual([o.id for o in OrderService.list_by_status("cancelled")], [cancelled.id])
        self.assertEqual(list(OrderService.list_by_status("SHIPPED")), [])

    def test_list_by_unknown_status_is_rejected(self):
        with self.assertRaises(OrderValidationError):
            OrderService.list_by_status("LOST")


class OrderApiTests(OrderServiceTestMixin, TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client = APIClient()

    def _post_order(self, items, customer_id=None):
        return self.client.post(
            "/api/orders/",
            data={"customer_id": customer_id or self.customer.id, "items": items, **ADDRESS},
            format="json",
        )

    def test_create_order_returns_flat_transfer_shape(self):
        response = self._post_order([{"product_id": self.widget.id, "quantity": 3, "unit_price": "0.01"}])
        self.assertEqual(response.status_code, 201)

        payload = response.json()
        self.assertEqual(payload["customer_id"], self.customer.id)
        self.assertEqual(payload["customer_name"], "Carlos")
        self.assertEqual(payload["status"], "PENDING")
        self.assertEqual(payload["city"], "Springfield")
        self.assertEqual(payload["total"], "30.00")
        self.assertEqual(
            payload["items"][0],
            {
                "id": payload["items"][0]["id"],
                "product_id": self.widget.id,
                "product_name": "Widget",
                "quantity": 3,
                "unit_price": "10.00",
                "subtotal": "30.00",
            },
        )

    def test_create_order_error_codes(self):
        empty = self._post_order([])
        self.assertEqual(empty.status_code, 400)
        self.assertEqual(empty.json()["error"]["code"], "invalid_request")

        no_stock = self._post_order([{"product_id": self.widget.id, "quantity": 50}])
        self.assertEqual(no_stock.status_code, 409)
        self.assertEqual(no_stock.json()["error"]["code"], "insufficient_stock")

        no_product = self._post_order([{"product_id": 9999, "quantity": 1}])
        self.assertEqual(no_product.status_code, 404)

        no_customer = self._post_order([{"product_id": self.widget.id, "quantity": 1}], customer_id=9999)
        self.assertEqual(no_customer.status_code, 404)

        bad_quantity = self._post_order([{"product_id": self.widget.id, "quantity": 0}])
        self.assertEqual(bad_quantity.status_code, 400)

        self.assertEqual(self._stock(self.widget), 5)

    def test_cancel_ship_deliver_endpoints(self):
        order_id = self._post_order([{"product_id": self.widget.id, "quantity": 1}]).json()["id"]

        self.assertEqual(self.client.post(f"/api/orders/{order_id}/ship/").json()["status"], "SHIPPED")
        conflict = self.client.post(f"/api/orders/{order_id}/cancel/")
        self.assertEqual(conflict.status_code, 409)
        self.assertEqual(conflict.json()["error"]["code"], "invalid_state_transition")
        self.assertEqual(self.client.post(f"/api/orders/{order_id}/deliver/").json()["status"], "DELIVERED")

        other_id = self._post_order([{"product_id": self.widget.id, "quantity": 1}]).json()["id"]
        cancelled = self.client.post(f"/api/orders/{other_id}/cancel/")
        self.assertEqual(cancelled.status_code, 200)
        self.assertEqual(cancelled.json()["status"], "CANCELLED")

        self.assertEqual(self.client.post("/api/orders/9999/cancel/").status_code, 404)

    def test_queries(self):
        order_id = self._post_order([{"product_id": self.widget.id, "quantity": 1}]).json()["id"]

        detail = self.client.get(f"/api/orders/{order_id}/")
        self.assertEqual(detail.status_code, 200)
        self.assertEqual(detail.json()["total"], "10.00")

        by_customer = self.client.get(f"/api/customers/{self.customer.id}/orders/")
        self.assertEqual([o["id"] for o in by_customer.json()], [order_id])

        by_status = self.client.get("/api/orders/", {"status": "PENDING"})
        self.assertEqual([o["id"] for o in by_status.json()], [order_id])

        self.assertEqual(self.client.get("/api/orders/", {"status": "LOST"}).status_code, 400)
        self.assertEqual(self.client.get("/api/orders/").status_code, 400)
        self.assertEqual(self.client.get("/api/orders/9999/").status_code, 404)


class RunDemoCommandTests(TestCase):
    def test_demo_runs_and_rolls_back(self):
        out = StringIO()
        call_command("run_demo", stdout=out)

        output = out.getvalue()
        self.assertIn("negative price rejected", output)
        self.assertIn("duplicate email rejected", output)
        self.assertIn("total still 3000.00", output)
        self.assertIn("shipped order not cancellable", output)
        self.assertEqual(Product.objects.count(), 0)
        self.assertEqual(Customer.objects.count(), 0)
