from __future__ import annotations

from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from apps.catalog.domain.errors import (
    InsufficientStockError,
    ProductInUseError,
    ProductNotFoundError,
    ProductValidationError,
)
from apps.catalog.models import Product
from apps.catalog.services.inventory_service import InventoryService
from apps.catalog.services.product_service import ProductService
from apps.customers.models import Customer
from apps.orders.services.order_service import OrderLine, OrderService


def _place_order(customer: Customer, product: Product, quantity: int = 1):
    return OrderService.create_order(
        customer_id=customer.id,
        items=[OrderLine(product_id=product.id, quantity=quantity)],
        street="1 Main Street",
        city="Springfield",
        postal_code="12345",
    )


class ProductServiceTests(TestCase):
    def test_create_product(self):
        product = ProductService.save_product(
            name="  Widget ", description="A widget", price=Decimal("10.00"), stock=5
        )
        self.assertIsNotNone(product.id)
        self.assertEqual(product.name, "Widget")
        self.assertEqual(product.price, Decimal("10.00"))
        self.assertEqual(product.stock, 5)

    def test_zero_price_and_zero_stock_are_accepted(self):
        product = ProductService.save_product(name="Freebie", price=Decimal("0"), stock=0)
        self.assertEqual(product.price, Decimal("0.00"))
        self.assertEqual(product.stock, 0)

    def test_negative_or_missing_price_is_rejected(self):
        for price in (Decimal("-0.01"), None):
            with self.subTest(price=price):
                with self.assertRaises(ProductValidationError) as ctx:
                    ProductService.save_product(name="Bad", price=price, stock=1)
                self.assertEqual(ctx.exception.field, "price")
        self.assertEqual(Product.objects.count(), 0)

    def test_price_outside_column_precision_is_rejected(self):
        for price in (Decimal("123456789012.50"), Decimal("100000000"), Decimal("10.005")):
            with self.subTest(price=price):
                with self.assertRaises(ProductValidationError) as ctx:
                    ProductService.save_product(name="Big", price=price, stock=1)
                self.assertEqual(ctx.exception.field, "price")
        self.assertEqual(list(ProductService.list_products()), [])

    def test_largest_price_round_trips(self):
        product = ProductService.save_product(name="Yacht", price=Decimal("99999999.99"), stock=1)
        product.refresh_from_db()
        self.assertEqual(product.price, Decimal("99999999.99"))

    def test_negative_or_missing_stock_is_rejected(self):
        for stock in (-1, None):
            with self.subTest(stock=stock):
                with self.assertRaises(ProductValidationError) as ctx:
                    ProductService.save_product(name="Bad", price=Decimal("1.00"), stock=stock)
                self.assertEqual(ctx.exception.field, "stock")

    def test_fractional_stock_is_rejected(self):
        for stock in (2.7, Decimal("2.5")):
            with self.subTest(stock=stock):
                with self.assertRaises(ProductValidationError) as ctx:
                    ProductService.save_product(name="Bad", price=Decimal("1.00"), stock=stock)
                self.assertEqual(ctx.exception.field, "stock")
        self.assertEqual(ProductService.save_product(name="Whole", price=Decimal("1.00"), stock=3.0).stock, 3)

    def test_blank_name_is_rejected(self):
        with self.assertRaises(ProductValidationError):
            ProductService.save_product(name="   ", price=Decimal("1.00"), stock=1)

    def test_update_existing_product(self):
        product = ProductService.save_product(name="Widget", price=Decimal("10.00"), stock=5)
        updated = ProductService.save_product(
            product_id=product.id, name="Widget v2", description="", price=Decimal("12.50"), stock=7
        )
        self.assertEqual(updated.id, product.id)
        product.refresh_from_db()
        self.assertEqual(product.name, "Widget v2")
        self.assertEqual(product.price, Decimal("12.50"))
        self.assertEqual(product.stock, 7)

    def test_update_unknown_product_raises_not_found(self):
        with self.assertRaises(ProductNotFoundError):
            ProductService.save_product(product_id=9999, name="Ghost", price=Decimal("1.00"), stock=1)

    def test_search_by_name_is_case_insensitive_substring(self):
        ProductService.save_product(name="Gaming Laptop", price=Decimal("1500.00"), stock=1)
        ProductService.save_product(name="Laptop Sleeve", price=Decimal("20.00"), stock=1)
        ProductService.save_product(name="Mouse", price=Decimal("25.50"), stock=1)

        names = sorted(p.name for p in ProductService.search_by_name("LAPTOP"))
        self.assertEqual(names, ["Gaming Laptop", "Laptop Sleeve"])

    def test_list_available_only_returns_products_in_stock(self):
        ProductService.save_product(name="In stock", price=Decimal("1.00"), stock=3)
        ProductService.save_product(name="Sold out", price=Decimal("1.00"), stock=0)

        self.assertEqual([p.name for p in ProductService.list_available()], ["In stock"])
        self.assertEqual(ProductService.list_products().count(), 2)

    def test_get_unknown_product_raises_not_found(self):
        with self.assertRaises(ProductNotFoundError):
            ProductService.get_product(42)


class ProductDeletionTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.customer = Customer.objects.create(full_name="Buyer", email="buyer@example.com")

    def test_delete_unreferenced_product(self):
        product = ProductService.save_product(name="Widget", price=Decimal("10.00"), stock=5)
        ProductService.delete_product(product.id)
        self.assertFalse(ProductService.list_products().filter(id=product.id).exists())

    def test_delete_unknown_product_raises_not_found(self):
        with self.assertRaises(ProductNotFoundError):
            ProductService.delete_product(123)

    def test_delete_product_used_by_an_order_is_blocked(self):
        product = ProductService.save_product(name="Widget", price=Decimal("10.00"), stock=5)
        _place_order(self.customer, product)

        with self.assertRaises(ProductInUseError):
            ProductService.delete_product(product.id)
        self.assertTrue(ProductService.list_products().filter(id=product.id).exists())


class InventoryServiceTests(TestCase):
    def test_reserve_decrements_stock(self):
        product = Product.objects.create(name="Widget", price=Decimal("10.00"), stock=5)
        InventoryService.reserve(product.id, 3)
        product.refresh_from_db()
        self.assertEqual(product.stock, 2)

    def test_reserve_more_than_available_raises(self):
        product = Product.objects.create(name="Widget", price=Decimal("10.00"), stock=2)
        with self.assertRaises(InsufficientStockError) as ctx:
            InventoryService.reserve(product.id, 3)
        self.assertEqual(ctx.exception.requested, 3)
        self.assertEqual(ctx.exception.available, 2)
        product.refresh_from_db()
        self.assertEqual(product.stock, 2)

    def test_reserve_unknown_product_raises_not_found(self):
        with self.assertRaises(ProductNotFoundError):
            InventoryService.reserve(777, 1)


class ProductApiTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client = APIClient()

    def test_create_and_fetch_product(self):
        response = self.client.post(
            "/api/products/",
            data={"name": "Widget", "description": "Blue", "price": "10.00", "stock": 5},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["price"], "10.00")

        detail = self.client.get(f"/api/products/{payload['id']}/")
        self.assertEqual(detail.status_code, 200)
        self.assertEqual(detail.json()["name"], "Widget")

    def test_negative_price_returns_invalid_request(self):
        response = self.client.post(
            "/api/products/",
            data={"name": "Bad", "price": "-1.00", "stock": 5},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "invalid_request")
        self.assertEqual(response.json()["error"]["field"], "price")

    def test_search_and_available_filters(self):
        Product.objects.create(name="Red Widget", price=Decimal("1.00"), stock=0)
        Product.objects.create(name="Blue widget", price=Decimal("1.00"), stock=4)
        Product.objects.create(name="Gadget", price=Decimal("1.00"), stock=4)

        search = self.client.get("/api/products/", {"q": "WIDGET"})
        self.assertEqual(len(search.json()), 2)

        available = self.client.get("/api/products/", {"available": "1"})
        self.assertEqual(sorted(p["name"] for p in available.json()), ["Blue widget", "Gadget"])

    def test_update_product(self):
        product = Product.objects.create(name="Widget", price=Decimal("10.00"), stock=5)
        response = self.client.put(
            f"/api/products/{product.id}/",
            data={"name": "Widget", "price": "20.00", "stock": 5},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["price"], "20.00")

    def test_delete_conflict_and_not_found(self):
        customer = Customer.objects.create(full_name="Buyer", email="buyer@example.com")
        product = Product.objects.create(name="Widget", price=Decimal("10.00"), stock=5)
        _place_order(customer, product)

        conflict = self.client.delete(f"/api/products/{product.id}/")
        self.assertEqual(conflict.status_code, 409)
        self.assertEqual(conflict.json()["error"]["code"], "conflict")

        missing = self.client.delete("/api/products/9999/")
        self.assertEqual(missing.status_code, 404)

    def test_delete_unreferenced_product(self):
        product = Product.objects.create(name="Widget", price=Decimal("10.00"), stock=5)
        response = self.client.delete(f"/api/products/{product.id}/")
        self.assertEqual(response.status_code, 204)
        listing = self.client.get("/api/products/")
        self.assertEqual(listing.json(), [])
