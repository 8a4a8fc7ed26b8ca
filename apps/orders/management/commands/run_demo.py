from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.domain.errors import CatalogDomainError
from apps.catalog.services.product_service import ProductService
from apps.customers.application.use_cases.deactivate_customer import (
    DeactivateCustomerCommand,
    DeactivateCustomerUseCase,
)
from apps.customers.application.use_cases.register_customer import (
    RegisterCustomerCommand,
    RegisterCustomerUseCase,
    TaxProfileData,
)
from apps.customers.domain.errors import DuplicateEmailError
from apps.orders.domain.errors import InvalidStateTransitionError
from apps.orders.services.order_service import OrderLine, OrderService


class Command(BaseCommand):
    help = "Walk through the catalog, customer and order workflows end to end."

    def add_arguments(self, parser):
        parser.add_argument(
            "--commit",
            action="store_true",
            help="Keep the demo data instead of rolling it back at the end.",
        )

    def handle(self, *args, **options):
        with transaction.atomic():
            self._run()
            if not options["commit"]:
                transaction.set_rollback(True)
                self.stdout.write("Demo data rolled back (use --commit to keep it).")

    def _section(self, title: str) -> None:
        self.stdout.write("")
        self.stdout.write(self.style.MIGRATE_HEADING(title))

    def _check(self, message: str) -> None:
        self.stdout.write(self.style.SUCCESS(f"  [OK] {message}"))

    def _run(self) -> None:
        self._section("1. Catalog")
        laptop = ProductService.save_product(
            name="Gaming Laptop", description="15 inch", price=Decimal("1500.00"), stock=10
        )
        ProductService.save_product(name="Wireless Mouse", price=Decimal("25.50"), stock=50)
        ProductService.save_product(name="Mechanical Keyboard", price=Decimal("80.00"), stock=5)
        self.stdout.write(f"  Available products: {ProductService.list_available().count()}")
        try:
            ProductService.save_product(name="Broken Item", price=Decimal("-100.00"), stock=10)
        except CatalogDomainError as exc:
            self._check(f"negative price rejected: {exc}")

        self._section("2. Customers")
        email = f"carlos.{uuid.uuid4().hex[:8]}@example.com"
        customer = RegisterCustomerUseCase.execute(
            RegisterCustomerCommand(
                full_name="Carlos Customer",
                email=email,
                tax_profile=TaxProfileData(
                    tax_id="11111111A",
                    street="1 Commerce Street",
                    city="Madrid",
                    postal_code="28001",
                    phone="600000000",
                ),
            )
        )
        self.stdout.write(f"  Registered customer #{customer.id} <{customer.email}>")
        try:
            RegisterCustomerUseCase.execute(RegisterCustomerCommand(full_name="Impostor", email=email))
        except DuplicateEmailError as exc:
            self._check(f"duplicate email rejected: {exc}")

        self._section("3. Orders and totals")
        order = OrderService.create_order(
            customer_id=customer.id,
            items=[OrderLine(product_id=laptop.id, quantity=2)],
            street="1 Commerce Street",
            city="Madrid",
            postal_code="28001",
        )
        self.stdout.write(f"  Order #{order.id} placed, total {order.total}")

        ProductService.save_product(
            product_id=laptop.id,
            name=laptop.name,
            description=laptop.description,
            price=Decimal("3000.00"),
            stock=ProductService.get_product(laptop.id).stock,
        )
        historic = OrderService.get_order(order.id)
        self._check(f"price raised to 3000.00, order #{order.id} total still {historic.total}")

        self._section("4. Fulfilment and cancellation")
        OrderService.cancel_order(order.id)
        self._check(f"order #{order.id} cancelled")
        shipped = OrderService.create_order(
            customer_id=customer.id,
            items=[OrderLine(product_id=laptop.id, quantity=1)],
            street="1 Commerce Street",
            city="Madrid",
            postal_code="28001",
        )
        OrderService.mark_as_shipped(shipped.id)
        try:
            OrderService.cancel_order(shipped.id)
        except InvalidStateTransitionError as exc:
            self._check(f"shipped order not cancellable: {exc}")

        self._section("5. Deactivation")
        DeactivateCustomerUseCase.execute(DeactivateCustomerCommand(customer_id=customer.id))
        orders = OrderService.list_for_customer(customer.id)
        self._check(f"customer anonymized, {orders.count()} orders still on record")
