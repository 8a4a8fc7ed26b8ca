from __future__ import annotations

from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from apps.catalog.models import Product
from apps.customers.application.use_cases.deactivate_customer import (
    DeactivateCustomerCommand,
    DeactivateCustomerUseCase,
)
from apps.customers.application.use_cases.register_customer import (
    RegisterCustomerCommand,
    RegisterCustomerUseCase,
    TaxProfileData,
)
from apps.customers.domain.errors import (
    CustomerNotFoundError,
    CustomerValidationError,
    DuplicateEmailError,
    TaxProfileNotFoundError,
)
from apps.customers.models import Customer, TaxProfile
from apps.customers.services.customer_service import CustomerQueryService
from apps.orders.services.order_service import OrderLine, OrderService


def _tax_profile(**overrides) -> TaxProfileData:
    data = {
        "tax_id": "11111111A",
        "street": "1 Commerce Street",
        "city": "Madrid",
        "postal_code": "28001",
        "phone": "600000000",
    }
    data.update(overrides)
    return TaxProfileData(**data)


class RegisterCustomerTests(TestCase):
    def test_register_customer_without_tax_profile(self):
        customer = RegisterCustomerUseCase.execute(
            RegisterCustomerCommand(full_name="Carlos Customer", email="Carlos@Example.com ")
        )
        self.assertEqual(customer.email, "carlos@example.com")
        self.assertTrue(customer.is_active)
        self.assertIsNotNone(customer.registered_at)
        self.assertFalse(TaxProfile.objects.filter(customer=customer).exists())

    def test_register_customer_links_tax_profile(self):
        customer = RegisterCustomerUseCase.execute(
            RegisterCustomerCommand(full_name="Carlos", email="carlos@example.com", tax_profile=_tax_profile())
        )
        profile = TaxProfile.objects.get(customer=customer)
        self.assertEqual(profile.tax_id, "11111111A")
        self.assertEqual(Customer.objects.get(id=customer.id).tax_profile.id, profile.id)

    def test_duplicate_email_is_rejected_and_first_customer_untouched(self):
        first = RegisterCustomerUseCase.execute(
            RegisterCustomerCommand(full_name="Carlos", email="carlos@example.com", tax_profile=_tax_profile())
        )

        with self.assertRaises(DuplicateEmailError):
            RegisterCustomerUseCase.execute(
                RegisterCustomerCommand(
                    full_name="Impostor",
                    email="CARLOS@example.com",
                    tax_profile=_tax_profile(tax_id="00000000Z"),
                )
            )

        self.assertEqual(Customer.objects.count(), 1)
        first.refresh_from_db()
        self.assertEqual(first.full_name, "Carlos")
        self.assertEqual(TaxProfile.objects.get().tax_id, "11111111A")

    def test_invalid_input_is_rejected(self):
        with self.assertRaises(CustomerValidationError):
            RegisterCustomerUseCase.execute(RegisterCustomerCommand(full_name="", email="a@example.com"))
        with self.assertRaises(CustomerValidationError):
            RegisterCustomerUseCase.execute(RegisterCustomerCommand(full_name="A", email="not-an-email"))
        with self.assertRaises(CustomerValidationError) as ctx:
            RegisterCustomerUseCase.execute(
                RegisterCustomerCommand(full_name="A", email="a@example.com", tax_profile=_tax_profile(phone=" "))
            )
        self.assertEqual(ctx.exception.field, "phone")
        self.assertEqual(Customer.objects.count(), 0)


class DeactivateCustomerTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.customer = RegisterCustomerUseCase.execute(
            RegisterCustomerCommand(full_name="Carlos", email="carlos@example.com", tax_profile=_tax_profile())
        )

    def test_deactivation_overwrites_personal_data_with_sentinels(self):
        DeactivateCustomerUseCase.execute(DeactivateCustomerCommand(customer_id=self.customer.id))

        customer = Customer.objects.get(id=self.customer.id)
        self.assertEqual(customer.full_name, f"DELETED_USER_{customer.id}")
        self.assertEqual(customer.email, f"deleted_{customer.id}@orderdesk.local")
        self.assertFalse(customer.is_active)

        profile = TaxProfile.objects.get(customer=customer)
        self.assertEqual(profile.tax_id, "ANONYMOUS")
        self.assertEqual(profile.street, "ADDRESS_REMOVED")
        self.assertEqual(profile.city, "REMOVED")
        self.assertEqual(profile.postal_code, "00000")
        self.assertEqual(profile.phone, "000000000")

    def test_deactivation_without_tax_profile(self):
        customer = Customer.objects.create(full_name="No Tax", email="notax@example.com")
        DeactivateCustomerUseCase.execute(DeactivateCustomerCommand(customer_id=customer.id))
        customer.refresh_from_db()
        self.assertEqual(customer.full_name, f"DELETED_USER_{customer.id}")

    def test_deactivation_frees_email_for_reuse(self):
        DeactivateCustomerUseCase.execute(DeactivateCustomerCommand(customer_id=self.customer.id))
        again = RegisterCustomerUseCase.execute(
            RegisterCustomerCommand(full_name="Carlos Again", email="carlos@example.com")
        )
        self.assertNotEqual(again.id, self.customer.id)

    def test_orders_survive_deactivation(self):
        product = Product.objects.create(name="Widget", price=Decimal("10.00"), stock=5)
        order = OrderService.create_order(
            customer_id=self.customer.id,
            items=[OrderLine(product_id=product.id, quantity=2)],
            street="9 Shipping Lane",
            city="Seville",
            postal_code="41001",
        )

        DeactivateCustomerUseCase.execute(DeactivateCustomerCommand(customer_id=self.customer.id))

        orders = list(OrderService.list_for_customer(self.customer.id))
        self.assertEqual([o.id for o in orders], [order.id])
        self.assertEqual(orders[0].street, "9 Shipping Lane")
        self.assertEqual(orders[0].city, "Seville")
        self.assertEqual(orders[0].total, Decimal("20.00"))

    def test_unknown_customer_raises_not_found(self):
        with self.assertRaises(CustomerNotFoundError):
            DeactivateCustomerUseCase.execute(DeactivateCustomerCommand(customer_id=9999))

    def test_anonymized_address_cannot_be_claimed_before_deactivation(self):
        with self.assertRaises(CustomerValidationError) as ctx:
            RegisterCustomerUseCase.execute(
                RegisterCustomerCommand(
                    full_name="Squatter",
                    email=f"deleted_{self.customer.id}@OrderDesk.local",
                )
            )
        self.assertEqual(ctx.exception.field, "email")

        DeactivateCustomerUseCase.execute(DeactivateCustomerCommand(customer_id=self.customer.id))
        self.customer.refresh_from_db()
        self.assertEqual(self.customer.email, f"deleted_{self.customer.id}@orderdesk.local")
        self.assertEqual(Customer.objects.count(), 1)


class CustomerQueryServiceTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.customer = RegisterCustomerUseCase.execute(
            RegisterCustomerCommand(full_name="Carlos", email="carlos@example.com", tax_profile=_tax_profile())
        )

    def test_lookups(self):
        self.assertEqual(CustomerQueryService.get_customer(self.customer.id).email, "carlos@example.com")
        self.assertEqual(CustomerQueryService.find_by_email("CARLOS@example.com").id, self.customer.id)
        self.assertIsNone(CustomerQueryService.find_by_email("nobody@example.com"))
        self.assertTrue(CustomerQueryService.email_exists("carlos@example.com"))
        self.assertFalse(CustomerQueryService.email_exists("nobody@example.com"))
        self.assertEqual(CustomerQueryService.find_tax_profile("11111111A").customer_id, self.customer.id)
        self.assertEqual(CustomerQueryService.list_customers().count(), 1)

    def test_missing_records_raise(self):
        with self.assertRaises(CustomerNotFoundError):
            CustomerQueryService.get_customer(9999)
        with self.assertRaises(TaxProfileNotFoundError):
            CustomerQueryService.find_tax_profile("NOPE")

    def test_tax_profile_lookup_ignores_deactivated_customers(self):
        DeactivateCustomerUseCase.execute(DeactivateCustomerCommand(customer_id=self.customer.id))
        other = RegisterCustomerUseCase.execute(
            RegisterCustomerCommand(
                full_name="Other",
                email="other@example.com",
                tax_profile=_tax_profile(tax_id="22222222B"),
            )
        )
        DeactivateCustomerUseCase.execute(DeactivateCustomerCommand(customer_id=other.id))

        with self.assertRaises(TaxProfileNotFoundError):
            CustomerQueryService.find_tax_profile("ANONYMOUS")
        with self.assertRaises(TaxProfileNotFoundError):
            CustomerQueryService.find_tax_profile("11111111A")


class CustomerApiTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client = APIClient()

    def _register(self, email: str = "carlos@example.com", **extra):
        data = {"full_name": "Carlos", "email": email}
        data.update(extra)
        return self.client.post("/api/customers/", data=data, format="json")

    def test_register_with_tax_profile(self):
        response = self._register(
            tax_profile={
                "tax_id": "11111111A",
                "street": "1 Commerce Street",
                "city": "Madrid",
                "postal_code": "28001",
                "phone": "600000000",
            }
        )
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["email"], "carlos@example.com")
        self.assertEqual(payload["tax_profile"]["tax_id"], "11111111A")
        self.assertEqual(payload["tax_profile"]["customer_id"], payload["id"])

    def test_register_without_tax_profile(self):
        response = self._register()
        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.json()["tax_profile"])

    def test_duplicate_email_returns_conflict(self):
        self.assertEqual(self._register().status_code, 201)
        response = self._register()
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["code"], "duplicate_email")

    def test_invalid_email_returns_bad_request(self):
        response = self._register(email="not-an-email")
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_detail_list_and_deactivate(self):
        customer_id = self._register().json()["id"]

        self.assertEqual(self.client.get(f"/api/customers/{customer_id}/").status_code, 200)
        self.assertEqual(len(self.client.get("/api/customers/").json()), 1)
        self.assertEqual(len(self.client.get("/api/customers/", {"email": "carlos@example.com"}).json()), 1)

        response = self.client.post(f"/api/customers/{customer_id}/deactivate/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["full_name"], f"DELETED_USER_{customer_id}")
        self.assertFalse(response.json()["is_active"])

        self.assertEqual(self.client.get("/api/customers/9999/").status_code, 404)
        self.assertEqual(self.client.post("/api/customers/9999/deactivate/").status_code, 404)

    def test_tax_profile_lookup(self):
        RegisterCustomerUseCase.execute(
            RegisterCustomerCommand(full_name="Carlos", email="carlos@example.com", tax_profile=_tax_profile())
        )
        response = self.client.get("/api/tax-profiles/11111111A/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["city"], "Madrid")
        self.assertEqual(self.client.get("/api/tax-profiles/UNKNOWN/").status_code, 404)
