from __future__ import annotations

from django.db.models import QuerySet

from ..domain.errors import CustomerNotFoundError, TaxProfileNotFoundError
from ..domain.policies import normalize_email
from ..models import Customer, TaxProfile


class CustomerQueryService:
    @staticmethod
    def list_customers() -> QuerySet[Customer]:
        return Customer.objects.select_related("tax_profile").all()

    @staticmethod
    def get_customer(customer_id: int) -> Customer:
        customer = Customer.objects.select_related("tax_profile").filter(id=customer_id).first()
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    @staticmethod
    def find_by_email(email: str) -> Customer | None:
        return Customer.objects.select_related("tax_profile").filter(email__iexact=normalize_email(email)).first()

    @staticmethod
    def email_exists(email: str) -> bool:
        return Customer.objects.filter(email__iexact=normalize_email(email)).exists()

    @staticmethod
    def find_tax_profile(tax_id: str) -> TaxProfile:
        # Deactivated profiles all share the anonymized tax ID.
        profile = (
            TaxProfile.objects.select_related("customer")
            .filter(tax_id=(tax_id or "").strip(), customer__is_active=True)
            .first()
        )
        if profile is None:
            raise TaxProfileNotFoundError(tax_id)
        return profile
