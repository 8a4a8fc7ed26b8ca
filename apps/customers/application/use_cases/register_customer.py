from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import IntegrityError, transaction

from apps.customers.domain.errors import DuplicateEmailError
from apps.customers.domain.policies import validate_email, validate_full_name, validate_required
from apps.customers.models import Customer, TaxProfile

logger = logging.getLogger("orderdesk.customers")


@dataclass(frozen=True)
class TaxProfileData:
    tax_id: str
    street: str
    city: str
    postal_code: str
    phone: str


@dataclass(frozen=True)
class RegisterCustomerCommand:
    full_name: str
    email: str
    tax_profile: TaxProfileData | None = None


class RegisterCustomerUseCase:
    @staticmethod
    @transaction.atomic
    def execute(cmd: RegisterCustomerCommand) -> Customer:
        full_name = validate_full_name(cmd.full_name)
        email = validate_email(cmd.email)
        tax_data = _validated_tax_profile(cmd.tax_profile) if cmd.tax_profile is not None else None

        if Customer.objects.filter(email__iexact=email).exists():
            raise DuplicateEmailError(email)

        try:
            with transaction.atomic():
                customer = Customer.objects.create(full_name=full_name, email=email)
        except IntegrityError as exc:
            raise DuplicateEmailError(email) from exc

        if tax_data is not None:
            TaxProfile.objects.create(customer=customer, **tax_data)

        logger.info("customer_registered", extra={"customer_id": customer.id})
        return customer


def _validated_tax_profile(data: TaxProfileData) -> dict:
    return {
        "tax_id": validate_required(data.tax_id, field="tax_id", max_length=20),
        "street": validate_required(data.street, field="street", max_length=150),
        "city": validate_required(data.city, field="city", max_length=100),
        "postal_code": validate_required(data.postal_code, field="postal_code", max_length=10),
        "phone": validate_required(data.phone, field="phone", max_length=20),
    }
