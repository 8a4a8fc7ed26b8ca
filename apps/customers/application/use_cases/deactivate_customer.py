from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction

from apps.customers.domain.errors import CustomerNotFoundError
from apps.customers.domain.policies import (
    ANONYMIZED_CITY,
    ANONYMIZED_PHONE,
    ANONYMIZED_POSTAL_CODE,
    ANONYMIZED_STREET,
    ANONYMIZED_TAX_ID,
    anonymized_email,
    anonymized_full_name,
)
from apps.customers.models import Customer, TaxProfile

logger = logging.getLogger("orderdesk.customers")


@dataclass(frozen=True)
class DeactivateCustomerCommand:
    customer_id: int


class DeactivateCustomerUseCase:
    """
    Scrub a customer's personal data without deleting the row.

    Orders keep pointing at the same customer record, and their shipping
    address is a copy taken at checkout, so order history is unaffected.
    """

    @staticmethod
    @transaction.atomic
    def execute(cmd: DeactivateCustomerCommand) -> Customer:
        customer = Customer.objects.select_for_update().filter(id=cmd.customer_id).first()
        if customer is None:
            raise CustomerNotFoundError(
                cmd.customer_id,
                f"Cannot deactivate. Customer not found with ID: {cmd.customer_id}",
            )

        customer.full_name = anonymized_full_name(customer.id)
        customer.email = anonymized_email(customer.id)
        customer.is_active = False
        customer.save(update_fields=["full_name", "email", "is_active"])

        TaxProfile.objects.filter(customer=customer).update(
            tax_id=ANONYMIZED_TAX_ID,
            street=ANONYMIZED_STREET,
            city=ANONYMIZED_CITY,
            postal_code=ANONYMIZED_POSTAL_CODE,
            phone=ANONYMIZED_PHONE,
        )

        logger.info("customer_deactivated", extra={"customer_id": customer.id})
        return customer
