from __future__ import annotations


class CustomerDomainError(ValueError):
    code = "invalid_request"


class CustomerValidationError(CustomerDomainError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class DuplicateEmailError(CustomerDomainError):
    code = "duplicate_email"

    def __init__(self, email: str):
        super().__init__(f"The email {email} is already registered.")
        self.email = email
        self.field = "email"


class CustomerNotFoundError(CustomerDomainError):
    code = "not_found"

    def __init__(self, customer_id, message: str | None = None):
        super().__init__(message or f"Customer not found with ID: {customer_id}")
        self.customer_id = customer_id


class TaxProfileNotFoundError(CustomerDomainError):
    code = "not_found"

    def __init__(self, tax_id: str):
        super().__init__(f"Tax profile not found for tax ID: {tax_id}")
        self.tax_id = tax_id
