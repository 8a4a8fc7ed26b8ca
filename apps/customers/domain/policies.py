from __future__ import annotations

import re

from .errors import CustomerValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

ANONYMIZED_TAX_ID = "ANONYMOUS"
ANONYMIZED_STREET = "ADDRESS_REMOVED"
ANONYMIZED_CITY = "REMOVED"
ANONYMIZED_POSTAL_CODE = "00000"
ANONYMIZED_PHONE = "000000000"
ANONYMIZED_EMAIL_DOMAIN = "orderdesk.local"


def validate_full_name(raw: str | None) -> str:
    name = (raw or "").strip()
    if not name:
        raise CustomerValidationError("Full name is required.", field="full_name")
    if len(name) > 150:
        raise CustomerValidationError("Full name must be 150 characters or fewer.", field="full_name")
    return name


def normalize_email(raw: str | None) -> str:
    return (raw or "").strip().lower()


def validate_email(raw: str | None) -> str:
    email = normalize_email(raw)
    if not email:
        raise CustomerValidationError("Email is required.", field="email")
    if len(email) > 100:
        raise CustomerValidationError("Email must be 100 characters or fewer.", field="email")
    if not _EMAIL_RE.match(email):
        raise CustomerValidationError("Enter a valid email address.", field="email")
    if email.endswith("@" + ANONYMIZED_EMAIL_DOMAIN):
        raise CustomerValidationError("This email domain is reserved.", field="email")
    return email


def validate_required(raw: str | None, *, field: str, max_length: int) -> str:
    value = (raw or "").strip()
    if not value:
        raise CustomerValidationError(f"{field} is required.", field=field)
    if len(value) > max_length:
        raise CustomerValidationError(f"{field} must be {max_length} characters or fewer.", field=field)
    return value


def anonymized_full_name(customer_id: int) -> str:
    return f"DELETED_USER_{customer_id}"


def anonymized_email(customer_id: int) -> str:
    # Keeps the unique constraint satisfied and frees the real address for reuse.
    return f"deleted_{customer_id}@{ANONYMIZED_EMAIL_DOMAIN}"
