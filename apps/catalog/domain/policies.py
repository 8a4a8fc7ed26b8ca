from __future__ import annotations

from decimal import Decimal, InvalidOperation

from .errors import ProductValidationError

# Product.price is DecimalField(max_digits=10, decimal_places=2).
PRICE_LIMIT = Decimal("100000000")
PRICE_STEP = Decimal("0.01")


def validate_product_name(raw: str | None) -> str:
    name = (raw or "").strip()
    if not name:
        raise ProductValidationError("Product name is required.", field="name")
    if len(name) > 100:
        raise ProductValidationError("Product name must be 100 characters or fewer.", field="name")
    return name


def validate_price(raw) -> Decimal:
    if raw is None:
        raise ProductValidationError("Price cannot be null or negative.", field="price")
    try:
        price = Decimal(str(raw))
    except (InvalidOperation, ValueError) as exc:
        raise ProductValidationError("Price must be a decimal number.", field="price") from exc
    if not price.is_finite() or price < 0:
        raise ProductValidationError("Price cannot be null or negative.", field="price")
    if price >= PRICE_LIMIT:
        raise ProductValidationError("Price must be less than 100000000.", field="price")
    if price != price.quantize(PRICE_STEP):
        raise ProductValidationError("Price cannot have more than 2 decimal places.", field="price")
    return price.quantize(PRICE_STEP)


def validate_stock(raw) -> int:
    if raw is None or isinstance(raw, bool):
        raise ProductValidationError("Stock cannot be null or negative.", field="stock")
    try:
        stock = int(raw)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ProductValidationError("Stock must be an integer.", field="stock") from exc
    if not isinstance(raw, str) and stock != raw:
        raise ProductValidationError("Stock must be a whole number.", field="stock")
    if stock < 0:
        raise ProductValidationError("Stock cannot be null or negative.", field="stock")
    return stock
