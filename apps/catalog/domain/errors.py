from __future__ import annotations


class CatalogDomainError(ValueError):
    code = "invalid_request"


class ProductValidationError(CatalogDomainError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class ProductNotFoundError(CatalogDomainError):
    code = "not_found"

    def __init__(self, product_id, message: str | None = None):
        super().__init__(message or f"Product not found with ID: {product_id}")
        self.product_id = product_id


class ProductInUseError(CatalogDomainError):
    code = "conflict"

    def __init__(self, product_id):
        super().__init__(
            f"Product {product_id} cannot be deleted because it is part of one or more orders."
        )
        self.product_id = product_id


class InsufficientStockError(CatalogDomainError):
    code = "insufficient_stock"

    def __init__(self, *, product_id, product_name: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for: {product_name}. Requested: {requested}, Available: {available}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available
