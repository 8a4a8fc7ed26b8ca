from __future__ import annotations

from ..domain.errors import InsufficientStockError, ProductNotFoundError
from ..models import Product


class InventoryService:
    @staticmethod
    def reserve(product_id: int, quantity: int) -> Product:
        """
        Lock the product row, check it can cover ``quantity`` and decrement it.

        Must run inside the caller's transaction so the decrement is rolled
        back together with the rest of the unit of work.
        """
        product = Product.objects.select_for_update().filter(id=product_id).first()
        if product is None:
            raise ProductNotFoundError(product_id, f"Product does not exist ID: {product_id}")
        if product.stock < quantity:
            raise InsufficientStockError(
                product_id=product.id,
                product_name=product.name,
                requested=quantity,
                available=product.stock,
            )

        product.stock -= quantity
        product.save(update_fields=["stock"])
        return product
