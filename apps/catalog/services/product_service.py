from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import ProtectedError, QuerySet

from ..domain.errors import ProductInUseError, ProductNotFoundError
from ..domain.policies import validate_price, validate_product_name, validate_stock
from ..models import Product

logger = logging.getLogger("orderdesk.catalog")


class ProductService:
    @staticmethod
    @transaction.atomic
    def save_product(
        *,
        product_id: int | None = None,
        name: str,
        description: str = "",
        price,
        stock,
    ) -> Product:
        """Create a product, or update it in place when ``product_id`` is given."""
        price = validate_price(price)
        stock = validate_stock(stock)
        name = validate_product_name(name)

        if product_id is None:
            product = Product.objects.create(
                name=name,
                description=description or "",
                price=price,
                stock=stock,
            )
            logger.info("product_created", extra={"product_id": product.id})
            return product

        product = Product.objects.select_for_update().filter(id=product_id).first()
        if product is None:
            raise ProductNotFoundError(product_id)

        product.name = name
        product.description = description or ""
        product.price = price
        product.stock = stock
        product.save(update_fields=["name", "description", "price", "stock"])
        logger.info("product_updated", extra={"product_id": product.id})
        return product

    @staticmethod
    def list_products() -> QuerySet[Product]:
        return Product.objects.all()

    @staticmethod
    def get_product(product_id: int) -> Product:
        product = Product.objects.filter(id=product_id).first()
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    @staticmethod
    def search_by_name(text: str) -> QuerySet[Product]:
        return Product.objects.filter(name__icontains=(text or "").strip())

    @staticmethod
    def list_available() -> QuerySet[Product]:
        return Product.objects.filter(stock__gt=0)

    @staticmethod
    @transaction.atomic
    def delete_product(product_id: int) -> None:
        if not Product.objects.filter(id=product_id).exists():
            raise ProductNotFoundError(product_id, f"Cannot delete. Product ID does not exist: {product_id}")
        if Product.objects.filter(id=product_id, order_items__isnull=False).exists():
            raise ProductInUseError(product_id)

        try:
            Product.objects.filter(id=product_id).delete()
        except ProtectedError as exc:
            raise ProductInUseError(product_id) from exc
        logger.info("product_deleted", extra={"product_id": product_id})
