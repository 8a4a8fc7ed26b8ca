from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from orderdesk.api_errors import error_response, invalid_input_response

from ..domain.errors import CatalogDomainError
from ..serializers import ProductInputSerializer, ProductSerializer
from ..services.product_service import ProductService


def _truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes"}


class ProductListCreateAPI(APIView):
    def get(self, request):
        query = request.query_params.get("q")
        if query:
            products = ProductService.search_by_name(query)
        elif _truthy(request.query_params.get("available")):
            products = ProductService.list_available()
        else:
            products = ProductService.list_products()
        return Response(ProductSerializer(products, many=True).data)

    def post(self, request):
        serializer = ProductInputSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors, action="product_create")
        try:
            product = ProductService.save_product(**serializer.validated_data)
        except CatalogDomainError as exc:
            return error_response(exc, action="product_create")
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class ProductDetailAPI(APIView):
    def get(self, request, product_id: int):
        try:
            product = ProductService.get_product(product_id)
        except CatalogDomainError as exc:
            return error_response(exc, action="product_detail")
        return Response(ProductSerializer(product).data)

    def put(self, request, product_id: int):
        serializer = ProductInputSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors, action="product_update")
        try:
            product = ProductService.save_product(product_id=product_id, **serializer.validated_data)
        except CatalogDomainError as exc:
            return error_response(exc, action="product_update")
        return Response(ProductSerializer(product).data)

    def delete(self, request, product_id: int):
        try:
            ProductService.delete_product(product_id)
        except CatalogDomainError as exc:
            return error_response(exc, action="product_delete")
        return Response(status=status.HTTP_204_NO_CONTENT)
