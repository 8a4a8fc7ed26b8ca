from django.urls import path

from .views.api import ProductDetailAPI, ProductListCreateAPI

urlpatterns = [
    path("products/", ProductListCreateAPI.as_view(), name="api_products"),
    path("products/<int:product_id>/", ProductDetailAPI.as_view(), name="api_product_detail"),
]
