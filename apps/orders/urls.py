from django.urls import path

from .views.api import (
    CustomerOrdersAPI,
    OrderCancelAPI,
    OrderDeliverAPI,
    OrderDetailAPI,
    OrderListCreateAPI,
    OrderShipAPI,
)

urlpatterns = [
    path("orders/", OrderListCreateAPI.as_view(), name="api_orders"),
    path("orders/<int:order_id>/", OrderDetailAPI.as_view(), name="api_order_detail"),
    path("orders/<int:order_id>/cancel/", OrderCancelAPI.as_view(), name="api_order_cancel"),
    path("orders/<int:order_id>/ship/", OrderShipAPI.as_view(), name="api_order_ship"),
    path("orders/<int:order_id>/deliver/", OrderDeliverAPI.as_view(), name="api_order_deliver"),
    path("customers/<int:customer_id>/orders/", CustomerOrdersAPI.as_view(), name="api_customer_orders"),
]
