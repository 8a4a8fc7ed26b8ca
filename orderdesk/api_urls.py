"""
API URL aggregation.

Aggregates app API routes under `/api/`.
"""

from django.urls import include, path

urlpatterns = [
    path("", include("apps.catalog.urls")),
    path("", include("apps.customers.urls")),
    path("", include("apps.orders.urls")),
]
