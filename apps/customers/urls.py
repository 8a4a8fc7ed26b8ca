from django.urls import path

from .views.api import CustomerDeactivateAPI, CustomerDetailAPI, CustomerListCreateAPI, TaxProfileLookupAPI

urlpatterns = [
    path("customers/", CustomerListCreateAPI.as_view(), name="api_customers"),
    path("customers/<int:customer_id>/", CustomerDetailAPI.as_view(), name="api_customer_detail"),
    path(
        "customers/<int:customer_id>/deactivate/",
        CustomerDeactivateAPI.as_view(),
        name="api_customer_deactivate",
    ),
    path("tax-profiles/<str:tax_id>/", TaxProfileLookupAPI.as_view(), name="api_tax_profile_detail"),
]
