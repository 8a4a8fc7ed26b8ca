"""
URL configuration for the orderdesk project.

The JSON API lives under `/api/`; the Django admin under `/admin/`.
"""

from django.contrib import admin
from django.urls import include, path

handler404 = "orderdesk.error_views.handle_404"
handler500 = "orderdesk.error_views.handle_500"

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("orderdesk.api_urls")),
]
