from django.apps import AppConfig
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


class CustomersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.customers"
    verbose_name = "Customers"

    def ready(self) -> None:
        env = (getattr(settings, "ENVIRONMENT", "") or "").strip().lower()
        if env in {"prod", "production"} and getattr(settings, "DEBUG", False):
            raise ImproperlyConfigured("DEBUG must be False in production.")
