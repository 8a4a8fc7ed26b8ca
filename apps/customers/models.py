from django.db import models


class Customer(models.Model):
    full_name = models.CharField(max_length=150)
    email = models.EmailField(max_length=100, unique=True)
    registered_at = models.DateTimeField(auto_now_add=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["is_active"], name="customer_is_active_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}>"


class TaxProfile(models.Model):
    customer = models.OneToOneField(Customer, on_delete=models.CASCADE, related_name="tax_profile")
    tax_id = models.CharField(max_length=20, db_index=True)
    street = models.CharField(max_length=150)
    city = models.CharField(max_length=100)
    postal_code = models.CharField(max_length=10)
    phone = models.CharField(max_length=20)

    def __str__(self) -> str:
        return f"TaxProfile(customer_id={self.customer_id}, tax_id={self.tax_id})"
