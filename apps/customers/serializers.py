from __future__ import annotations

from rest_framework import serializers

from .models import Customer, TaxProfile


class TaxProfileSerializer(serializers.ModelSerializer):
    customer_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = TaxProfile
        fields = ("id", "customer_id", "tax_id", "street", "city", "postal_code", "phone")


class CustomerSerializer(serializers.ModelSerializer):
    tax_profile = TaxProfileSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Customer
        fields = ("id", "full_name", "email", "registered_at", "is_active", "tax_profile")


class TaxProfileInputSerializer(serializers.Serializer):
    tax_id = serializers.CharField(max_length=20)
    street = serializers.CharField(max_length=150)
    city = serializers.CharField(max_length=100)
    postal_code = serializers.CharField(max_length=10)
    phone = serializers.CharField(max_length=20)


class CustomerRegisterSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=150)
    email = serializers.EmailField(max_length=100)
    tax_profile = TaxProfileInputSerializer(required=False, allow_null=True)
