from __future__ import annotations

from rest_framework import serializers

from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    product_id = serializers.IntegerField(read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ("id", "product_id", "product_name", "quantity", "unit_price", "subtotal")


class OrderSerializer(serializers.ModelSerializer):
    customer_id = serializers.IntegerField(read_only=True)
    customer_name = serializers.CharField(source="customer.full_name", read_only=True)
    total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = (
            "id",
            "customer_id",
            "customer_name",
            "created_at",
            "status",
            "street",
            "city",
            "postal_code",
            "total",
            "items",
        )


class OrderLineInputSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)


class OrderCreateInputSerializer(serializers.Serializer):
    customer_id = serializers.IntegerField()
    street = serializers.CharField(max_length=150)
    city = serializers.CharField(max_length=100)
    postal_code = serializers.CharField(max_length=10)
    items = OrderLineInputSerializer(many=True)
