"""Order DRF serializers.

Input serializers only validate request shape; the business checks live in
``OrderService``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderItem


class OrderSerializer(serializers.ModelSerializer):
    account_number = serializers.CharField(source="account.account_number", read_only=True)
    is_activated = serializers.BooleanField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "account_id",
            "account_number",
            "order_type",
            "status",
            "price_book_id",
            "is_activated",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    product_code = serializers.CharField(source="product.product_code", read_only=True)
    total_price = serializers.DecimalField(max_digits=34, decimal_places=4, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "product_code",
            "price_book_entry_id",
            "unit_price",
            "quantity",
            "total_price",
        ]
        read_only_fields = fields


class SelectedEntrySerializer(serializers.Serializer):
    """One selected catalog row; only ``id`` is used."""

    id = serializers.UUIDField()


class AddItemsSerializer(serializers.Serializer):
    entries = SelectedEntrySerializer(many=True, allow_empty=False)


class WorkflowResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    outcome = serializers.CharField()
    reason = serializers.CharField(allow_null=True)
    detail = serializers.CharField(allow_blank=True)
    skipped_steps = serializers.ListField(child=serializers.CharField())
    created_count = serializers.IntegerField(required=False)
    updated_count = serializers.IntegerField(required=False)
    http_status = serializers.IntegerField(required=False)
