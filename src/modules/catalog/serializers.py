"""Catalog DRF serializers (read-only)."""

from __future__ import annotations

from rest_framework import serializers

from modules.catalog.models import PriceBookEntry


class CatalogEntrySerializer(serializers.ModelSerializer):
    """A price book entry as shown in the product picker."""

    product_name = serializers.CharField(source="product.name", read_only=True)
    product_code = serializers.CharField(source="product.product_code", read_only=True)

    class Meta:
        model = PriceBookEntry
        fields = [
            "id",
            "product_id",
            "product_name",
            "product_code",
            "unit_price",
        ]
        read_only_fields = fields
