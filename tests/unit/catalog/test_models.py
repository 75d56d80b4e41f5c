"""Unit tests for catalog models and their database constraints."""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from modules.catalog.models import PriceBook, PriceBookEntry, Product

pytestmark = pytest.mark.unit


class TestPriceBook:
    def test_only_one_standard_price_book(self, standard_book):
        with pytest.raises(IntegrityError), transaction.atomic():
            PriceBook.objects.create(name="Second Standard", is_standard=True)

    def test_any_number_of_custom_price_books(self, standard_book):
        PriceBook.objects.create(name="Partner A")
        PriceBook.objects.create(name="Partner B")
        assert PriceBook.objects.filter(is_standard=False).count() == 2

    def test_str_marks_standard(self, standard_book):
        assert str(standard_book) == "Standard Price Book (standard)"


class TestPriceBookEntry:
    def test_one_entry_per_product_and_book(self, make_entry, standard_book):
        entry = make_entry("GenWatt Diesel 10kW", "GC1040", "5000.00")
        with pytest.raises(IntegrityError), transaction.atomic():
            PriceBookEntry.objects.create(
                product=entry.product,
                price_book=standard_book,
                unit_price=Decimal("4000.00"),
            )

    def test_same_product_in_two_books(self, make_entry, custom_book):
        entry = make_entry("GenWatt Diesel 10kW", "GC1040", "5000.00")
        other = PriceBookEntry.objects.create(
            product=entry.product, price_book=custom_book, unit_price=Decimal("4500.00")
        )
        assert other.product_id == entry.product_id

    def test_negative_price_rejected(self, standard_book):
        product = Product.objects.create(name="Broken", product_code="BRK")
        with pytest.raises(IntegrityError), transaction.atomic():
            PriceBookEntry.objects.create(
                product=product, price_book=standard_book, unit_price=Decimal("-1.00")
            )


def test_product_str_includes_code():
    assert str(Product(name="SLA: Gold", product_code="SL9060")) == "SL9060 - SLA: Gold"
    assert str(Product(name="Loose Item")) == "Loose Item"
