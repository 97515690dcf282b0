"""
Tests for the receipt record schema.

These tests verify that:
- Absent and null columns are treated the same way, never as errors
- Nested JSON columns accept both bare strings and objects
- The nested nutritional info is parsed when present
"""

import logging

import pytest
from pydantic import ValidationError

from catalog.models import Benefit, Ingredient, NutritionalInfo, Receipt, Tag


class TestReceiptSchema:
    """Test cases for Receipt.from_row."""

    def test_full_row_parses_nested_nutrition(self, mango_row):
        """Test that a full row keeps its nested nutrition object."""
        receipt = Receipt.from_row(mango_row)

        assert receipt.slug == "mango-smoothie"
        assert receipt.language == "en"
        assert isinstance(receipt.nutritional_info, NutritionalInfo)
        assert receipt.nutritional_info.calories_kcal == 180
        assert receipt.nutritional_info.sodium_mg == 60

    def test_missing_optional_columns_are_null(self, minimal_row):
        """Test that a row with only required columns is valid."""
        receipt = Receipt.from_row(minimal_row)

        assert receipt.perfect_for is None
        assert receipt.image_url is None
        assert receipt.prep_time is None
        assert receipt.calories is None
        assert receipt.how_to_prepare is None
        assert receipt.nutritional_info is None
        assert receipt.ingredients == []
        assert receipt.benefits == []
        assert receipt.tags == []

    def test_null_sequences_become_empty_lists(self, minimal_row):
        """Test that null JSON columns become empty lists."""
        minimal_row.update({"ingredients": None, "benefits": None, "tags": None})
        receipt = Receipt.from_row(minimal_row)

        assert receipt.ingredients == []
        assert receipt.benefits == []
        assert receipt.tags == []

    def test_blank_strings_are_null(self, minimal_row):
        """Test that blank optional strings are treated as absent."""
        minimal_row.update({"image_url": "  ", "quote": ""})
        receipt = Receipt.from_row(minimal_row)

        assert receipt.image_url is None
        assert receipt.quote is None

    def test_unknown_columns_are_ignored(self, minimal_row):
        """Test that extra backend columns don't break parsing."""
        minimal_row["created_at"] = "2024-05-01T10:00:00Z"
        receipt = Receipt.from_row(minimal_row)
        assert not hasattr(receipt, "created_at")

    def test_missing_title_is_rejected(self, minimal_row):
        """Test that required columns are still enforced."""
        del minimal_row["title"]
        with pytest.raises(ValidationError):
            Receipt.from_row(minimal_row)

    def test_nutrition_fields_are_independently_nullable(self, minimal_row):
        """Test that a nutrition object with only an id is valid."""
        minimal_row["nutritional_info"] = {"id": "n-1", "protein_g": 4}
        receipt = Receipt.from_row(minimal_row)

        assert receipt.nutritional_info.protein_g == 4
        assert receipt.nutritional_info.calories_kcal is None
        assert receipt.nutritional_info.fiber_g is None

    def test_receipt_is_immutable(self, mango_receipt):
        """Test that fetched records cannot be modified."""
        with pytest.raises(ValidationError):
            mango_receipt.title = "Changed"


class TestNestedShapes:
    """Test cases for ingredient, benefit and tag shapes."""

    def test_ingredient_from_string(self):
        ingredient = Ingredient.model_validate("mango")
        assert ingredient.name == "mango"
        assert ingredient.quantity is None
        assert ingredient.display_text == "mango"

    def test_ingredient_from_object_with_quantity(self):
        ingredient = Ingredient.model_validate({"name": "red lentils", "quantity": "200 g"})
        assert ingredient.display_text == "200 g red lentils"

    def test_ingredient_amount_and_unit_fold_into_quantity(self):
        """Test that numeric amount + unit become the quantity text."""
        ingredient = Ingredient.model_validate({"name": "vegetable stock", "amount": 1, "unit": "l"})
        assert ingredient.quantity == "1 l"

    def test_benefit_shapes(self):
        assert Benefit.model_validate("Rich in fiber").display_text == "Rich in fiber"
        benefit = Benefit.model_validate({"title": "Probiotics", "description": "Supports digestion"})
        assert benefit.title == "Probiotics"
        assert benefit.display_text == "Probiotics: Supports digestion"

    def test_benefit_with_only_title(self):
        benefit = Benefit.model_validate({"title": "Vegan"})
        assert benefit.text == "Vegan"
        assert benefit.title is None

    def test_tag_shapes(self):
        assert Tag.model_validate("quick") == Tag(text="quick", style=None)
        assert Tag.model_validate({"label": "vegan", "variant": "green"}) == Tag(text="vegan", style="green")

    def test_ingredient_order_is_preserved(self, minimal_row):
        minimal_row["ingredients"] = ["c", "a", "b"]
        receipt = Receipt.from_row(minimal_row)
        assert [i.name for i in receipt.ingredients] == ["c", "a", "b"]

    def test_numeric_entries_become_text(self, minimal_row):
        """Test that numbers in list columns are kept as their string form."""
        minimal_row["ingredients"] = [1, "egg"]
        minimal_row["tags"] = ["vegan", 2024]
        receipt = Receipt.from_row(minimal_row)
        assert [i.name for i in receipt.ingredients] == ["1", "egg"]
        assert [t.text for t in receipt.tags] == ["vegan", "2024"]

    def test_ingredient_key_is_accepted(self, minimal_row):
        minimal_row["ingredients"] = ["mango", {"ingredient": "yogurt", "quantity": "1 cup"}]
        receipt = Receipt.from_row(minimal_row)
        assert [i.display_text for i in receipt.ingredients] == ["mango", "1 cup yogurt"]

    def test_unrecognised_entries_are_skipped(self, minimal_row, caplog):
        """Test that an object entry without display text does not fail the record."""
        minimal_row["ingredients"] = [{"amount": 2}, "egg", None]
        minimal_row["benefits"] = [{"icon": "leaf"}, "Rich in fiber"]
        minimal_row["tags"] = [{"style": "green"}, {"text": "quick"}]

        with caplog.at_level(logging.WARNING, logger="catalog.models"):
            receipt = Receipt.from_row(minimal_row)

        assert [i.name for i in receipt.ingredients] == ["egg"]
        assert [b.text for b in receipt.benefits] == ["Rich in fiber"]
        assert [t.text for t in receipt.tags] == ["quick"]
        assert "Skipping ingredients entry" in caplog.text
