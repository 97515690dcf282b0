"""
Record schema for receipts and their nutritional information.

This module defines the contract between the hosted data store and the
rendering logic. All models are immutable snapshots: the detail page never
mutates a record, it only fetches and displays it.

# NOTE: Every optional column is independently nullable. A column that is
    missing from a fetched row is treated exactly like an explicit null,
    never as a validation error. Unknown extra columns are ignored.

Nested JSON columns (ingredients, benefits, tags) arrive either as bare
strings or as small objects depending on how the row was authored, so each
of them has an explicit model that accepts both shapes:
- Ingredient: "mango" or {"name": "mango", "quantity": "1 cup"}
  ({"ingredient": "mango"} is accepted as well)
  ({"amount": 200, "unit": "g"} is folded into quantity)
- Benefit: "Rich in fiber" or {"title": "Fiber", "description": "..."}
- Tag: "vegan" or {"text": "vegan", "style": "green"}

Numbers are kept as their string form. An object entry with none of the
recognised keys is skipped with a warning instead of failing the record.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, int, float)

# Keys that carry the display text of an object entry, per list column
_ENTRY_KEYS = {
    "ingredients": ("name", "ingredient"),
    "benefits": ("text", "description", "title"),
    "tags": ("text", "label", "name"),
}


def _clean_text(value: Any) -> Optional[str]:
    """Return value as a stripped string, or None for empty/missing values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class NutritionalInfo(BaseModel):
    """
    Nutrition breakdown owned by exactly one receipt.

    Six macro measurements are in kcal or grams, sodium is in milligrams.
    """
    id: str = Field(..., description="Unique identifier (UUID)")
    calories_kcal: Optional[float] = Field(None, description="Energy in kilocalories")
    protein_g: Optional[float] = Field(None, description="Protein in grams")
    carbohydrates_g: Optional[float] = Field(None, description="Carbohydrates in grams")
    fats_g: Optional[float] = Field(None, description="Fats in grams")
    fiber_g: Optional[float] = Field(None, description="Fiber in grams")
    sugars_g: Optional[float] = Field(None, description="Sugars in grams")
    sodium_mg: Optional[float] = Field(None, description="Sodium in milligrams")

    model_config = ConfigDict(frozen=True, extra="ignore")


class Ingredient(BaseModel):
    """One entry of a receipt's ingredient list."""
    name: str = Field(..., description="Ingredient name")
    quantity: Optional[str] = Field(None, description="Free-text quantity, e.g. '1 cup' or '200 g'")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _coerce_shape(cls, value: Any) -> Any:
        if isinstance(value, _SCALAR_TYPES):
            return {"name": str(value)}
        if isinstance(value, dict):
            data = dict(value)
            if data.get("name") is None and data.get("ingredient") is not None:
                data["name"] = data["ingredient"]
            quantity = _clean_text(data.get("quantity"))
            if quantity is None:
                parts = [_clean_text(data.get(key)) for key in ("amount", "unit")]
                parts = [part for part in parts if part]
                quantity = " ".join(parts) or None
            data["quantity"] = quantity
            if data.get("name") is not None:
                data["name"] = str(data["name"])
            return data
        return value

    @property
    def display_text(self) -> str:
        """Text shown in the ingredient list."""
        if self.quantity:
            return f"{self.quantity} {self.name}"
        return self.name


class Benefit(BaseModel):
    """One entry of a receipt's benefit list."""
    text: str = Field(..., description="Benefit description")
    title: Optional[str] = Field(None, description="Short headline for the benefit")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _coerce_shape(cls, value: Any) -> Any:
        if isinstance(value, _SCALAR_TYPES):
            return {"text": str(value)}
        if isinstance(value, dict):
            text = value.get("text") or value.get("description") or value.get("title")
            title = value.get("title") if value.get("text") or value.get("description") else None
            return {"text": _clean_text(text), "title": _clean_text(title)}
        return value

    @property
    def display_text(self) -> str:
        if self.title:
            return f"{self.title}: {self.text}"
        return self.text


class Tag(BaseModel):
    """A tag label with an optional style classifier (e.g. a color name)."""
    text: str = Field(..., description="Tag label")
    style: Optional[str] = Field(None, description="Style classifier used by the view")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _coerce_shape(cls, value: Any) -> Any:
        if isinstance(value, _SCALAR_TYPES):
            return {"text": str(value)}
        if isinstance(value, dict):
            text = value.get("text") or value.get("label") or value.get("name")
            style = value.get("style") or value.get("variant") or value.get("color")
            return {"text": _clean_text(text), "style": _clean_text(style)}
        return value


class Receipt(BaseModel):
    """
    A recipe/food-guide record ("receipt") as stored in the `receipts` table.

    The (slug, language) pair identifies at most one record.
    """
    id: str = Field(..., description="Unique identifier (UUID)")
    nutritional_info_id: Optional[str] = Field(None, description="Foreign key to nutritional_info")
    language: str = Field(..., description="Language code, e.g. 'en' or 'es'")
    slug: str = Field(..., description="URL-friendly key, unique per language")
    title: str = Field(..., description="Receipt title")
    perfect_for: Optional[str] = Field(None, description="Who the receipt is perfect for")
    image_url: Optional[str] = Field(None, description="URL of the receipt image")
    image_alt_text: Optional[str] = Field(None, description="Alt text for the image")
    prep_time: Optional[str] = Field(None, description="Preparation time as display text")
    calories: Optional[str] = Field(None, description="Calorie display string (independent of nutritional_info)")
    ingredients: List[Ingredient] = Field(default_factory=list, description="Ordered ingredient entries")
    benefits: List[Benefit] = Field(default_factory=list, description="Ordered benefit entries")
    how_to_prepare: Optional[str] = Field(None, description="Free-text preparation instructions")
    quote: Optional[str] = Field(None, description="A quote related to the receipt")
    tags: List[Tag] = Field(default_factory=list, description="Ordered tags")
    category: Optional[str] = Field(None, description="Category label")
    nutritional_info: Optional[NutritionalInfo] = Field(None, description="Nested nutrition breakdown")

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "id": "4f7c2a4e-1d1b-4b7a-9d8e-2a7b8c9d0e1f",
                "nutritional_info_id": "9a1b2c3d-0000-4000-8000-000000000001",
                "language": "en",
                "slug": "mango-smoothie",
                "title": "Mango Smoothie",
                "perfect_for": "A quick summer breakfast",
                "prep_time": "5 min",
                "calories": "180 kcal",
                "ingredients": ["mango", "yogurt"],
                "tags": [{"text": "vegetarian", "style": "green"}],
                "nutritional_info": {"id": "9a1b2c3d-0000-4000-8000-000000000001", "calories_kcal": 180},
            }
        },
    )

    @field_validator("ingredients", "benefits", "tags", mode="before")
    @classmethod
    def _clean_entries(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        keys = _ENTRY_KEYS[info.field_name]
        entries = []
        for entry in value:
            if entry is None:
                continue
            if isinstance(entry, dict) and not any(_clean_text(entry.get(key)) for key in keys):
                logger.warning("Skipping %s entry without any of %s: %r", info.field_name, keys, entry)
                continue
            entries.append(entry)
        return entries

    @field_validator(
        "nutritional_info_id", "perfect_for", "image_url", "image_alt_text", "prep_time",
        "calories", "how_to_prepare", "quote", "category",
        mode="before",
    )
    @classmethod
    def _blank_text_is_null(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Receipt":
        """
        Build a receipt from a backend row.

        Args:
            row: Column mapping as returned by the backend. A nested
                 `nutritional_info` mapping (or None) is expected for the join.

        Returns:
            Validated, immutable Receipt
        """
        return cls.model_validate(row)
