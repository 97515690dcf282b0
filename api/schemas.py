"""
Pydantic schemas for FastAPI responses.

ReceiptResponse mirrors catalog.models.Receipt field for field so the JSON
contract of GET /receipts/{slug} matches the record schema used by the page.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog.models import Benefit, Ingredient, NutritionalInfo, Receipt, Tag


class ReceiptResponse(BaseModel):
    """Response model for a single receipt lookup."""
    id: str = Field(..., description="Unique identifier (UUID)")
    nutritional_info_id: Optional[str] = Field(None, description="Foreign key to nutritional_info")
    language: str = Field(..., description="Language code")
    slug: str = Field(..., description="URL-friendly key, unique per language")
    title: str = Field(..., description="Receipt title")
    perfect_for: Optional[str] = None
    image_url: Optional[str] = None
    image_alt_text: Optional[str] = None
    prep_time: Optional[str] = None
    calories: Optional[str] = None
    ingredients: List[Ingredient] = Field(default_factory=list)
    benefits: List[Benefit] = Field(default_factory=list)
    how_to_prepare: Optional[str] = None
    quote: Optional[str] = None
    tags: List[Tag] = Field(default_factory=list)
    category: Optional[str] = None
    nutritional_info: Optional[NutritionalInfo] = None

    @classmethod
    def from_receipt(cls, receipt: Receipt) -> "ReceiptResponse":
        return cls(**receipt.model_dump())


class HealthResponse(BaseModel):
    """Response model for the health endpoint."""
    status: str = Field(..., description="'ok' when the API is reachable")
    name: str
    version: str
    backend: str = Field(..., description="Configured receipts backend")
    backend_configured: bool = Field(..., description="Whether the backend's required variables are set")
    uptime_seconds: int


class ErrorResponse(BaseModel):
    """Error body returned by FastAPI's HTTPException handler."""
    detail: str
