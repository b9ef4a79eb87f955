"""Pydantic v2 schemas for the AI price-prediction service.

The AI service speaks snake_case, so these models use plain ``BaseModel``.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from rentverse.models.enums import AIFurnishedType, PropertyTypeName

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PredictionRequest(BaseModel):
    """Mirrors the AI service's ``PropertyPredictionRequest``."""

    property_type: PropertyTypeName
    bedrooms: int
    bathrooms: int
    area: float
    furnished: AIFurnishedType
    location: str


class ListingApprovalRequest(PredictionRequest):
    asking_price: float
    property_age: int | None = None
    parking_spaces: int | None = None
    floor_level: int | None = None
    facilities: list[str] | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PriceRange(BaseModel):
    min: float
    max: float


class PredictionResponse(BaseModel):
    """Mirrors the AI service's ``PredictionResponse``."""

    model_config = ConfigDict(protected_namespaces=())

    status: str = "success"
    predicted_price: float
    price_range: PriceRange
    confidence_score: float | None = None
    currency: str
    model_version: str | None = None
    features_used: list[str] = Field(default_factory=list)


class ListingApprovalResponse(BaseModel):
    approval_status: Literal["approved", "rejected", "needs_review"]
    confidence_score: float
    predicted_price: float
    asking_price: float
    price_deviation: float
    approval_reasons: list[str] = Field(default_factory=list)
    recommendations: list[str] | None = None
    status: str = "success"


class PredictionDisplay(BaseModel):
    """Display strings derived from a prediction."""

    predicted_price: str
    price_min: str
    price_max: str
    confidence: str
    currency: str
