"""AI service — rental price prediction and listing approval.

The prediction service is an opaque remote function: requests are validated
before they are sent and responses are shape-checked before they are trusted.
"""

import logging
from typing import Any

from pydantic import ValidationError

from rentverse.api.client import ApiClient
from rentverse.errors import INVALID_RESPONSE, ApiError
from rentverse.models.enums import (
    AIFurnishedType,
    FurnishedType,
    PropertyTypeName,
    is_valid_ai_furnished_type,
    to_ai_furnished,
)
from rentverse.schemas.prediction import (
    ListingApprovalRequest,
    ListingApprovalResponse,
    PredictionDisplay,
    PredictionRequest,
    PredictionResponse,
)
from rentverse.utils.formatting import format_currency
from rentverse.validators import parse_prediction_request

logger = logging.getLogger(__name__)

PRICE_ENDPOINT = "/api/v1/classify/price"
APPROVAL_ENDPOINT = "/api/v1/classify/approval"

MIN_ESTIMATED_CONFIDENCE = 0.75
MAX_ESTIMATED_CONFIDENCE = 0.92


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def create_prediction_request(
    property_type: PropertyTypeName | str,
    bedrooms: int,
    bathrooms: int,
    area: float,
    furnished: FurnishedType | AIFurnishedType | str,
    location: str,
) -> PredictionRequest:
    """Build a prediction request, translating an app-facing furnished value.

    Values already in the AI vocabulary pass through unchanged.

    Raises:
        ValidationFailedError: If the assembled request fails validation.
        ValueError: If ``furnished`` belongs to neither vocabulary.
    """
    ai_furnished = furnished if is_valid_ai_furnished_type(furnished) else to_ai_furnished(furnished)
    return parse_prediction_request(
        {
            "property_type": property_type,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "area": area,
            "furnished": ai_furnished,
            "location": location,
        }
    )


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid_prediction_response(data: Any) -> bool:
    """Shape check: numeric ``predicted_price`` and range bounds, string ``currency``."""
    if not isinstance(data, dict):
        return False
    price_range = data.get("price_range")
    return (
        _is_number(data.get("predicted_price"))
        and isinstance(price_range, dict)
        and _is_number(price_range.get("min"))
        and _is_number(price_range.get("max"))
        and isinstance(data.get("currency"), str)
    )


def estimate_confidence(response: PredictionResponse) -> float:
    """Confidence derived from the width of the price range.

    A narrower range relative to its midpoint scores higher; higher predicted
    prices are nudged down. Always within [0.75, 0.92].
    """
    low, high = response.price_range.min, response.price_range.max
    midpoint = (low + high) / 2
    base = 1 - (high - low) / midpoint if midpoint > 0 else 0.0

    if response.predicted_price > 3000:
        base -= 0.03
    elif response.predicted_price > 2000:
        base -= 0.01
    else:
        base += 0.02
    return max(MIN_ESTIMATED_CONFIDENCE, min(MAX_ESTIMATED_CONFIDENCE, base))


def format_prediction_result(response: PredictionResponse) -> PredictionDisplay:
    confidence = response.confidence_score
    if confidence is None:
        confidence = estimate_confidence(response)
    return PredictionDisplay(
        predicted_price=format_currency(response.predicted_price),
        price_min=format_currency(response.price_range.min),
        price_max=format_currency(response.price_range.max),
        confidence=f"{confidence * 100:.1f}%",
        currency=response.currency,
    )


# ---------------------------------------------------------------------------
# Remote calls
# ---------------------------------------------------------------------------


class AIService:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def predict_price(self, request: PredictionRequest | dict[str, Any]) -> PredictionResponse:
        """Predict a monthly rent.

        Raises:
            ValidationFailedError: Invalid request; nothing is sent.
            ApiError: Transport failure, or status 500 with ``INVALID_RESPONSE``
                when the reply does not have the expected shape.
        """
        payload = parse_prediction_request(request)
        body = await self.api.post(PRICE_ENDPOINT, json=payload.model_dump(mode="json"))
        if not is_valid_prediction_response(body):
            logger.warning("Unexpected prediction response: %r", body)
            raise ApiError(500, "Invalid response format from AI service", INVALID_RESPONSE)

        result = PredictionResponse.model_validate(body)
        logger.info(
            "Predicted %s %s for %s in %s",
            result.predicted_price, result.currency, payload.property_type.value, payload.location,
        )
        return result

    async def predict_price_simple(
        self,
        property_type: PropertyTypeName | str,
        bedrooms: int,
        bathrooms: int,
        area: float,
        furnished: FurnishedType | AIFurnishedType | str,
        location: str,
    ) -> PredictionResponse:
        request = create_prediction_request(property_type, bedrooms, bathrooms, area, furnished, location)
        return await self.predict_price(request)

    async def get_listing_approval(self, request: ListingApprovalRequest) -> ListingApprovalResponse:
        body = await self.api.post(APPROVAL_ENDPOINT, json=request.model_dump(mode="json", exclude_none=True))
        try:
            return ListingApprovalResponse.model_validate(body)
        except ValidationError as exc:
            raise ApiError(500, "Invalid response format from AI service", INVALID_RESPONSE) from exc
