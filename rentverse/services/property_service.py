"""Property service — listings, favorites, ratings and catalogues from the core service.

Reads go through the mobile API (``/api/v1/m``). Listing create/update and the
owner's own listings live on the non-mobile base API (``/api/v1``).
"""

import logging
from typing import Any

from rentverse.api.client import ApiClient, response_data
from rentverse.errors import ApiError
from rentverse.schemas.base import Pagination
from rentverse.schemas.property import (
    Amenity,
    MyPropertiesResponse,
    Property,
    PropertyCreate,
    PropertyFilters,
    PropertyListResponse,
    PropertyType,
    PropertyUpdate,
)

logger = logging.getLogger(__name__)

NEARBY_LIMIT = 20
OWNER_LISTINGS_LIMIT = 100


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _properties(data: Any, key: str = "properties") -> list[Property]:
    items = data.get(key) if isinstance(data, dict) else None
    return [Property.model_validate(item) for item in items or []]


def _catalogue(data: Any, key: str) -> list[dict]:
    """Catalogue endpoints return either a bare list or ``{key: [...]}``."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return data.get(key) or []
    return []


class PropertyService:
    def __init__(self, api: ApiClient, base_api: ApiClient) -> None:
        self.api = api
        self.base_api = base_api

    async def get_properties(self, filters: PropertyFilters | None = None) -> PropertyListResponse:
        params = filters.to_params() if filters is not None else {}
        body = await self.api.get("/properties", params=params or None)
        data = response_data(body) or {}
        return PropertyListResponse(
            success=bool(body.get("success", True)) if isinstance(body, dict) else True,
            data=_properties(data),
            pagination=data.get("pagination") or Pagination(),
        )

    async def get_property(self, property_id: str) -> Property:
        body = await self.api.get(f"/properties/{property_id}")
        return Property.model_validate(response_data(body))

    async def get_nearby_properties(
        self, latitude: float, longitude: float, radius: float = 10
    ) -> list[Property]:
        """Listings within ``radius`` km, via location params on ``/properties``."""
        body = await self.api.get(
            "/properties",
            params={
                "latitude": latitude,
                "longitude": longitude,
                "radius": radius,
                "limit": NEARBY_LIMIT,
            },
        )
        return _properties(response_data(body))

    async def get_featured_properties(self, limit: int = 10) -> list[Property]:
        """Newest listings stand in for a featured feed."""
        body = await self.api.get("/properties", params={"limit": limit, "sortBy": "newest"})
        return _properties(response_data(body))

    async def toggle_favorite(self, property_id: str) -> bool:
        """Toggle the viewer's favorite flag; returns the new state."""
        body = await self.api.post(f"/properties/{property_id}/favorite")
        data = response_data(body) or {}
        return bool(data.get("isFavorite"))

    async def get_favorites(self) -> list[Property]:
        body = await self.api.get("/users/favorites")
        return _properties(response_data(body), key="favorites")

    async def rate_property(self, property_id: str, rating: int) -> Property:
        if not 1 <= rating <= 5:
            raise ValueError("Rating must be between 1 and 5")
        body = await self.api.post(f"/properties/{property_id}/rate", json={"rating": rating})
        return Property.model_validate(response_data(body))

    async def get_property_types(self) -> list[PropertyType]:
        """Property type catalogue; an unavailable catalogue yields an empty list."""
        try:
            body = await self.api.get("/property-types")
        except ApiError:
            logger.warning("Property types unavailable", exc_info=True)
            return []
        items = _catalogue(response_data(body), "propertyTypes")
        return [PropertyType.model_validate(item) for item in items]

    async def get_amenities(self) -> list[Amenity]:
        body = await self.api.get("/amenities")
        items = _catalogue(response_data(body), "amenities")
        return [Amenity.model_validate(item) for item in items]

    async def get_my_properties(self, owner_id: str) -> MyPropertiesResponse:
        """The owner's listings and summary.

        When the owner endpoint fails, the public list is filtered by
        ``owner_id`` instead and no summary is returned.
        """
        try:
            body = await self.base_api.get(
                "/properties/my-properties", params={"limit": OWNER_LISTINGS_LIMIT}
            )
        except ApiError as exc:
            logger.warning("Owner listings endpoint failed (%s); filtering public list", exc)
            body = await self.base_api.get("/properties", params={"limit": OWNER_LISTINGS_LIMIT})
            owned = [p for p in _properties(response_data(body)) if p.owner_id == owner_id]
            return MyPropertiesResponse(properties=owned)

        data = response_data(body) or {}
        return MyPropertiesResponse(properties=_properties(data), summary=data.get("summary"))

    async def create_property(self, payload: PropertyCreate) -> Property:
        logger.info("Creating listing %r", payload.title)
        body = await self.base_api.post("/properties", json=payload.to_wire())
        prop = Property.model_validate(response_data(body))
        logger.info("Created listing %s", prop.id)
        return prop

    async def update_property(self, property_id: str, payload: PropertyUpdate) -> Property:
        logger.info("Updating listing %s", property_id)
        body = await self.base_api.put(f"/properties/{property_id}", json=payload.to_wire())
        return Property.model_validate(response_data(body))
