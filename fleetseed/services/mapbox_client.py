# fleetseed/services/mapbox_client.py
"""
Mapbox client used to enrich demo trips.

Directions:  GET {directions_url}{lon},{lat};{lon},{lat}.json?steps=true
Geocoding:   GET {geocoding_url}{lon},{lat}.json?types=address

Mapbox is rate limited and occasionally flaky. Every failure (transport error,
non-200 status, unexpected payload) surfaces as SoftEnrichmentError so the
trip factory can skip that trip. There are no retries.
"""

from dataclasses import dataclass
from typing import List, Optional

import httpx

from fleetseed.config import Settings
from fleetseed.errors import SoftEnrichmentError
from fleetseed.services.geometry import Point
from fleetseed.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RouteStep:
    latitude: float
    longitude: float
    duration: float          # seconds spent on the segment ending at this step


@dataclass
class Address:
    number: Optional[str]
    street: Optional[str]

    def formatted(self) -> str:
        """'<number> <street>', or '' when either part is unknown."""
        if self.number and self.street:
            return f"{self.number} {self.street}"
        return ""


def _coordinate(point: Point) -> str:
    # Mapbox expects longitude first
    return f"{point.longitude},{point.latitude}"


class MapboxClient:
    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self._token = settings.MAPBOX_TOKEN
        self._directions_url = settings.MAPBOX_DIRECTIONS_URL
        self._geocoding_url = settings.MAPBOX_GEOCODING_URL
        self._client = client or httpx.AsyncClient(timeout=settings.MAPBOX_TIMEOUT_SECONDS)

    async def _get_json(self, url: str, params: dict) -> dict:
        params = {**params, "access_token": self._token}
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise SoftEnrichmentError(f"Mapbox request failed: {e}") from e

        if response.status_code != 200:
            raise SoftEnrichmentError(f"Mapbox returned HTTP {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            raise SoftEnrichmentError("Mapbox returned a non-JSON body") from e

    async def route(self, origin: Point, destination: Point) -> List[RouteStep]:
        """Cycling route as ordered waypoints, each with the duration of the segment leading to it."""
        url = f"{self._directions_url}{_coordinate(origin)};{_coordinate(destination)}.json"
        payload = await self._get_json(url, {"steps": "true", "geometries": "geojson", "overview": "false"})

        try:
            steps = payload["routes"][0]["legs"][0]["steps"]
            route = [
                RouteStep(
                    latitude=float(step["maneuver"]["location"][1]),
                    longitude=float(step["maneuver"]["location"][0]),
                    duration=float(step["duration"]),
                )
                for step in steps
            ]
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise SoftEnrichmentError(f"Unexpected directions payload: {e!r}") from e

        if not route:
            raise SoftEnrichmentError("Mapbox returned an empty route")
        return route

    async def address_for(self, point: Point) -> Address:
        url = f"{self._geocoding_url}{_coordinate(point)}.json"
        payload = await self._get_json(url, {"types": "address", "limit": 1})

        features = payload.get("features") if isinstance(payload, dict) else None
        if features is None:
            raise SoftEnrichmentError("Unexpected geocoding payload")
        if not features:
            return Address(number=None, street=None)
        feature = features[0]
        return Address(number=feature.get("address"), street=feature.get("text"))

    async def aclose(self):
        await self._client.aclose()
