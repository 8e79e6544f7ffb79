"""Reverse geocoding of coordinates to an Indian state and district (Nominatim)."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

from loguru import logger

from .http_client import HttpClient
from .models import ResolvedLocation


# Alternate/legacy names as returned by OSM, mapped to the names used on myScheme.
STATE_NORMALIZE: Mapping[str, str] = MappingProxyType(
    {
        "NCT of Delhi": "Delhi",
        "National Capital Territory of Delhi": "Delhi",
        "Jammu and Kashmir": "Jammu & Kashmir",
        "Andaman and Nicobar Islands": "Andaman & Nicobar Islands",
        "Dadra and Nagar Haveli and Daman and Diu": "Dadra & Nagar Haveli and Daman & Diu",
        "Orissa": "Odisha",
        "Pondicherry": "Puducherry",
    }
)

DISTRICT_KEYS = ("state_district", "district", "county")


class GeocodeError(Exception):
    def __init__(self, status_code: int):
        super().__init__(f"Reverse geocode failed: {status_code}")
        self.status_code = status_code


def normalize_state_name(name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    trimmed = name.strip()
    if not trimmed:
        return None
    return STATE_NORMALIZE.get(trimmed, trimmed)


def district_from_address(address: Mapping[str, Any]) -> Optional[str]:
    for key in DISTRICT_KEYS:
        value = address.get(key)
        if value:
            return str(value)
    return None


class ReverseGeocoder:
    def __init__(self, client: HttpClient, url: str):
        self.client = client
        self.url = url

    def resolve(self, lat: float, lon: float) -> ResolvedLocation:
        """Raises GeocodeError on a non-2xx upstream response."""
        params = {
            "format": "jsonv2",
            "lat": lat,
            "lon": lon,
            "zoom": 10,
            "addressdetails": 1,
        }
        resp = self.client.fetch(self.url, params=params)
        if not resp.ok:
            logger.warning(f"Reverse geocode HTTP {resp.status_code} for {lat},{lon}")
            raise GeocodeError(resp.status_code)
        data = resp.json() or {}
        address = data.get("address") or {}
        location = ResolvedLocation(
            state=normalize_state_name(address.get("state")),
            district=district_from_address(address),
            raw={"address": address},
        )
        logger.info(f"Resolved {lat},{lon} -> state={location.state!r} district={location.district!r}")
        return location
