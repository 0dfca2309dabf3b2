"""
Provider per Nominatim (OpenStreetMap).

Provider secondario. La usage policy richiede uno User-Agent
identificativo e al massimo 1 richiesta al secondo.
"""
from typing import List, Optional

from providers.base import BaseProvider
from core.models import LocationResult, LocationType, format_display_name
from utils.validators import safe_float


class NominatimProvider(BaseProvider):
    """Provider per Nominatim (endpoint /search, formato json)."""

    def __init__(self, provider_config, session=None):
        super().__init__("nominatim", provider_config, session)

    def query(
        self,
        search_text: str,
        location_type: Optional[LocationType] = None
    ) -> List[LocationResult]:
        params = {
            "q": search_text,
            "format": "json",
            "limit": self.config.result_limit,
            "addressdetails": 1,
            "accept-language": self.config.language,
        }
        if location_type == LocationType.HOTEL:
            params["featuretype"] = "city"

        data = self._get_json(params)
        if not isinstance(data, list):
            return []

        return self._keep_named([self._item_to_result(item) for item in data])

    def _item_to_result(self, item: dict) -> LocationResult:
        addr = item.get("address") or {}
        settlement = addr.get("city") or addr.get("town") or addr.get("village") or ""
        state = addr.get("state") or ""
        country = addr.get("country") or ""

        return LocationResult(
            name=settlement or item.get("name") or "",
            city=settlement,
            state=state,
            country=country,
            display_name=format_display_name(settlement, None, state, country),
            latitude=safe_float(item.get("lat")),
            longitude=safe_float(item.get("lon")),
            location_type=item.get("type") or "city",
        )
