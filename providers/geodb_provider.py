"""
Provider per GeoDB Cities (RapidAPI).

Provider terziario, richiede RAPIDAPI_KEY. Senza chiave il provider
risulta disabilitato e viene saltato dal search engine.
"""
from typing import List, Optional

from providers.base import BaseProvider
from core.exceptions import ProviderDisabledError
from core.models import LocationResult, LocationType, format_display_name
from utils.validators import safe_float


class GeoDBProvider(BaseProvider):
    """
    Provider per GeoDB Cities.

    Restituisce solo citta', ordinate per popolazione decrescente.
    """

    def __init__(self, provider_config, session=None):
        super().__init__("geodb", provider_config, session)

    @property
    def api_key(self) -> str:
        return self.config.headers.get("X-RapidAPI-Key", "")

    @property
    def is_enabled(self) -> bool:
        return self.config.enabled and bool(self.api_key)

    def query(
        self,
        search_text: str,
        location_type: Optional[LocationType] = None
    ) -> List[LocationResult]:
        if not self.api_key:
            raise ProviderDisabledError("GeoDB API key not configured", provider=self.name)

        # GeoDB cerca gia' solo citta': location_type non cambia la richiesta
        params = {
            "namePrefix": search_text,
            "limit": self.config.result_limit,
            "sort": "-population",
            "types": "CITY",
            "languageCode": self.config.language,
        }

        data = self._get_json(params)
        items = data.get("data") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []

        return self._keep_named([self._item_to_result(item) for item in items])

    def _item_to_result(self, item: dict) -> LocationResult:
        city = item.get("city") or item.get("name") or ""
        region = item.get("region") or ""
        country = item.get("country") or ""

        return LocationResult(
            name=city,
            city=city,
            state=region,
            country=country,
            display_name=format_display_name(city, None, region, country),
            latitude=safe_float(item.get("latitude")),
            longitude=safe_float(item.get("longitude")),
            location_type="city",
        )
