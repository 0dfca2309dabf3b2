"""
Provider per Photon (komoot, basato su OpenStreetMap).

Provider primario: nessuna API key, il piu' veloce.
"""
from typing import List, Optional

from providers.base import BaseProvider
from core.models import LocationResult, LocationType, format_display_name
from utils.validators import safe_float

# Restringe la ricerca ai centri abitati
SETTLEMENT_TAGS = ["place:city", "place:town", "place:village"]


class PhotonProvider(BaseProvider):
    """
    Provider per Photon.

    Risposta in formato GeoJSON: properties per i dati descrittivi,
    geometry.coordinates come [lon, lat].
    """

    def __init__(self, provider_config, session=None):
        super().__init__("photon", provider_config, session)

    def query(
        self,
        search_text: str,
        location_type: Optional[LocationType] = None
    ) -> List[LocationResult]:
        params = {
            "q": search_text,
            "limit": self.config.result_limit,
            "lang": self.config.language,
        }
        if location_type == LocationType.HOTEL:
            params["osm_tag"] = SETTLEMENT_TAGS

        data = self._get_json(params)
        if not isinstance(data, dict) or not data.get("features"):
            return []

        return self._keep_named([self._feature_to_result(f) for f in data["features"]])

    def _feature_to_result(self, feature: dict) -> LocationResult:
        """Converte una feature GeoJSON in LocationResult."""
        props = feature.get("properties") or {}
        coords = (feature.get("geometry") or {}).get("coordinates") or []

        name = props.get("name") or ""
        city = props.get("city") or name
        state = props.get("state") or ""
        country = props.get("country") or ""

        return LocationResult(
            name=name,
            city=city,
            state=state,
            country=country,
            display_name=format_display_name(name, props.get("city"), state, country),
            latitude=safe_float(coords[1]) if len(coords) > 1 else None,
            longitude=safe_float(coords[0]) if coords else None,
            location_type=props.get("osm_value") or "city",
        )
