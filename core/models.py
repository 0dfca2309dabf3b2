"""
Modelli dati per Location Autocomplete.

Questo modulo definisce tutti i dataclass utilizzati nel sistema:
- LocationResult: localita' normalizzata, comune a tutti i provider
- SearchResponse: risultato di una ricerca con fonte e flag cache
- SearchStats: contatori di utilizzo del servizio
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, List, Any
from enum import Enum


class LocationType(Enum):
    """Tipo di ricerca richiesto dal chiamante."""
    FLIGHT = "flight"
    TRAIN = "train"
    BUS = "bus"
    HOTEL = "hotel"


def format_display_name(
    name: Optional[str],
    city: Optional[str],
    state: Optional[str],
    country: Optional[str]
) -> str:
    """
    Compone il nome visualizzato: nome (o citta'), regione, paese.

    Le parti vuote vengono saltate.
    """
    parts = []

    if name:
        parts.append(name)
    elif city:
        parts.append(city)

    if state:
        parts.append(state)
    if country:
        parts.append(country)

    return ", ".join(parts)


@dataclass(frozen=True)
class LocationResult:
    """
    Localita' normalizzata prodotta da un provider.

    Immutabile. I provider scartano i risultati senza nome prima
    di restituirli.
    """
    name: str
    city: str = ""
    state: str = ""
    country: str = ""
    display_name: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location_type: str = "city"

    def to_dict(self) -> Dict[str, Any]:
        """Converte in dizionario per la UI."""
        return {
            "name": self.name,
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "displayName": self.display_name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "type": self.location_type,
        }


@dataclass(frozen=True)
class SearchResponse:
    """
    Risultato di SearchEngine.search().

    source vale "cache", "validation", "none" oppure il nome
    del provider che ha risposto.
    """
    results: List[LocationResult]
    source: str
    cached: bool = False

    @property
    def count(self) -> int:
        return len(self.results)


@dataclass
class SearchStats:
    """Contatori di processo del servizio di ricerca."""
    total_requests: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    provider_usage: Dict[str, int] = field(default_factory=dict)
    provider_failures: Dict[str, int] = field(default_factory=dict)
    cache_size: int = 0

    @property
    def cache_hit_rate(self) -> float:
        """Percentuale di richieste servite dalla cache."""
        if self.total_requests == 0:
            return 0.0
        return self.cache_hits / self.total_requests * 100

    def to_dict(self) -> Dict[str, Any]:
        """Serializza per logging/UI."""
        return {
            "totalRequests": self.total_requests,
            "cacheHits": self.cache_hits,
            "cacheMisses": self.cache_misses,
            "providerUsage": dict(self.provider_usage),
            "providerFailures": dict(self.provider_failures),
            "cacheSize": self.cache_size,
            "cacheHitRate": f"{self.cache_hit_rate:.2f}%",
        }
