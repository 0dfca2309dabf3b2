"""
Configurazione globale per Location Autocomplete.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class ProviderConfig:
    """
    Configurazione immutabile per singolo provider di geocoding.

    Viene passata al provider alla costruzione: credenziali, header
    obbligatori e quote non cambiano a runtime.
    """
    display_name: str
    base_url: str
    enabled: bool = True
    timeout: float = 5.0
    rate_limit_requests: int = 1
    rate_limit_window: float = 1.0
    headers: Mapping[str, str] = field(default_factory=dict)
    language: str = "en"
    result_limit: int = 10
    max_retries: int = 0

    def __post_init__(self):
        # Copia in sola lettura: il chiamante non puo' alterare gli header
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


@dataclass
class AppConfig:
    """Configurazione globale applicazione."""

    # Generale
    app_name: str = "Location Autocomplete"
    version: str = "1.0.0"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_to_file: bool = _env_bool("LOG_TO_FILE", "false")
    # Livello dei logger provider.* (vuoto: come LOG_LEVEL)
    provider_log_level: str = os.getenv("PROVIDER_LOG_LEVEL", "")

    # Providers (ordine di priorita' fisso)
    providers: Dict[str, ProviderConfig] = field(default_factory=dict)
    provider_order: List[str] = field(default_factory=list)

    # Cache
    cache_max_size: int = int(os.getenv("CACHE_MAX_SIZE", "500"))
    cache_ttl: int = int(os.getenv("CACHE_TTL", "3600"))
    cache_cleanup_interval: int = int(os.getenv("CACHE_CLEANUP_INTERVAL", "600"))

    def __post_init__(self):
        if not self.provider_order:
            order = os.getenv("PROVIDER_ORDER", "photon,nominatim,geodb")
            self.provider_order = [p.strip() for p in order.split(",") if p.strip()]

        if not self.providers:
            timeout = float(os.getenv("PROVIDER_TIMEOUT", "5"))
            language = os.getenv("SEARCH_LANGUAGE", "en")
            limit = int(os.getenv("RESULT_LIMIT", "10"))
            rapidapi_key = os.getenv("RAPIDAPI_KEY", "")

            self.providers = {
                "photon": ProviderConfig(
                    display_name="Photon",
                    base_url="https://photon.komoot.io/api/",
                    enabled=_env_bool("PHOTON_ENABLED"),
                    timeout=timeout,
                    rate_limit_requests=int(os.getenv("PHOTON_RATE_LIMIT_REQUESTS", "60")),
                    rate_limit_window=float(os.getenv("PHOTON_RATE_LIMIT_WINDOW", "60")),
                    headers={"Accept": "application/json"},
                    language=language,
                    result_limit=limit,
                ),
                "nominatim": ProviderConfig(
                    display_name="Nominatim",
                    base_url="https://nominatim.openstreetmap.org/search",
                    enabled=_env_bool("NOMINATIM_ENABLED"),
                    timeout=timeout,
                    # Usage policy: max 1 req/sec
                    rate_limit_requests=int(os.getenv("NOMINATIM_RATE_LIMIT_REQUESTS", "1")),
                    rate_limit_window=float(os.getenv("NOMINATIM_RATE_LIMIT_WINDOW", "1")),
                    headers={
                        # Obbligatorio per la usage policy di Nominatim
                        "User-Agent": os.getenv(
                            "NOMINATIM_USER_AGENT",
                            "LocationAutocomplete/1.0 (contact@example.com)",
                        ),
                    },
                    language=language,
                    result_limit=limit,
                ),
                "geodb": ProviderConfig(
                    display_name="GeoDB",
                    base_url="https://wft-geo-db.p.rapidapi.com/v1/geo/cities",
                    enabled=bool(rapidapi_key),
                    timeout=timeout,
                    # Free tier: 1 req/sec
                    rate_limit_requests=int(os.getenv("GEODB_RATE_LIMIT_REQUESTS", "1")),
                    rate_limit_window=float(os.getenv("GEODB_RATE_LIMIT_WINDOW", "1")),
                    headers={
                        "X-RapidAPI-Key": rapidapi_key,
                        "X-RapidAPI-Host": "wft-geo-db.p.rapidapi.com",
                    },
                    language=language,
                    result_limit=limit,
                ),
            }


# Tipi di ricerca accettati dall'interfaccia
LOCATION_TYPES: List[str] = ["flight", "train", "bus", "hotel"]

# Lunghezza minima query (dopo trim)
MIN_QUERY_LENGTH: int = 2

# Istanza configurazione globale
config = AppConfig()
