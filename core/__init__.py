"""Core module - modelli dati ed eccezioni."""
from core.models import (
    LocationType,
    LocationResult,
    SearchResponse,
    SearchStats,
    format_display_name,
)
from core.exceptions import (
    ProviderError,
    ProviderTransportError,
    ProviderDisabledError,
    ValidationError,
)

__all__ = [
    "LocationType",
    "LocationResult",
    "SearchResponse",
    "SearchStats",
    "format_display_name",
    "ProviderError",
    "ProviderTransportError",
    "ProviderDisabledError",
    "ValidationError",
]
