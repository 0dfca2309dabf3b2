"""Providers module - connettori ai servizi di geocoding."""
from providers.base import BaseProvider
from providers.photon_provider import PhotonProvider
from providers.nominatim_provider import NominatimProvider
from providers.geodb_provider import GeoDBProvider

# Registro provider per chiave di configurazione
PROVIDER_CLASSES = {
    "photon": PhotonProvider,
    "nominatim": NominatimProvider,
    "geodb": GeoDBProvider,
}

__all__ = [
    "BaseProvider",
    "PhotonProvider",
    "NominatimProvider",
    "GeoDBProvider",
    "PROVIDER_CLASSES",
]
