"""
Classe base astratta per tutti i provider di geocoding.

Definisce l'interfaccia comune che tutti i provider devono implementare.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from config import ProviderConfig
from core.exceptions import ProviderTransportError
from core.models import LocationResult, LocationType
from utils.http_config import create_session_with_retries
from utils.logger import get_provider_logger


class BaseProvider(ABC):
    """
    Interfaccia astratta per tutti i provider.

    Pattern: Strategy + Template Method

    Tutti i provider (Photon, Nominatim, GeoDB) devono implementare
    questa interfaccia e restituire LocationResult gia' normalizzati.
    """

    def __init__(
        self,
        name: str,
        provider_config: ProviderConfig,
        session: Optional[requests.Session] = None
    ):
        """
        Inizializza il provider.

        Args:
            name: Chiave identificativa del provider
            provider_config: Configurazione immutabile del provider
            session: Sessione HTTP da riusare (default: nuova sessione)
        """
        self.name = name
        self.config = provider_config
        self.session = session or create_session_with_retries(
            retries=provider_config.max_retries
        )
        self.logger = get_provider_logger(name)

    @property
    def display_name(self) -> str:
        """Nome del provider restituito come source al chiamante."""
        return self.config.display_name

    @property
    def is_enabled(self) -> bool:
        """False se il provider va saltato senza essere invocato."""
        return self.config.enabled

    @abstractmethod
    def query(
        self,
        search_text: str,
        location_type: Optional[LocationType] = None
    ) -> List[LocationResult]:
        """
        Cerca localita' corrispondenti al testo.

        Args:
            search_text: Testo gia' normalizzato (trim)
            location_type: Tipo di ricerca opzionale

        Returns:
            Lista di LocationResult con nome non vuoto

        Raises:
            ProviderError: Su timeout, errore di rete, HTTP o payload
        """
        pass

    def _get_json(self, params: Dict[str, Any]) -> Any:
        """
        Esegue la GET verso il provider e decodifica il JSON.

        Raises:
            ProviderTransportError: Timeout, errore di rete, status
                non-2xx o corpo non JSON
        """
        try:
            response = self.session.get(
                self.config.base_url,
                params=params,
                headers=dict(self.config.headers),
                timeout=self.config.timeout,
            )
            response.raise_for_status()
        except requests.Timeout as e:
            raise ProviderTransportError(
                f"{self.display_name} timed out after {self.config.timeout}s",
                provider=self.name,
            ) from e
        except requests.RequestException as e:
            raise ProviderTransportError(
                f"{self.display_name} request failed: {e}",
                provider=self.name,
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderTransportError(
                f"{self.display_name} returned a malformed payload",
                provider=self.name,
            ) from e

        self.logger.debug(f"{self.display_name} responded {response.status_code} for {params}")
        return payload

    @staticmethod
    def _keep_named(results: List[LocationResult]) -> List[LocationResult]:
        """Scarta i risultati senza nome."""
        return [r for r in results if r.name]
