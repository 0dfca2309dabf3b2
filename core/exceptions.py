"""
Eccezioni custom per Location Autocomplete.
"""


class ProviderError(Exception):
    """Errore generico di un provider di geocoding."""

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message)
        self.provider = provider


class ProviderTransportError(ProviderError):
    """Timeout, errore di rete, risposta non-2xx o payload non valido."""
    pass


class ProviderDisabledError(ProviderError):
    """Provider disabilitato da configurazione (es. chiave API mancante)."""
    pass


class ValidationError(Exception):
    """Errore di validazione input."""
    pass
