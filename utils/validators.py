"""
Funzioni di validazione e normalizzazione per le query di ricerca.
"""
from typing import Optional, Union

from config import LOCATION_TYPES, MIN_QUERY_LENGTH
from core.exceptions import ValidationError
from core.models import LocationType


def normalize_query(query: Optional[str]) -> str:
    """
    Normalizza una query di ricerca (trim).

    Args:
        query: Testo inserito dall'utente (puo' essere None)

    Returns:
        Query senza spazi iniziali/finali, "" se vuota
    """
    if not query:
        return ""
    return query.strip()


def is_query_too_short(query: Optional[str]) -> bool:
    """True se la query, dopo il trim, ha meno di MIN_QUERY_LENGTH caratteri."""
    return len(normalize_query(query)) < MIN_QUERY_LENGTH


def build_cache_key(query: str, location_type: Optional[LocationType] = None) -> str:
    """
    Costruisce la chiave di cache per query e tipo.

    Query che differiscono solo per maiuscole o spazi esterni
    producono la stessa chiave.

    Args:
        query: Query di ricerca
        location_type: Tipo di ricerca (None -> "default")

    Returns:
        Chiave nel formato "<query>_<tipo>"
    """
    type_part = location_type.value if location_type else "default"
    return f"{normalize_query(query).lower()}_{type_part}"


def validate_location_type(
    value: Union[str, LocationType, None]
) -> Optional[LocationType]:
    """
    Converte il tipo di ricerca ricevuto dall'esterno in LocationType.

    Args:
        value: Stringa ("flight", "train", "bus", "hotel"), enum o None

    Returns:
        LocationType o None se non specificato

    Raises:
        ValidationError: Se il tipo non e' tra quelli ammessi
    """
    if value is None or value == "":
        return None
    if isinstance(value, LocationType):
        return value

    normalized = str(value).strip().lower()
    if normalized not in LOCATION_TYPES:
        raise ValidationError(
            f"Invalid type. Must be one of: {', '.join(LOCATION_TYPES)}"
        )
    return LocationType(normalized)


def safe_float(value, default: Optional[float] = None) -> Optional[float]:
    """
    Converte un valore a float in modo sicuro.

    Args:
        value: Valore da convertire
        default: Valore di default se la conversione fallisce

    Returns:
        Float o default
    """
    if value is None:
        return default
    try:
        return float(value)
    except (ValueError, TypeError):
        return default
