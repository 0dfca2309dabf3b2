"""
HTTP Configuration Module - sessioni requests condivise dai provider.

Configura:
- Header di default per API JSON
- Connection pooling
- Retry opzionali via urllib3 (disattivati di default: il timeout
  per chiamata resta il limite di durata)
"""
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
import logging

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "LocationAutocomplete/1.0"

# Default headers to add to all requests
DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "User-Agent": DEFAULT_USER_AGENT,
}


def create_session_with_retries(
    retries: int = 0,
    backoff_factor: float = 0.5,
    status_forcelist: tuple = (502, 503, 504),
    pool_connections: int = 10,
    pool_maxsize: int = 20,
) -> requests.Session:
    """
    Create a requests Session with retry logic and proper headers.

    Args:
        retries: Number of retries for failed requests
        backoff_factor: Backoff factor for retries (exponential)
        status_forcelist: HTTP status codes to retry
        pool_connections: Number of connection pools to cache
        pool_maxsize: Max connections kept per pool

    Returns:
        Configured requests.Session
    """
    session = requests.Session()

    # Configure retry strategy
    retry_strategy = Retry(
        total=retries,
        backoff_factor=backoff_factor,
        status_forcelist=status_forcelist,
        allowed_methods=["HEAD", "GET", "OPTIONS"],
        raise_on_status=False,
    )

    # Mount adapter with retry strategy
    adapter = HTTPAdapter(
        max_retries=retry_strategy,
        pool_connections=pool_connections,
        pool_maxsize=pool_maxsize,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    # Set default headers
    session.headers.update(DEFAULT_HEADERS)

    logger.debug(f"HTTP session created (retries={retries})")
    return session
