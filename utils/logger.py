"""
Configurazione logging per l'applicazione.

I provider scrivono su logger figli di "provider" ("provider.photon",
...): il loro livello si regola a parte, per seguire le chiamate HTTP
senza alzare la verbosita' di tutta l'applicazione.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# Formato log
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-24s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Logger padre dei provider
PROVIDER_LOGGER = "provider"


def _parse_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    level: str = "INFO",
    log_file: bool = False,
    log_dir: str = "logs",
    app_name: str = "autocomplete",
    provider_level: Optional[str] = None
) -> logging.Logger:
    """
    Configura il logging per l'applicazione.

    Args:
        level: Livello logging (DEBUG, INFO, WARNING, ERROR)
        log_file: Se True, scrive anche su file giornaliero
        log_dir: Directory per file di log
        app_name: Prefisso del file di log
        provider_level: Livello dei logger "provider.*"; None li
            lascia al livello generale

    Returns:
        Root logger configurato
    """
    log_level = _parse_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Rimuovi handler esistenti (streamlit riesegue lo script)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler_level = log_level
    provider_logger = logging.getLogger(PROVIDER_LOGGER)
    if provider_level:
        provider_log_level = _parse_level(provider_level)
        provider_logger.setLevel(provider_log_level)
        # Il console handler deve lasciar passare i record dei provider
        handler_level = min(log_level, provider_log_level)
    else:
        provider_logger.setLevel(logging.NOTSET)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    console_handler.setLevel(handler_level)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            log_path = Path(log_dir)
            log_path.mkdir(exist_ok=True)

            filename = log_path / f"{app_name}_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(filename, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
            file_handler.setLevel(logging.DEBUG)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"Could not create log file: {e}")

    # Riduci verbosità librerie esterne
    for noisy in ("urllib3", "requests", "watchdog"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return root_logger


def get_provider_logger(name: str) -> logging.Logger:
    """
    Logger dedicato a un provider ("provider.<name>").

    Args:
        name: Chiave del provider (photon, nominatim, geodb)
    """
    return logging.getLogger(f"{PROVIDER_LOGGER}.{name}")
