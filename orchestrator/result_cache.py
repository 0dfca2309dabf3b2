"""
Cache in memoria dei risultati di ricerca.

Limitata in dimensione (eviction per ordine di inserimento) e con
TTL verificato in lettura. Un thread di pulizia opzionale rimuove
periodicamente le voci scadute anche senza letture.
"""
from collections import OrderedDict
from dataclasses import dataclass
from threading import Event, Lock, Thread
from time import monotonic
from typing import Callable, List, Optional, Tuple
import logging

from core.models import LocationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Voce di cache: risultati e istante di inserimento."""
    key: str
    results: Tuple[LocationResult, ...]
    inserted_at: float


class ResultCache:
    """
    Cache chiave -> risultati con TTL e dimensione massima.

    Thread-safe: get/put/purge condividono un unico lock.
    L'eviction rimuove la voce inserita per prima, indipendentemente
    dagli accessi (non e' un LRU per recency).
    """

    def __init__(
        self,
        max_size: int = 500,
        ttl: float = 3600,
        clock: Callable[[], float] = monotonic
    ):
        """
        Args:
            max_size: Numero massimo di voci
            ttl: Durata di validita' di una voce in secondi
            clock: Sorgente del tempo in secondi (iniettabile nei test)
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = Lock()
        self._stop_event: Optional[Event] = None
        self._cleanup_thread: Optional[Thread] = None

    def get(self, key: str) -> Optional[List[LocationResult]]:
        """
        Restituisce i risultati in cache per la chiave.

        Una voce scaduta trovata in lettura viene eliminata.

        Returns:
            Lista risultati o None (miss)
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if self._is_expired(entry, self._clock()):
                del self._entries[key]
                logger.debug(f"Cache entry expired: {key}")
                return None

            return list(entry.results)

    def put(self, key: str, results: List[LocationResult]) -> None:
        """
        Inserisce o sovrascrive la voce per la chiave.

        Se la cache e' piena e la chiave e' nuova, rimuove prima la
        voce inserita per prima.
        """
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_size:
                evicted_key, _ = self._entries.popitem(last=False)
                logger.debug(f"Cache full, evicted: {evicted_key}")

            self._entries[key] = CacheEntry(
                key=key,
                results=tuple(results),
                inserted_at=self._clock(),
            )

    def purge_expired(self) -> int:
        """
        Rimuove tutte le voci scadute.

        Returns:
            Numero di voci rimosse
        """
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if self._is_expired(e, now)]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.info(f"Cache cleanup: removed {len(expired)} expired entries")
        return len(expired)

    def start_cleanup(self, interval: float = 600) -> None:
        """
        Avvia il thread di pulizia periodica (daemon).

        Args:
            interval: Secondi tra due pulizie
        """
        if self._cleanup_thread is not None and self._cleanup_thread.is_alive():
            return

        stop_event = Event()

        def run():
            while not stop_event.wait(interval):
                try:
                    self.purge_expired()
                except Exception as e:
                    logger.error(f"Cache cleanup failed: {e}")

        self._stop_event = stop_event
        self._cleanup_thread = Thread(target=run, name="result-cache-cleanup", daemon=True)
        self._cleanup_thread.start()
        logger.debug(f"Cache cleanup scheduled every {interval}s")

    def stop_cleanup(self, timeout: float = 1.0) -> None:
        """Ferma il thread di pulizia, se attivo."""
        if self._stop_event is not None:
            self._stop_event.set()
        if self._cleanup_thread is not None:
            self._cleanup_thread.join(timeout)
        self._stop_event = None
        self._cleanup_thread = None

    @property
    def cleanup_running(self) -> bool:
        return self._cleanup_thread is not None and self._cleanup_thread.is_alive()

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> List[str]:
        """Chiavi in ordine di inserimento."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.inserted_at > self.ttl
