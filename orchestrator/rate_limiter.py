"""
Rate Limiter per-provider a finestra scorrevole.

Thread-safe: ogni provider ha il proprio lock. Non attende mai:
se la quota della finestra e' esaurita la richiesta viene rifiutata
e il search engine passa al provider successivo.
"""
from collections import defaultdict, deque
from time import monotonic
from threading import Lock
from typing import Callable, Deque, Dict, Tuple
import logging

logger = logging.getLogger(__name__)

# (richieste, finestra in secondi) per fonti non configurate
DEFAULT_LIMIT: Tuple[int, float] = (1, 1.0)


class RateLimiter:
    """
    Rate limiter locale per tutti i provider di geocoding.

    Per ogni provider tiene i timestamp delle richieste ammesse
    nella finestra corrente. E' un throttling lato client: non
    garantisce il rispetto dei limiti imposti dal provider remoto.
    """

    def __init__(self, clock: Callable[[], float] = monotonic):
        """
        Args:
            clock: Sorgente del tempo in secondi (iniettabile nei test)
        """
        self._clock = clock
        self._locks: Dict[str, Lock] = defaultdict(Lock)
        self._windows: Dict[str, Deque[float]] = defaultdict(deque)

        # Limiti per fonte: (richieste, finestra in secondi)
        self.limits: Dict[str, Tuple[int, float]] = {
            "photon": (60, 60.0),
            "nominatim": (1, 1.0),
            "geodb": (1, 1.0),
        }

    def configure(self, source: str, requests: int, window: float) -> None:
        """
        Imposta quota e finestra per una fonte.

        Args:
            source: Nome della fonte
            requests: Richieste ammesse per finestra
            window: Durata della finestra in secondi
        """
        if requests < 1 or window <= 0:
            raise ValueError(f"Invalid rate limit for {source}: {requests}/{window}s")
        with self._locks[source]:
            self.limits[source] = (requests, window)
        logger.debug(f"Rate limit for {source}: {requests} req / {window}s")

    def try_acquire(self, source: str) -> bool:
        """
        Tenta di ammettere una richiesta verso la fonte.

        Scarta i timestamp fuori finestra; se ne restano meno della
        quota registra la richiesta e restituisce True, altrimenti
        restituisce False senza registrare nulla.

        Args:
            source: Nome della fonte (photon, nominatim, geodb)

        Returns:
            True se la richiesta e' ammessa
        """
        max_requests, window = self.get_limit(source)

        with self._locks[source]:
            now = self._clock()
            timestamps = self._windows[source]
            self._evict(timestamps, now - window)

            if len(timestamps) >= max_requests:
                logger.debug(f"Rate limit reached for {source} ({max_requests}/{window}s)")
                return False

            timestamps.append(now)
            return True

    def remaining(self, source: str) -> int:
        """Richieste ancora ammesse nella finestra corrente."""
        max_requests, window = self.get_limit(source)
        with self._locks[source]:
            timestamps = self._windows[source]
            self._evict(timestamps, self._clock() - window)
            return max(0, max_requests - len(timestamps))

    def get_limit(self, source: str) -> Tuple[int, float]:
        """
        Ottiene il rate limit corrente per una fonte.

        Returns:
            (richieste, finestra in secondi)
        """
        return self.limits.get(source, DEFAULT_LIMIT)

    def reset(self, source: str = None) -> None:
        """
        Svuota le finestre registrate.

        Args:
            source: Se specificato, resetta solo quella fonte.
                   Altrimenti resetta tutte.
        """
        if source:
            with self._locks[source]:
                self._windows[source].clear()
        else:
            for name in list(self._windows):
                with self._locks[name]:
                    self._windows[name].clear()

    @staticmethod
    def _evict(timestamps: Deque[float], window_start: float) -> None:
        # I timestamp sono in ordine crescente
        while timestamps and timestamps[0] <= window_start:
            timestamps.popleft()


# Singleton instance
_rate_limiter: RateLimiter = None


def get_rate_limiter() -> RateLimiter:
    """
    Restituisce l'istanza singleton del rate limiter.

    Returns:
        RateLimiter singleton
    """
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = RateLimiter()
    return _rate_limiter
