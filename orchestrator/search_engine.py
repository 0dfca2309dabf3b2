"""
Search Engine - Orchestratore principale per l'autocomplete di localita'.

Interroga i provider in ordine di priorita' fisso e restituisce il
primo insieme di risultati non vuoto. Gestisce cache, rate limit
per provider e statistiche di utilizzo.
"""
from threading import Lock
from typing import Dict, List, Optional, Union
import logging

from config import AppConfig, config as default_config
from core.exceptions import ProviderError, ValidationError
from core.models import LocationResult, LocationType, SearchResponse, SearchStats
from orchestrator.rate_limiter import RateLimiter, get_rate_limiter
from orchestrator.result_cache import ResultCache
from providers import PROVIDER_CLASSES, BaseProvider
from utils.validators import (
    build_cache_key,
    is_query_too_short,
    normalize_query,
    validate_location_type,
)

logger = logging.getLogger(__name__)

# Valori di source non legati a un provider
SOURCE_CACHE = "cache"
SOURCE_VALIDATION = "validation"
SOURCE_NONE = "none"


class SearchEngine:
    """
    Orchestratore principale per ricerche con fallback tra provider.

    Responsabilità:
    - Validare la query e servire le ripetizioni dalla cache
    - Provare i provider in sequenza, nell'ordine configurato
    - Rispettare il flag enabled e il rate limit di ciascun provider
    - Assorbire gli errori dei provider (mai propagati al chiamante)
    - Tenere le statistiche di utilizzo

    L'ordine dei provider non cambia mai in base a successi o errori
    passati.
    """

    def __init__(
        self,
        app_config: Optional[AppConfig] = None,
        providers: Optional[List[BaseProvider]] = None,
        cache: Optional[ResultCache] = None,
        rate_limiter: Optional[RateLimiter] = None,
        start_cleanup: bool = True
    ):
        """
        Inizializza il search engine.

        Args:
            app_config: Configurazione (default: istanza globale)
            providers: Provider in ordine di priorita' (default: da
                app_config.provider_order)
            cache: Cache risultati (default: dimensione/TTL da config)
            rate_limiter: Rate limiter (default: singleton globale)
            start_cleanup: Se True avvia la pulizia periodica della cache
        """
        self.config = app_config or default_config
        self.rate_limiter = rate_limiter if rate_limiter is not None else get_rate_limiter()
        # ResultCache vuota e' falsy (__len__): confronto esplicito con None
        self.cache = cache if cache is not None else ResultCache(
            max_size=self.config.cache_max_size,
            ttl=self.config.cache_ttl,
        )

        # Lista ordinata: la posizione e' la priorita'
        self.providers: List[BaseProvider] = (
            list(providers) if providers is not None else self._build_providers()
        )

        for provider in self.providers:
            self.rate_limiter.configure(
                provider.name,
                provider.config.rate_limit_requests,
                provider.config.rate_limit_window,
            )

        self._stats_lock = Lock()
        self._stats = self._empty_stats()

        if start_cleanup:
            self.cache.start_cleanup(self.config.cache_cleanup_interval)

    def _build_providers(self) -> List[BaseProvider]:
        """Istanzia i provider secondo config.provider_order."""
        providers = []
        for name in self.config.provider_order:
            provider_class = PROVIDER_CLASSES.get(name)
            provider_config = self.config.providers.get(name)
            if provider_class is None or provider_config is None:
                logger.warning(f"Unknown provider in PROVIDER_ORDER: {name}")
                continue
            providers.append(provider_class(provider_config))
        return providers

    def search(
        self,
        query: Optional[str],
        location_type: Union[LocationType, str, None] = None
    ) -> SearchResponse:
        """
        Cerca localita' con fallback tra provider.

        Args:
            query: Testo di ricerca
            location_type: Tipo di ricerca opzionale (enum o stringa come
                "hotel"); un tipo sconosciuto produce una risposta di
                validazione vuota

        Returns:
            SearchResponse, eventualmente vuota. Non solleva eccezioni
            per errori dei provider.
        """
        self._increment("total_requests")

        if is_query_too_short(query):
            return SearchResponse(results=[], source=SOURCE_VALIDATION, cached=False)

        try:
            location_type = validate_location_type(location_type)
        except ValidationError as e:
            logger.warning(f"Rejected search type: {e}")
            return SearchResponse(results=[], source=SOURCE_VALIDATION, cached=False)

        search_query = normalize_query(query)
        cache_key = build_cache_key(search_query, location_type)

        cached_results = self.cache.get(cache_key)
        if cached_results is not None:
            self._increment("cache_hits")
            logger.debug(f"Cache hit for '{search_query}'")
            return SearchResponse(results=cached_results, source=SOURCE_CACHE, cached=True)

        self._increment("cache_misses")

        for provider in self.providers:
            if not provider.is_enabled:
                logger.info(f"{provider.display_name} is disabled, skipping")
                continue

            if not self.rate_limiter.try_acquire(provider.name):
                logger.info(f"{provider.display_name} rate limit exceeded, skipping")
                continue

            logger.info(f"Trying {provider.display_name} for query: '{search_query}'")
            results = self._query_provider(provider, search_query, location_type)

            if results:
                self._increment_provider("provider_usage", provider.name)
                self.cache.put(cache_key, results)
                logger.info(f"{provider.display_name} returned {len(results)} results")
                return SearchResponse(
                    results=list(results),
                    source=provider.display_name,
                    cached=False,
                )

            if results is not None:
                logger.info(f"{provider.display_name} returned no results, trying next provider")

        logger.info(f"All providers exhausted for query: '{search_query}'")
        return SearchResponse(results=[], source=SOURCE_NONE, cached=False)

    def _query_provider(
        self,
        provider: BaseProvider,
        search_query: str,
        location_type: Optional[LocationType]
    ) -> Optional[List[LocationResult]]:
        """
        Invoca un provider assorbendo gli errori.

        Returns:
            Risultati del provider, None se la chiamata e' fallita
        """
        try:
            return provider.query(search_query, location_type)
        except ProviderError as e:
            self._increment_provider("provider_failures", provider.name)
            logger.warning(f"{provider.display_name} error: {e}")
        except Exception:
            self._increment_provider("provider_failures", provider.name)
            logger.exception(f"{provider.display_name} failed unexpectedly")
        return None

    def get_stats(self) -> SearchStats:
        """
        Restituisce una copia delle statistiche correnti.

        Returns:
            SearchStats con dimensione cache aggiornata
        """
        with self._stats_lock:
            snapshot = SearchStats(
                total_requests=self._stats.total_requests,
                cache_hits=self._stats.cache_hits,
                cache_misses=self._stats.cache_misses,
                provider_usage=dict(self._stats.provider_usage),
                provider_failures=dict(self._stats.provider_failures),
            )
        snapshot.cache_size = len(self.cache)
        return snapshot

    def reset(self) -> None:
        """Svuota cache e statistiche."""
        self.cache.clear()
        with self._stats_lock:
            self._stats = self._empty_stats()
        logger.info("Search engine reset: cache and stats cleared")

    def shutdown(self) -> None:
        """Ferma la pulizia periodica e svuota la cache."""
        self.cache.stop_cleanup()
        self.cache.clear()

    def get_available_sources(self) -> List[str]:
        """
        Restituisce i provider in ordine di priorita'.

        Returns:
            Lista nomi provider configurati
        """
        return [p.name for p in self.providers]

    def get_provider_status(self) -> Dict[str, bool]:
        """Stato enabled per ogni provider."""
        return {p.name: p.is_enabled for p in self.providers}

    def _empty_stats(self) -> SearchStats:
        names = [p.name for p in self.providers]
        return SearchStats(
            provider_usage={name: 0 for name in names},
            provider_failures={name: 0 for name in names},
        )

    def _increment(self, counter: str) -> None:
        with self._stats_lock:
            setattr(self._stats, counter, getattr(self._stats, counter) + 1)

    def _increment_provider(self, counter: str, provider_name: str) -> None:
        with self._stats_lock:
            counters: Dict[str, int] = getattr(self._stats, counter)
            counters[provider_name] = counters.get(provider_name, 0) + 1
