"""
Fixtures pytest per Location Autocomplete.
"""
import pytest
from pathlib import Path
from typing import List, Optional
from unittest.mock import MagicMock
import sys

# Aggiungi la directory root al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import AppConfig, ProviderConfig
from core.models import LocationResult, LocationType
from orchestrator.rate_limiter import RateLimiter
from orchestrator.result_cache import ResultCache
from orchestrator.search_engine import SearchEngine
from providers.base import BaseProvider


class FakeClock:
    """Orologio manuale: i test avanzano il tempo esplicitamente."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider(BaseProvider):
    """Provider finto con risposta predefinita e contatore chiamate."""

    def __init__(
        self,
        name: str,
        results: Optional[List[LocationResult]] = None,
        error: Optional[Exception] = None,
        enabled: bool = True,
        quota: int = 100,
        window: float = 60.0,
    ):
        provider_config = ProviderConfig(
            display_name=name.capitalize(),
            base_url=f"https://{name}.example.com/search",
            enabled=enabled,
            rate_limit_requests=quota,
            rate_limit_window=window,
        )
        super().__init__(name, provider_config, session=MagicMock())
        self.results = results or []
        self.error = error
        self.calls = 0
        self.last_args = None

    def query(self, search_text, location_type=None):
        self.calls += 1
        self.last_args = (search_text, location_type)
        if self.error is not None:
            raise self.error
        return list(self.results)


def _json_response(payload, status_error: Optional[Exception] = None) -> MagicMock:
    """Crea una risposta requests finta con payload JSON."""
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = payload
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def paris() -> LocationResult:
    """LocationResult di esempio."""
    return LocationResult(
        name="Paris",
        city="Paris",
        state="Ile-de-France",
        country="France",
        display_name="Paris, Ile-de-France, France",
        latitude=48.8566,
        longitude=2.3522,
        location_type="city",
    )


@pytest.fixture
def sample_results(paris) -> List[LocationResult]:
    return [
        paris,
        LocationResult(
            name="Paris",
            city="Paris",
            state="Texas",
            country="United States",
            display_name="Paris, Texas, United States",
            latitude=33.6609,
            longitude=-95.5555,
        ),
    ]


@pytest.fixture
def make_provider():
    """Factory di FakeProvider."""
    return FakeProvider


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def rate_limiter(clock) -> RateLimiter:
    return RateLimiter(clock=clock)


@pytest.fixture
def cache(clock) -> ResultCache:
    return ResultCache(max_size=500, ttl=3600, clock=clock)


@pytest.fixture
def build_engine(app_config, cache, rate_limiter):
    """Factory di SearchEngine con provider finti, cache e clock di test."""
    engines = []

    def _build(*providers: BaseProvider) -> SearchEngine:
        engine = SearchEngine(
            app_config=app_config,
            providers=list(providers),
            cache=cache,
            rate_limiter=rate_limiter,
            start_cleanup=False,
        )
        engines.append(engine)
        return engine

    yield _build

    for engine in engines:
        engine.shutdown()


@pytest.fixture
def hotel() -> LocationType:
    return LocationType.HOTEL


@pytest.fixture
def json_response():
    """Factory di risposte HTTP finte con payload JSON."""
    return _json_response
