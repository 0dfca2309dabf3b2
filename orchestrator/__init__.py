"""Orchestrator module - ricerca con fallback tra provider."""
from orchestrator.search_engine import SearchEngine
from orchestrator.rate_limiter import RateLimiter, get_rate_limiter
from orchestrator.result_cache import ResultCache

__all__ = [
    "SearchEngine",
    "RateLimiter",
    "get_rate_limiter",
    "ResultCache",
]
