"""Utility module."""
from utils.validators import (
    build_cache_key,
    normalize_query,
    validate_location_type,
)

__all__ = [
    "build_cache_key",
    "normalize_query",
    "validate_location_type",
]
