"""
Test per il RateLimiter a finestra scorrevole.
"""
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from orchestrator.rate_limiter import RateLimiter, get_rate_limiter


class TestRateLimiter:
    """Test per RateLimiter."""

    def test_default_limits(self, rate_limiter):
        assert rate_limiter.get_limit("photon") == (60, 60.0)
        assert rate_limiter.get_limit("nominatim") == (1, 1.0)
        assert rate_limiter.get_limit("geodb") == (1, 1.0)

    def test_unknown_source_uses_default(self, rate_limiter):
        assert rate_limiter.get_limit("other") == (1, 1.0)

    def test_quota_boundary(self, rate_limiter, clock):
        rate_limiter.configure("photon", 3, 10)

        assert [rate_limiter.try_acquire("photon") for _ in range(3)] == [True, True, True]
        assert rate_limiter.try_acquire("photon") is False

        clock.advance(10)
        assert rate_limiter.try_acquire("photon") is True

    def test_denied_request_not_recorded(self, rate_limiter, clock):
        rate_limiter.configure("nominatim", 1, 1.0)

        assert rate_limiter.try_acquire("nominatim") is True
        clock.advance(0.5)
        assert rate_limiter.try_acquire("nominatim") is False
        clock.advance(0.5)
        assert rate_limiter.try_acquire("nominatim") is True

    def test_window_slides(self, rate_limiter, clock):
        rate_limiter.configure("photon", 2, 10)

        assert rate_limiter.try_acquire("photon") is True   # t=0
        clock.advance(5)
        assert rate_limiter.try_acquire("photon") is True   # t=5
        clock.advance(4)
        assert rate_limiter.try_acquire("photon") is False  # t=9
        clock.advance(1)
        assert rate_limiter.try_acquire("photon") is True   # t=10, t=0 uscito
        clock.advance(1)
        assert rate_limiter.try_acquire("photon") is False  # t=11, restano 5 e 10

    def test_sources_are_independent(self, rate_limiter):
        assert rate_limiter.try_acquire("nominatim") is True
        assert rate_limiter.try_acquire("nominatim") is False
        assert rate_limiter.try_acquire("geodb") is True

    def test_remaining(self, rate_limiter, clock):
        rate_limiter.configure("photon", 5, 60)
        rate_limiter.try_acquire("photon")
        rate_limiter.try_acquire("photon")

        assert rate_limiter.remaining("photon") == 3
        clock.advance(60)
        assert rate_limiter.remaining("photon") == 5

    @pytest.mark.parametrize("requests,window", [(0, 1.0), (1, 0), (5, -1)])
    def test_configure_invalid(self, rate_limiter, requests, window):
        with pytest.raises(ValueError):
            rate_limiter.configure("photon", requests, window)

    def test_reset_single_source(self, rate_limiter):
        rate_limiter.try_acquire("nominatim")
        rate_limiter.try_acquire("geodb")

        rate_limiter.reset("nominatim")

        assert rate_limiter.try_acquire("nominatim") is True
        assert rate_limiter.try_acquire("geodb") is False

    def test_reset_all(self, rate_limiter):
        rate_limiter.try_acquire("nominatim")
        rate_limiter.try_acquire("geodb")

        rate_limiter.reset()

        assert rate_limiter.try_acquire("nominatim") is True
        assert rate_limiter.try_acquire("geodb") is True

    def test_concurrent_admission_never_exceeds_quota(self, rate_limiter):
        rate_limiter.configure("photon", 5, 60)

        with ThreadPoolExecutor(max_workers=10) as executor:
            admitted = list(executor.map(lambda _: rate_limiter.try_acquire("photon"), range(50)))

        assert admitted.count(True) == 5

    def test_default_clock_is_monotonic(self):
        assert RateLimiter()._clock is time.monotonic


def test_singleton():
    assert get_rate_limiter() is get_rate_limiter()
    assert isinstance(get_rate_limiter(), RateLimiter)
