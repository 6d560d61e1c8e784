"""Tests for RateLimiter - per-email login attempt limiting."""

import pytest

from auth.config import AuthConfig
from auth.exceptions import RateLimitedError
from auth.rate_limiter import RateLimiter


@pytest.fixture
def rate_limiter(valkey):
    return RateLimiter(valkey, AuthConfig(rate_limit_attempts=3, rate_limit_window_minutes=5))


class TestCheckRateLimit:

    def test_allows_up_to_limit(self, rate_limiter):
        for _ in range(3):
            rate_limiter.check_rate_limit("user@nextmail.com")

    def test_blocks_after_limit(self, rate_limiter):
        for _ in range(3):
            rate_limiter.check_rate_limit("user@nextmail.com")

        with pytest.raises(RateLimitedError) as exc_info:
            rate_limiter.check_rate_limit("user@nextmail.com")

        assert 0 < exc_info.value.retry_after_seconds <= 300

    def test_email_normalized(self, rate_limiter):
        for _ in range(3):
            rate_limiter.check_rate_limit("User@NextMail.com")

        with pytest.raises(RateLimitedError):
            rate_limiter.check_rate_limit("user@nextmail.com")

    def test_emails_counted_separately(self, rate_limiter):
        for _ in range(3):
            rate_limiter.check_rate_limit("a@nextmail.com")

        rate_limiter.check_rate_limit("b@nextmail.com")

    def test_window_set_on_key(self, rate_limiter, valkey):
        rate_limiter.check_rate_limit("user@nextmail.com")

        assert 0 < valkey.ttl("ratelimit:login:user@nextmail.com") <= 300


class TestResetRateLimit:

    def test_reset_clears_count(self, rate_limiter):
        for _ in range(3):
            rate_limiter.check_rate_limit("user@nextmail.com")

        rate_limiter.reset_rate_limit("user@nextmail.com")

        rate_limiter.check_rate_limit("user@nextmail.com")
