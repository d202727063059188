"""Tests for the Redis-backed usage tracker."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from reposcan.billing.exceptions import InvalidPlanError
from reposcan.billing.plans import LimitName, Plan
from reposcan.billing.usage import UsageTracker
from reposcan.config.settings import Settings


class TestUsageTracker:
    """Test cases for UsageTracker."""

    @pytest.fixture
    def mock_redis(self):
        """Mock async Redis client."""
        redis = MagicMock()
        redis.hincrby = AsyncMock(return_value=1)
        redis.expire = AsyncMock(return_value=True)
        redis.hget = AsyncMock(return_value=None)
        return redis

    @pytest.fixture
    def tracker(self, mock_redis):
        return UsageTracker(mock_redis, Settings(usage_key_ttl_days=3))

    def test_day_key(self):
        now = datetime(2024, 3, 9, 23, 59, tzinfo=timezone.utc)
        assert UsageTracker.day_key("owner-1", now) == "usage:owner-1:2024-03-09"

    @pytest.mark.asyncio
    async def test_record_scan(self, tracker, mock_redis):
        mock_redis.hincrby.return_value = 2

        total = await tracker.record_scan("owner-1")

        assert total == 2
        key = UsageTracker.day_key("owner-1")
        mock_redis.hincrby.assert_awaited_once_with(key, "scans", 1)
        mock_redis.expire.assert_awaited_once_with(key, 86400 * 3)

    @pytest.mark.asyncio
    async def test_record_scan_rejects_non_positive_count(self, tracker, mock_redis):
        with pytest.raises(ValueError):
            await tracker.record_scan("owner-1", count=0)
        mock_redis.hincrby.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_daily_scans_defaults_to_zero(self, tracker):
        assert await tracker.get_daily_scans("owner-1") == 0

    @pytest.mark.asyncio
    async def test_get_daily_scans_parses_value(self, tracker, mock_redis):
        mock_redis.hget.return_value = "4"
        assert await tracker.get_daily_scans("owner-1") == 4

    @pytest.mark.asyncio
    async def test_check_scan_quota_allowed(self, tracker, mock_redis):
        mock_redis.hget.return_value = "2"

        check = await tracker.check_scan_quota("owner-1", Plan.STARTER)

        assert check.allowed
        assert check.limit_name is LimitName.SCANS_PER_DAY
        assert check.current == 2
        assert check.limit == 3

    @pytest.mark.asyncio
    async def test_check_scan_quota_reached(self, tracker, mock_redis):
        mock_redis.hget.return_value = "3"

        check = await tracker.check_scan_quota("owner-1", "STARTER")

        assert not check.allowed
        assert check.remaining == 0

    @pytest.mark.asyncio
    async def test_check_scan_quota_unlimited(self, tracker, mock_redis):
        mock_redis.hget.return_value = "5000"

        check = await tracker.check_scan_quota("owner-1", Plan.ENTERPRISE)

        assert check.allowed
        assert check.remaining is None

    @pytest.mark.asyncio
    async def test_check_scan_quota_invalid_plan(self, tracker, mock_redis):
        with pytest.raises(InvalidPlanError):
            await tracker.check_scan_quota("owner-1", "FREE")
        mock_redis.hget.assert_not_awaited()

    def test_from_settings_uses_redis_url(self):
        settings = Settings(_env_file=None, redis_url="redis://cache.internal:6380/2")

        with patch("reposcan.billing.usage.Redis.from_url") as from_url:
            tracker = UsageTracker.from_settings(settings)

        from_url.assert_called_once_with("redis://cache.internal:6380/2", decode_responses=True)
        assert tracker.redis is from_url.return_value
        assert tracker.settings is settings
