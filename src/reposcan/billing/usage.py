"""Daily scan usage tracking for quota checks."""

from datetime import datetime, timezone
from typing import Optional

from redis.asyncio import Redis

from ..config.settings import Settings, get_settings
from ..logging import LogContext, get_logger
from .plans import LimitName, PlanLike, resolve_plan
from .quota import UsageCheck, check_usage_limit

logger = get_logger(__name__)


class UsageTracker:
    """Track scans per owner per UTC day in Redis."""

    def __init__(self, redis: Redis, settings: Optional[Settings] = None):
        self.redis = redis
        self.settings = settings or get_settings()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "UsageTracker":
        """Build a tracker connected to ``settings.redis_url``."""
        settings = settings or get_settings()
        redis = Redis.from_url(settings.redis_url, decode_responses=True)
        return cls(redis, settings)

    @staticmethod
    def day_key(owner_id: str, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        return f"usage:{owner_id}:{now.strftime('%Y-%m-%d')}"

    async def record_scan(self, owner_id: str, count: int = 1) -> int:
        """Record scans for today and return the new daily total."""
        if count < 1:
            raise ValueError(f"Scan count must be positive: {count}")

        key = self.day_key(owner_id)
        total = await self.redis.hincrby(key, "scans", count)
        await self.redis.expire(key, 86400 * self.settings.usage_key_ttl_days)

        logger.debug("scan_recorded", owner_id=owner_id, count=count, daily_total=total)
        return int(total)

    async def get_daily_scans(self, owner_id: str) -> int:
        value = await self.redis.hget(self.day_key(owner_id), "scans")
        return int(value or 0)

    async def check_scan_quota(self, owner_id: str, plan: PlanLike) -> UsageCheck:
        """Check today's scans against the plan's daily scan limit."""
        plan = resolve_plan(plan)
        with LogContext(owner_id=owner_id, plan=plan.value):
            current = await self.get_daily_scans(owner_id)
            check = check_usage_limit(plan, LimitName.SCANS_PER_DAY, current)

            if not check.allowed:
                logger.info("daily_scan_limit_reached", current=check.current, limit=check.limit)

        return check
