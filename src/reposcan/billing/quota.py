"""Quota evaluation against plan limits."""

from dataclasses import dataclass
from typing import Optional

from ..logging import get_logger
from .exceptions import QuotaExceededError
from .features import upgrade_message
from .plans import (
    LimitName,
    LimitNameLike,
    PlanLike,
    get_limit,
    is_unlimited,
    resolve_limit_name,
    resolve_plan,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class UsageCheck:
    limit_name: LimitName
    current: int
    limit: int
    allowed: bool
    percentage: int
    remaining: Optional[int]  # None when unlimited

    @property
    def unlimited(self) -> bool:
        return is_unlimited(self.limit)


def check_usage_limit(plan: PlanLike, limit_name: LimitNameLike, current: int) -> UsageCheck:
    """Compare current usage with the plan limit.

    An unlimited limit always allows and reports 0 percent used.

    Raises:
        ValueError: If current usage is negative.
    """
    if current < 0:
        raise ValueError(f"Usage count cannot be negative: {current}")

    name = resolve_limit_name(limit_name)
    limit = get_limit(plan, name)

    if is_unlimited(limit):
        return UsageCheck(
            limit_name=name,
            current=current,
            limit=limit,
            allowed=True,
            percentage=0,
            remaining=None,
        )

    percentage = round(current / limit * 100) if limit > 0 else 0
    return UsageCheck(
        limit_name=name,
        current=current,
        limit=limit,
        allowed=current < limit,
        percentage=percentage,
        remaining=max(limit - current, 0),
    )


def enforce_usage_limit(plan: PlanLike, limit_name: LimitNameLike, current: int) -> UsageCheck:
    """Like ``check_usage_limit`` but raises when the limit is reached.

    Raises:
        QuotaExceededError: If usage is at or above the plan limit.
    """
    check = check_usage_limit(plan, limit_name, current)
    if not check.allowed:
        logger.info(
            "quota_exceeded",
            plan=resolve_plan(plan).value,
            limit_name=check.limit_name.value,
            current=check.current,
            limit=check.limit,
        )
        raise QuotaExceededError(check, upgrade_message(check.limit_name))
    return check
