"""Plan permission and limit tables.

Every plan must appear exactly once in both ``PLAN_FEATURE_PERMISSIONS`` and
``PLAN_LIMITS``. The tables are checked when this module is imported, so a
plan added to ``Plan`` without table entries fails at startup.
"""

from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Union

from .exceptions import InvalidPlanError, PlanTableError, UnknownLimitNameError

UNLIMITED = -1


class Plan(str, Enum):
    STARTER = "STARTER"
    PRO = "PRO"
    BUSINESS = "BUSINESS"
    ENTERPRISE = "ENTERPRISE"


# Lowest to highest entitlement
PLAN_ORDER: tuple[Plan, ...] = (Plan.STARTER, Plan.PRO, Plan.BUSINESS, Plan.ENTERPRISE)


class LimitName(str, Enum):
    SCANS_PER_DAY = "scansPerDay"
    MAX_WORKSPACES = "maxWorkspaces"
    MAX_USERS_PER_WORKSPACE = "maxUsersPerWorkspace"
    RETENTION_DAYS = "retentionDays"

    @property
    def attribute(self) -> str:
        return _LIMIT_ATTRIBUTES[self]


_LIMIT_ATTRIBUTES = {
    LimitName.SCANS_PER_DAY: "scans_per_day",
    LimitName.MAX_WORKSPACES: "max_workspaces",
    LimitName.MAX_USERS_PER_WORKSPACE: "max_users_per_workspace",
    LimitName.RETENTION_DAYS: "retention_days",
}


@dataclass(frozen=True)
class PlanLimits:
    scans_per_day: int
    max_workspaces: int
    max_users_per_workspace: int
    retention_days: int

    def as_dict(self) -> dict[str, int]:
        """Limits keyed by their wire names."""
        return {name.value: getattr(self, name.attribute) for name in LimitName}


PlanLike = Union[Plan, str]
LimitNameLike = Union[LimitName, str]


PLAN_FEATURE_PERMISSIONS: Mapping[Plan, tuple[str, ...]] = MappingProxyType({
    Plan.STARTER: (
        "SCAN:VIEW",
        "REPORT:VIEW",
        "WORKSPACE:VIEW",
        "SCAN:CREATE:BASIC",
        "SCAN:RUN",
        "REPOSITORY:VIEW",
        "SCHEDULE:VIEW",
    ),
    Plan.PRO: (
        "SCAN:VIEW",
        "REPORT:VIEW",
        "WORKSPACE:VIEW",
        "SCAN:CREATE:BASIC",
        "SCAN:RUN",
        "WORKSPACE:EDIT",
        "REPOSITORY:VIEW",
        "REPOSITORY:ADD",
        "SCHEDULE:VIEW",
        "SCHEDULE:CREATE",
        "REPORT:EXPORT",
    ),
    Plan.BUSINESS: (
        "SCAN:VIEW",
        "REPORT:VIEW",
        "WORKSPACE:VIEW",
        "SCAN:CREATE:BASIC",
        "SCAN:CREATE:ADVANCED",
        "SCAN:RUN",
        "WORKSPACE:EDIT",
        "WORKSPACE:MANAGE_USERS",
        "REPOSITORY:VIEW",
        "REPOSITORY:ADD",
        "SCHEDULE:VIEW",
        "SCHEDULE:CREATE",
        "SCHEDULE:EDIT",
        "REPORT:EXPORT",
        "REPORT:SHARE",
    ),
    Plan.ENTERPRISE: (
        "SCAN:VIEW",
        "REPORT:VIEW",
        "WORKSPACE:VIEW",
        "SCAN:CREATE:BASIC",
        "SCAN:CREATE:ADVANCED",
        "SCAN:RUN",
        "WORKSPACE:EDIT",
        "WORKSPACE:MANAGE_USERS",
        "REPOSITORY:VIEW",
        "REPOSITORY:ADD",
        "SCHEDULE:VIEW",
        "SCHEDULE:CREATE",
        "SCHEDULE:EDIT",
        "REPORT:EXPORT",
        "REPORT:SHARE",
        "API:USE",
        "BILLING:VIEW",
    ),
})

PLAN_LIMITS: Mapping[Plan, PlanLimits] = MappingProxyType({
    Plan.STARTER: PlanLimits(
        scans_per_day=3,
        max_workspaces=1,
        max_users_per_workspace=3,
        retention_days=30,
    ),
    Plan.PRO: PlanLimits(
        scans_per_day=10,
        max_workspaces=3,
        max_users_per_workspace=10,
        retention_days=90,
    ),
    Plan.BUSINESS: PlanLimits(
        scans_per_day=30,
        max_workspaces=10,
        max_users_per_workspace=25,
        retention_days=180,
    ),
    Plan.ENTERPRISE: PlanLimits(
        scans_per_day=UNLIMITED,
        max_workspaces=UNLIMITED,
        max_users_per_workspace=UNLIMITED,
        retention_days=365,
    ),
})

_PERMISSION_SETS = {plan: frozenset(perms) for plan, perms in PLAN_FEATURE_PERMISSIONS.items()}


def validate_plan_tables(
    permissions: Mapping[Any, Iterable[str]],
    limits: Mapping[Any, PlanLimits],
    plans: Iterable[Plan] = Plan,
) -> None:
    """Check that both tables have exactly one entry per plan.

    Raises:
        PlanTableError: If a plan is missing from a table or a table has
            keys that are not plans.
    """
    expected = set(plans)
    for table_name, table in (("permissions", permissions), ("limits", limits)):
        keys = set(table)
        missing = expected - keys
        extra = keys - expected
        if missing:
            names = ", ".join(sorted(p.value for p in missing))
            raise PlanTableError(f"Plan {table_name} table is missing entries for: {names}")
        if extra:
            names = ", ".join(sorted(str(k) for k in extra))
            raise PlanTableError(f"Plan {table_name} table has unknown plans: {names}")

    for plan, plan_limits in limits.items():
        for field in fields(PlanLimits):
            value = getattr(plan_limits, field.name)
            if not isinstance(value, int) or (value < 0 and value != UNLIMITED):
                raise PlanTableError(f"Invalid {field.name} for {plan.value}: {value!r}")


def resolve_plan(value: PlanLike) -> Plan:
    """Return the ``Plan`` for a plan or its stored string value.

    Raises:
        InvalidPlanError: If the value is not a defined plan.
    """
    if isinstance(value, Plan):
        return value
    if isinstance(value, str):
        try:
            return Plan(value)
        except ValueError:
            raise InvalidPlanError(value) from None
    raise InvalidPlanError(value)


def resolve_limit_name(value: LimitNameLike) -> LimitName:
    if isinstance(value, LimitName):
        return value
    if isinstance(value, str):
        try:
            return LimitName(value)
        except ValueError:
            raise UnknownLimitNameError(value) from None
    raise UnknownLimitNameError(value)


def plan_rank(plan: PlanLike) -> int:
    return PLAN_ORDER.index(resolve_plan(plan))


def is_unlimited(value: int) -> bool:
    return value == UNLIMITED


def get_plan_permissions(plan: PlanLike) -> tuple[str, ...]:
    return PLAN_FEATURE_PERMISSIONS[resolve_plan(plan)]


def get_plan_limits(plan: PlanLike) -> PlanLimits:
    return PLAN_LIMITS[resolve_plan(plan)]


def has_permission(plan: PlanLike, permission: str) -> bool:
    """Whether the plan grants the permission string.

    Matching is exact and case-sensitive.
    """
    return permission in _PERMISSION_SETS[resolve_plan(plan)]


def get_limit(plan: PlanLike, limit_name: LimitNameLike) -> int:
    """Return the configured limit for a plan.

    ``UNLIMITED`` (-1) is returned as is; callers doing quota arithmetic must
    check ``is_unlimited`` before comparing against usage.
    """
    limits = PLAN_LIMITS[resolve_plan(plan)]
    return getattr(limits, resolve_limit_name(limit_name).attribute)


validate_plan_tables(PLAN_FEATURE_PERMISSIONS, PLAN_LIMITS)
