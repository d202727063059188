"""Plan entitlements: permissions, limits, features and quotas."""

from .catalog import PlanComparison, PlanSummary, compare_plans, describe_plan, list_plans
from .exceptions import (
    EntitlementError,
    InvalidPlanError,
    PlanTableError,
    QuotaExceededError,
    UnknownFeatureError,
    UnknownLimitNameError,
)
from .features import PLAN_FEATURES, Feature, plan_has_feature, plan_has_features, upgrade_message
from .plans import (
    PLAN_FEATURE_PERMISSIONS,
    PLAN_LIMITS,
    PLAN_ORDER,
    UNLIMITED,
    LimitName,
    Plan,
    PlanLimits,
    get_limit,
    get_plan_limits,
    get_plan_permissions,
    has_permission,
    is_unlimited,
    plan_rank,
    resolve_plan,
    validate_plan_tables,
)
from .quota import UsageCheck, check_usage_limit, enforce_usage_limit
from .usage import UsageTracker

__all__ = [
    "EntitlementError",
    "Feature",
    "InvalidPlanError",
    "LimitName",
    "PLAN_FEATURES",
    "PLAN_FEATURE_PERMISSIONS",
    "PLAN_LIMITS",
    "PLAN_ORDER",
    "Plan",
    "PlanComparison",
    "PlanLimits",
    "PlanSummary",
    "PlanTableError",
    "QuotaExceededError",
    "UNLIMITED",
    "UnknownFeatureError",
    "UnknownLimitNameError",
    "UsageCheck",
    "UsageTracker",
    "check_usage_limit",
    "compare_plans",
    "describe_plan",
    "enforce_usage_limit",
    "get_limit",
    "get_plan_limits",
    "get_plan_permissions",
    "has_permission",
    "is_unlimited",
    "list_plans",
    "plan_has_feature",
    "plan_has_features",
    "plan_rank",
    "resolve_plan",
    "upgrade_message",
]
