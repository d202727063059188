"""Feature flags by plan and upgrade prompts."""

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Union

from .exceptions import UnknownFeatureError
from .plans import LimitName, Plan, PlanLike, resolve_plan


class Feature(str, Enum):
    ADVANCED_SCAN = "hasAdvancedScan"
    HISTORICAL_SCAN = "hasHistoricalScan"
    CUSTOM_RULES = "hasCustomRules"
    SCHEDULED_SCANS = "hasScheduledScans"
    API_ACCESS = "hasApiAccess"
    REPORTING = "hasReporting"
    EXPORT_REPORTS = "hasExportReports"
    TEAM_MANAGEMENT = "hasTeamManagement"
    SSO_LOGIN = "hasSsoLogin"
    ROLE_CUSTOMIZATION = "hasRoleCustomization"
    AUDIT_LOG = "hasAuditLog"
    PRIORITY_SUPPORT = "hasPrioritySuppport"  # stored spelling


FeatureLike = Union[Feature, str]

_PRO_FEATURES = frozenset({
    Feature.ADVANCED_SCAN,
    Feature.HISTORICAL_SCAN,
    Feature.SCHEDULED_SCANS,
    Feature.API_ACCESS,
    Feature.REPORTING,
    Feature.EXPORT_REPORTS,
    Feature.TEAM_MANAGEMENT,
})

_BUSINESS_FEATURES = _PRO_FEATURES | {
    Feature.CUSTOM_RULES,
    Feature.SSO_LOGIN,
    Feature.ROLE_CUSTOMIZATION,
    Feature.AUDIT_LOG,
}

PLAN_FEATURES: Mapping[Plan, frozenset[Feature]] = MappingProxyType({
    Plan.STARTER: frozenset({Feature.REPORTING}),
    Plan.PRO: _PRO_FEATURES,
    Plan.BUSINESS: _BUSINESS_FEATURES,
    Plan.ENTERPRISE: _BUSINESS_FEATURES | {Feature.PRIORITY_SUPPORT},
})

PLAN_UPGRADE_MESSAGES: Mapping[Union[Feature, LimitName], str] = MappingProxyType({
    Feature.ADVANCED_SCAN: "Upgrade to Pro plan or higher to access advanced scanning features.",
    Feature.HISTORICAL_SCAN: "Upgrade to Pro plan or higher to access historical scanning.",
    Feature.CUSTOM_RULES: "Upgrade to Business plan or higher to create custom security rules.",
    Feature.SCHEDULED_SCANS: "Upgrade to Pro plan or higher to schedule automated scans.",
    Feature.API_ACCESS: "Upgrade to Pro plan or higher to access the API.",
    Feature.EXPORT_REPORTS: "Upgrade to Pro plan or higher to export reports.",
    Feature.TEAM_MANAGEMENT: "Upgrade to Pro plan or higher to manage team members.",
    Feature.SSO_LOGIN: "Upgrade to Business plan or higher to use SSO login.",
    Feature.ROLE_CUSTOMIZATION: "Upgrade to Business plan or higher to customize roles.",
    Feature.AUDIT_LOG: "Upgrade to Business plan or higher to access audit logs.",
    Feature.PRIORITY_SUPPORT: "Upgrade to Enterprise plan to get priority support.",
    LimitName.SCANS_PER_DAY: (
        "You have reached your daily scan limit. Upgrade your plan for more scans per day."
    ),
    LimitName.MAX_WORKSPACES: (
        "You have reached the maximum number of workspaces. "
        "Upgrade your plan to create more workspaces."
    ),
    LimitName.MAX_USERS_PER_WORKSPACE: (
        "You have reached the maximum users per workspace. Upgrade your plan to add more users."
    ),
    LimitName.RETENTION_DAYS: (
        "Your plan has limited scan history. Upgrade for longer history retention."
    ),
})


def resolve_feature(value: FeatureLike) -> Feature:
    if isinstance(value, Feature):
        return value
    try:
        return Feature(value)
    except ValueError:
        raise UnknownFeatureError(value) from None


def get_plan_features(plan: PlanLike) -> frozenset[Feature]:
    return PLAN_FEATURES[resolve_plan(plan)]


def plan_has_feature(plan: PlanLike, feature: FeatureLike) -> bool:
    return resolve_feature(feature) in PLAN_FEATURES[resolve_plan(plan)]


def plan_has_features(
    plan: PlanLike,
    features: Iterable[FeatureLike],
    require_all: bool = True,
) -> bool:
    """Check several features at once.

    Args:
        plan: Plan to check
        features: Features to look up
        require_all: If True every feature must be available, otherwise one is enough
    """
    available = PLAN_FEATURES[resolve_plan(plan)]
    wanted = [resolve_feature(f) for f in features]
    if require_all:
        return all(f in available for f in wanted)
    return any(f in available for f in wanted)


def upgrade_message(key: Union[Feature, LimitName]) -> str:
    """Upgrade prompt for a missing feature or a reached limit."""
    return PLAN_UPGRADE_MESSAGES.get(key, "Upgrade your plan to unlock this feature.")
