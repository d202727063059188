"""Plan catalog: display details and plan comparison."""

from typing import Dict, List, Optional

from pydantic import BaseModel

from ..config.settings import Settings, get_settings
from .features import PLAN_FEATURES, Feature
from .plans import (
    PLAN_ORDER,
    LimitName,
    Plan,
    PlanLike,
    get_limit,
    get_plan_permissions,
    is_unlimited,
    plan_rank,
    resolve_plan,
)

PLAN_DISPLAY_NAMES = {
    Plan.STARTER: "Starter",
    Plan.PRO: "Professional",
    Plan.BUSINESS: "Business",
    Plan.ENTERPRISE: "Enterprise",
}

PLAN_DESCRIPTIONS = {
    Plan.STARTER: "Basic security scanning for individual developers",
    Plan.PRO: "Advanced security features for professional teams",
    Plan.BUSINESS: "Comprehensive security platform for businesses",
    Plan.ENTERPRISE: "Full-featured security platform with custom support",
}


class PlanSummary(BaseModel):
    """Public description of a plan."""

    type: Plan
    name: str
    description: str
    price: float
    limits: Dict[str, int]
    permissions: List[str]
    features: List[Feature]


class LimitComparison(BaseModel):
    plan_a: int
    plan_b: int
    difference: Optional[int] = None  # None when either side is unlimited


class FeatureComparison(BaseModel):
    plan_a: bool
    plan_b: bool


class PlanComparison(BaseModel):
    plan_a: PlanSummary
    plan_b: PlanSummary
    is_upgrade: bool
    limits: Dict[str, LimitComparison]
    features: Dict[str, FeatureComparison]
    permissions_gained: List[str]
    permissions_lost: List[str]


def get_plan_price(plan: PlanLike, settings: Optional[Settings] = None) -> float:
    settings = settings or get_settings()
    prices = {
        Plan.STARTER: settings.plan_price_starter,
        Plan.PRO: settings.plan_price_pro,
        Plan.BUSINESS: settings.plan_price_business,
        Plan.ENTERPRISE: settings.plan_price_enterprise,
    }
    return prices[resolve_plan(plan)]


def describe_plan(plan: PlanLike, settings: Optional[Settings] = None) -> PlanSummary:
    plan = resolve_plan(plan)
    return PlanSummary(
        type=plan,
        name=PLAN_DISPLAY_NAMES[plan],
        description=PLAN_DESCRIPTIONS[plan],
        price=get_plan_price(plan, settings),
        limits={name.value: get_limit(plan, name) for name in LimitName},
        permissions=list(get_plan_permissions(plan)),
        features=[f for f in Feature if f in PLAN_FEATURES[plan]],
    )


def list_plans(settings: Optional[Settings] = None) -> List[PlanSummary]:
    """All plans, lowest entitlement first."""
    return [describe_plan(plan, settings) for plan in PLAN_ORDER]


def compare_plans(
    plan_a: PlanLike,
    plan_b: PlanLike,
    settings: Optional[Settings] = None,
) -> PlanComparison:
    """Compare limits, features and permissions going from plan_a to plan_b."""
    plan_a = resolve_plan(plan_a)
    plan_b = resolve_plan(plan_b)

    limits = {}
    for name in LimitName:
        a = get_limit(plan_a, name)
        b = get_limit(plan_b, name)
        difference = None if is_unlimited(a) or is_unlimited(b) else b - a
        limits[name.value] = LimitComparison(plan_a=a, plan_b=b, difference=difference)

    features = {
        feature.value: FeatureComparison(
            plan_a=feature in PLAN_FEATURES[plan_a],
            plan_b=feature in PLAN_FEATURES[plan_b],
        )
        for feature in Feature
    }

    perms_a = get_plan_permissions(plan_a)
    perms_b = get_plan_permissions(plan_b)

    return PlanComparison(
        plan_a=describe_plan(plan_a, settings),
        plan_b=describe_plan(plan_b, settings),
        is_upgrade=plan_rank(plan_b) > plan_rank(plan_a),
        limits=limits,
        features=features,
        permissions_gained=[p for p in perms_b if p not in perms_a],
        permissions_lost=[p for p in perms_a if p not in perms_b],
    )
