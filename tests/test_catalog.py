"""Tests for the plan catalog and plan comparison."""

import pytest

from reposcan.billing.catalog import compare_plans, describe_plan, get_plan_price, list_plans
from reposcan.billing.exceptions import InvalidPlanError
from reposcan.billing.features import Feature
from reposcan.billing.plans import Plan
from reposcan.config.settings import Settings


PRICE_VARS = (
    "PLAN_PRICE_STARTER",
    "PLAN_PRICE_PRO",
    "PLAN_PRICE_BUSINESS",
    "PLAN_PRICE_ENTERPRISE",
)


@pytest.fixture(autouse=True)
def clean_price_env(monkeypatch):
    for name in PRICE_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return Settings(_env_file=None, plan_price_pro=59, plan_price_enterprise=499)


class TestDescribePlan:
    def test_starter(self, settings):
        summary = describe_plan(Plan.STARTER, settings)

        assert summary.type is Plan.STARTER
        assert summary.name == "Starter"
        assert summary.price == 0
        assert summary.limits["scansPerDay"] == 3
        assert summary.features == [Feature.REPORTING]
        assert "SCAN:RUN" in summary.permissions

    def test_descriptions(self, settings):
        assert describe_plan(Plan.STARTER, settings).description == (
            "Basic security scanning for individual developers"
        )
        assert describe_plan("ENTERPRISE", settings).description == (
            "Full-featured security platform with custom support"
        )

    def test_price_from_settings(self, settings):
        assert get_plan_price(Plan.PRO, settings) == 59
        assert get_plan_price("BUSINESS", settings) == 99

    def test_default_prices(self):
        defaults = Settings(_env_file=None)
        assert [get_plan_price(p, defaults) for p in Plan] == [0, 49, 99, 299]

    def test_list_plans_in_order(self, settings):
        names = [summary.name for summary in list_plans(settings)]
        assert names == ["Starter", "Professional", "Business", "Enterprise"]

    def test_serializes(self, settings):
        data = describe_plan(Plan.ENTERPRISE, settings).model_dump(mode="json")
        assert data["type"] == "ENTERPRISE"
        assert data["limits"]["maxWorkspaces"] == -1
        assert "hasPrioritySuppport" in data["features"]


class TestComparePlans:
    def test_upgrade(self, settings):
        comparison = compare_plans(Plan.STARTER, Plan.PRO, settings)

        assert comparison.is_upgrade
        assert comparison.limits["scansPerDay"].difference == 7
        assert comparison.limits["retentionDays"].difference == 60
        assert set(comparison.permissions_gained) == {
            "WORKSPACE:EDIT",
            "REPOSITORY:ADD",
            "SCHEDULE:CREATE",
            "REPORT:EXPORT",
        }
        assert comparison.permissions_lost == []
        assert comparison.features["hasScheduledScans"].plan_b
        assert not comparison.features["hasScheduledScans"].plan_a

    def test_unlimited_has_no_difference(self, settings):
        comparison = compare_plans(Plan.BUSINESS, Plan.ENTERPRISE, settings)

        scans = comparison.limits["scansPerDay"]
        assert scans.plan_a == 30
        assert scans.plan_b == -1
        assert scans.difference is None
        assert comparison.limits["retentionDays"].difference == 185

    def test_downgrade(self, settings):
        comparison = compare_plans("ENTERPRISE", "STARTER", settings)

        assert not comparison.is_upgrade
        assert "API:USE" in comparison.permissions_lost
        assert comparison.permissions_gained == []

    def test_same_plan(self, settings):
        comparison = compare_plans(Plan.PRO, Plan.PRO, settings)

        assert not comparison.is_upgrade
        assert all(c.difference == 0 for c in comparison.limits.values())

    def test_invalid_plan(self, settings):
        with pytest.raises(InvalidPlanError):
            compare_plans(Plan.PRO, "TEAM", settings)
