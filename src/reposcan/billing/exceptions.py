"""Exceptions raised by plan entitlement checks."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .quota import UsageCheck


class EntitlementError(Exception):
    """Base exception for plan entitlement errors."""
    pass


class InvalidPlanError(EntitlementError, ValueError):
    """Raised when a plan value is not one of the defined plans."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid plan: {value!r}")


class UnknownLimitNameError(EntitlementError, KeyError):
    """Raised when a limit name is not part of the plan limits record."""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Unknown limit name: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownFeatureError(EntitlementError, KeyError):
    """Raised when a feature name is not defined."""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Unknown feature: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class PlanTableError(EntitlementError):
    """Raised when the plan tables do not cover every plan exactly once."""
    pass


class QuotaExceededError(EntitlementError):
    """Raised when usage has reached the plan limit."""

    def __init__(self, check: "UsageCheck", message: str):
        self.check = check
        self.message = message
        super().__init__(message)
