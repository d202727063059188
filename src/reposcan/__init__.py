"""reposcan - plan entitlements for repository security scanning."""

from .billing import Plan, get_limit, has_permission

__version__ = "0.1.0"

__all__ = [
    "Plan",
    "get_limit",
    "has_permission",
]
