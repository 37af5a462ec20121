"""Policy objects — per-type authorization found through a locator."""

from graphql_guard.policy._base import Policy
from graphql_guard.policy._locator import ConventionPolicyLocator

__all__ = ["ConventionPolicyLocator", "Policy"]
