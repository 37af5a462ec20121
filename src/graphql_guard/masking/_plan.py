"""VisibilityPlan — per-request visibility of masked fields and arguments."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from graphql_guard._types import GuardKey
from graphql_guard.exceptions import describe_target

__all__ = ["VisibilityPlan"]


@dataclass(frozen=True, slots=True)
class VisibilityPlan:
    """Which masked elements the current request may see.

    Built once per request before validation and never modified or shared
    afterwards. Elements without a mask are always visible.

    Attributes:
        decisions: ``(type, field, argument)`` key to ``True`` (visible) or
            ``False`` (hidden), for every masked element.

    Example::

        plan = VisibilityPlan({("Query", "auditLog", None): False})
        plan.is_visible("Query", "auditLog")  # False
        plan.is_visible("Query", "posts")     # True
    """

    decisions: Mapping[GuardKey, bool] = field(default_factory=dict)
    hidden: frozenset[GuardKey] = field(init=False, default=frozenset())

    def __post_init__(self) -> None:
        decisions = MappingProxyType(dict(self.decisions))
        # Use object.__setattr__ because the dataclass is frozen
        object.__setattr__(self, "decisions", decisions)
        object.__setattr__(
            self, "hidden", frozenset(key for key, visible in decisions.items() if not visible)
        )

    @property
    def hides_anything(self) -> bool:
        return bool(self.hidden)

    def is_visible(self, type_name: str, field_name: str, argument: str | None = None) -> bool:
        return self.decisions.get((type_name, field_name, argument), True)

    def hidden_fields(self, type_name: str) -> frozenset[str]:
        """Names of the hidden fields of *type_name*."""
        return frozenset(
            field_name
            for hidden_type, field_name, argument in self.hidden
            if hidden_type == type_name and field_name is not None and argument is None
        )

    def hidden_arguments(self, type_name: str, field_name: str) -> frozenset[str]:
        """Names of the hidden arguments of ``type_name.field_name``."""
        return frozenset(
            argument
            for hidden_type, hidden_field, argument in self.hidden
            if hidden_type == type_name and hidden_field == field_name and argument is not None
        )

    def hidden_targets(self) -> list[str]:
        return [describe_target(*key) for key in self.hidden]
