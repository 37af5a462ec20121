"""GuardDescriptor dataclass and the POLICY marker."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from graphql_guard._types import GuardKey, GuardKind, GuardSource, Predicate, PredicateResult
from graphql_guard.exceptions import describe_target

__all__ = ["GUARD_EXTENSION", "MASK_EXTENSION", "POLICY", "GuardDescriptor"]

# Keys read from graphql-core ``extensions`` on types, fields and arguments.
GUARD_EXTENSION = "guard"
MASK_EXTENSION = "mask"


class _PolicyMarker:
    """Placeholder asking for the guard to come from the policy locator."""

    _instance: _PolicyMarker | None = None

    def __new__(cls) -> _PolicyMarker:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "POLICY"


POLICY: Any = _PolicyMarker()


@dataclass(frozen=True, slots=True)
class GuardDescriptor:
    """A single guard or mask with its target.

    Attributes:
        type_name: The object type the guard is attached to.
        field_name: The guarded field, or ``None`` for a type-level guard.
        argument_name: The guarded argument, if any.
        predicate: ``(parent, arguments, context) -> bool`` or an awaitable
            variant. ``None`` only for an unresolved ``POLICY`` marker.
        source: ``"inline"`` or ``"policy"``.
        kind: ``"guard"`` gates resolution, ``"mask"`` gates visibility.
        name: Human-readable name (used in logging).
    """

    type_name: str
    field_name: str | None
    argument_name: str | None
    predicate: Predicate | None
    source: GuardSource = "inline"
    kind: GuardKind = "guard"
    name: str = ""

    @property
    def key(self) -> GuardKey:
        return (self.type_name, self.field_name, self.argument_name)

    @property
    def target(self) -> str:
        """``"Type"``, ``"Type.field"`` or ``"Type.field(argument)"``."""
        return describe_target(self.type_name, self.field_name, self.argument_name)

    @property
    def is_policy_reference(self) -> bool:
        return self.predicate is None

    def evaluate(self, parent: Any, arguments: Mapping[str, Any], context: Any) -> PredicateResult:
        if self.predicate is None:
            raise RuntimeError(f"Policy reference for {self.target} was never resolved")
        return self.predicate(parent, arguments, context)
