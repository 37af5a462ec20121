"""Shared protocols and type aliases for graphql-guard."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Literal, Protocol, Union, runtime_checkable

__all__ = [
    "ActorLike",
    "GuardKey",
    "GuardKind",
    "GuardSource",
    "OnDenied",
    "PolicyHandle",
    "PolicyLocator",
    "Predicate",
    "PredicateResult",
]

# Valid values for GuardConfig.on_denied.
OnDenied = Literal["raise", "error"]

# Where a guard descriptor came from.
GuardSource = Literal["inline", "policy"]

# What a descriptor gates: runtime access or schema visibility.
GuardKind = Literal["guard", "mask"]

# (type_name, field_name, argument_name); field_name is None for type-level guards.
GuardKey = tuple[str, Union[str, None], Union[str, None]]

PredicateResult = Union[bool, Awaitable[bool]]

# The universal signature for guards and masks: (parent, arguments, context).
Predicate = Callable[[Any, Mapping[str, Any], Any], PredicateResult]


@runtime_checkable
class ActorLike(Protocol):
    """Structural type for the principal stored in a request context.

    Any object with an ``id`` attribute satisfies this protocol. Guards
    are free to read anything else they need from it.

    Example::

        @dataclass
        class User:
            id: str
            role: str

        assert isinstance(User(id="1", role="admin"), ActorLike)
    """

    @property
    def id(self) -> int | str: ...


class PolicyHandle(Protocol):
    """What a policy locator hands back for a type.

    Both members are optional; a handle may expose field-level entries,
    a class-level entry point, or both.
    """

    fields: Mapping[str, Predicate]

    def authorize(self, parent: Any, arguments: Mapping[str, Any], context: Any) -> PredicateResult:
        ...


# Maps a GraphQL type name to its policy handle, or None when it has none.
PolicyLocator = Callable[[str], Union[PolicyHandle, Any, None]]
