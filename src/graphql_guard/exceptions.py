"""Exception hierarchy for graphql-guard."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import Any

from graphql import GraphQLError, Node

__all__ = [
    "AuthorizationDenied",
    "ConfigurationError",
    "FieldDenied",
    "GuardError",
    "describe_target",
]


def describe_target(type_name: str, field_name: str | None, argument_name: str | None = None) -> str:
    """Render a guard target the way denial messages spell it.

    Example::

        describe_target("Query", "posts")            # "Query.posts"
        describe_target("Query", "posts", "userId")  # "Query.posts(userId)"
    """
    if field_name is None:
        return type_name
    if argument_name is None:
        return f"{type_name}.{field_name}"
    return f"{type_name}.{field_name}({argument_name})"


class GuardError(Exception):
    """Base exception for all graphql-guard errors."""


class ConfigurationError(GuardError):
    """The guard setup of a schema is invalid.

    Raised while a schema is being guarded, never while a request is
    executing: a guard attached to a type, field or argument that does not
    exist, two guards for the same target, a ``POLICY`` marker the policy
    locator cannot resolve, or registration after the registry was bound.
    """


class AuthorizationDenied(GuardError):  # noqa: N818
    """A guard denied access while the schema runs in exception mode.

    Propagates out of the whole execution; no partial ``data`` is returned.

    Attributes:
        type_name: The type declaring the denied field.
        field_name: The denied field.
        argument_name: The denied argument, if an argument guard denied.
        path: Response path of the denied field.

    Example::

        try:
            guarded.execute(query, context={"current_user": user})
        except AuthorizationDenied as exc:
            print(exc.type_name, exc.field_name, exc.path)
    """

    def __init__(
        self,
        *,
        type_name: str,
        field_name: str,
        argument_name: str | None = None,
        path: Sequence[str | int] = (),
        message: str | None = None,
    ) -> None:
        self.type_name = type_name
        self.field_name = field_name
        self.argument_name = argument_name
        self.path = list(path)
        if message is None:
            target = describe_target(type_name, field_name, argument_name)
            message = f"Not authorized to access: {target}"
        super().__init__(message)


class FieldDenied(GraphQLError, GuardError):  # noqa: N818
    """A guard denied access while the schema runs in error-collecting mode.

    A regular GraphQL error: graphql-core records it in
    ``ExecutionResult.errors``, resolves the field to ``null`` and applies
    non-null propagation. Built by ``format_denial``.
    """

    def __init__(
        self,
        message: str,
        *,
        type_name: str,
        field_name: str,
        argument_name: str | None = None,
        nodes: Collection[Node] | None = None,
        path: Sequence[str | int] | None = None,
        extensions: dict[str, Any] | None = None,
    ) -> None:
        nodes = list(nodes) if nodes else None
        super().__init__(message, nodes, path=path, extensions=extensions)
        self.type_name = type_name
        self.field_name = field_name
        self.argument_name = argument_name
