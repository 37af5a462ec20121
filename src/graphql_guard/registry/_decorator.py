"""@guard and @mask decorators — register predicates on a GuardRegistry."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from graphql_guard.registry._registry import GuardRegistry

__all__ = ["guard", "mask"]

F = TypeVar("F", bound=Callable[..., object])


def guard(
    type_name: str,
    field_name: str | None = None,
    *,
    argument: str | None = None,
    registry: GuardRegistry,
) -> Callable[[F], F]:
    """Decorator that registers a guard for a type, field or argument.

    The decorated function receives ``(parent, arguments, context)`` and
    returns a bool, or an awaitable of one.

    Args:
        type_name: The object type name.
        field_name: The field name. Omit for a type-level guard.
        argument: Guard a single argument of the field instead.
        registry: The registry to register on.

    Returns:
        A decorator that registers the function and returns it unchanged.

    Example::

        @guard("Query", "posts", registry=registry)
        def own_posts(obj, args, ctx) -> bool:
            return args["userId"] == ctx["current_user"].id

        @guard("Post", registry=registry)
        async def admins_only(post, args, ctx) -> bool:
            return await ctx["roles"].is_admin(ctx["current_user"])
    """

    def decorator(fn: F) -> F:
        registry.register(
            type_name,
            field_name,
            fn,
            argument=argument,
            name=fn.__name__,
        )
        return fn

    return decorator


def mask(
    type_name: str,
    field_name: str,
    *,
    argument: str | None = None,
    registry: GuardRegistry,
) -> Callable[[F], F]:
    """Decorator that registers a mask for a field or argument.

    The decorated function receives ``(root_value, variables, context)``
    before the query is validated and returns whether the element is
    visible for that request.

    Example::

        @mask("Query", "auditLog", registry=registry)
        def staff_only(root, variables, ctx) -> bool:
            return ctx["current_user"].role == "staff"
    """

    def decorator(fn: F) -> F:
        registry.register_mask(
            type_name,
            field_name,
            fn,
            argument=argument,
            name=fn.__name__,
        )
        return fn

    return decorator
