"""graphql-core middleware that routes every field through the interceptor."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from graphql import GraphQLResolveInfo

from graphql_guard.execution._event import FieldAccessEvent
from graphql_guard.execution._interceptor import AuthorizationInterceptor

__all__ = ["GuardMiddleware"]


class GuardMiddleware:
    """Field middleware calling the interceptor before each resolver.

    Pass it to graphql-core together with ``GuardExecutionContext``::

        execute(
            schema,
            document,
            context_value=ctx,
            middleware=[GuardMiddleware(interceptor)],
            execution_context_class=GuardExecutionContext,
        )
    """

    def __init__(self, interceptor: AuthorizationInterceptor) -> None:
        self._interceptor = interceptor

    def resolve(
        self,
        next_: Callable[..., Any],
        root: Any,
        info: GraphQLResolveInfo,
        **args: Any,
    ) -> Any:
        event = FieldAccessEvent.from_info(root, info, args)
        return self._interceptor.intercept(event, lambda: next_(root, info, **args))
