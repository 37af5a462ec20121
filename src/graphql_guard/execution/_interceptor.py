"""Authorization interceptor — gates each field before its resolver runs."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from inspect import isawaitable
from typing import Any

from graphql_guard._audit import log_guard_evaluation
from graphql_guard.config._config import GuardConfig
from graphql_guard.exceptions import AuthorizationDenied, describe_target
from graphql_guard.execution._event import FieldAccessEvent
from graphql_guard.execution._format import format_denial
from graphql_guard.execution._outcome import PROCEED, Abort, DenialOutcome, MaskWithError
from graphql_guard.execution._resolver import GuardResolver
from graphql_guard.registry._base import GuardDescriptor

__all__ = ["AuthorizationInterceptor"]


class AuthorizationInterceptor:
    """Evaluate the guards of a field access and enforce the verdict.

    Stays synchronous while every predicate is; the first awaitable
    predicate result switches to a coroutine for the rest of the checks and
    the resolver, leaving sibling fields to the engine's scheduler. Holds
    no per-event state, so one instance serves concurrent accesses.

    On denial:

    - exception mode raises ``AuthorizationDenied``;
    - error-collecting mode raises the ``FieldDenied`` GraphQL error, which
      graphql-core records before nulling the field.

    Example::

        interceptor = AuthorizationInterceptor(GuardResolver(registry), GuardConfig())
        value = interceptor.intercept(event, lambda: resolver(root, info, **args))
    """

    def __init__(self, resolver: GuardResolver, config: GuardConfig) -> None:
        self._resolver = resolver
        self._config = config

    @property
    def config(self) -> GuardConfig:
        return self._config

    def intercept(self, event: FieldAccessEvent, proceed: Callable[[], Any]) -> Any:
        """Run the guards for *event*, then *proceed* if they all allow.

        Returns the resolver's value unchanged, or an awaitable of it when a
        guard turned out asynchronous.
        """
        checks = self._resolver.resolve(event)
        if not checks:
            return proceed()

        for index, descriptor in enumerate(checks):
            result = descriptor.evaluate(event.parent, event.arguments, event.context)
            if isawaitable(result):
                return self._intercept_async(event, checks, index, result, proceed)
            self._enforce(event, descriptor, bool(result))
        return proceed()

    async def _intercept_async(
        self,
        event: FieldAccessEvent,
        checks: Sequence[GuardDescriptor],
        index: int,
        pending: Awaitable[bool],
        proceed: Callable[[], Any],
    ) -> Any:
        self._enforce(event, checks[index], bool(await pending))
        for descriptor in checks[index + 1 :]:
            result = descriptor.evaluate(event.parent, event.arguments, event.context)
            if isawaitable(result):
                result = await result
            self._enforce(event, descriptor, bool(result))

        value = proceed()
        if isawaitable(value):
            value = await value
        return value

    def decide(
        self,
        event: FieldAccessEvent,
        descriptor: GuardDescriptor,
        allowed: bool,
    ) -> DenialOutcome:
        """Map a predicate verdict to an outcome under the configured mode."""
        if allowed:
            return PROCEED
        target = describe_target(event.type_name, event.field_name, descriptor.argument_name)
        if self._config.raises:
            return Abort(message=f"Not authorized to access: {target}", path=event.path)
        return MaskWithError(
            message=f"Not authorized to access {target}",
            path=event.path,
            locations=event.locations,
        )

    def _enforce(self, event: FieldAccessEvent, descriptor: GuardDescriptor, allowed: bool) -> None:
        if self._config.log_guard_decisions:
            log_guard_evaluation(descriptor=descriptor, event=event, allowed=allowed)

        outcome = self.decide(event, descriptor, allowed)
        if isinstance(outcome, Abort):
            raise AuthorizationDenied(
                type_name=event.type_name,
                field_name=event.field_name,
                argument_name=descriptor.argument_name,
                path=outcome.path,
                message=outcome.message,
            )
        if isinstance(outcome, MaskWithError):
            raise format_denial(
                outcome,
                event,
                descriptor,
                extensions=self._config.error_extensions,
            )
