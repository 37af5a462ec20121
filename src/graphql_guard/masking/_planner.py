"""MaskPlanner — evaluates mask predicates before a request is validated."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from inspect import isawaitable
from types import MappingProxyType
from typing import Any

from graphql_guard._audit import log_visibility_plan
from graphql_guard._types import GuardKey
from graphql_guard.config._config import GuardConfig
from graphql_guard.exceptions import GuardError
from graphql_guard.masking._plan import VisibilityPlan
from graphql_guard.registry._registry import GuardRegistry

__all__ = ["MaskPlanner"]


class MaskPlanner:
    """Compute a ``VisibilityPlan`` from the masks of a registry.

    Visibility has to be known before any data is fetched, so there is no
    parent object: each mask is called as
    ``predicate(root_value, variables, context)``, where *variables* are
    the request's raw variable values.

    Example::

        planner = MaskPlanner(registry, GuardConfig())
        plan = planner.plan({"current_user": user}, variables={"userId": "1"})
    """

    def __init__(self, registry: GuardRegistry, config: GuardConfig) -> None:
        self._masks = registry.masks()
        self._config = config

    def plan(
        self,
        context: Any,
        *,
        variables: Mapping[str, Any] | None = None,
        root_value: Any = None,
    ) -> VisibilityPlan:
        """Evaluate every mask synchronously.

        Raises:
            GuardError: If a mask predicate returns an awaitable; use
                ``plan_async`` for asynchronous masks.
        """
        arguments = MappingProxyType(dict(variables or {}))
        decisions: dict[GuardKey, bool] = {}
        for descriptor in self._masks:
            result = descriptor.evaluate(root_value, arguments, context)
            if isawaitable(result):
                close = getattr(result, "close", None)
                if close is not None:
                    close()
                raise GuardError(
                    f"Mask {descriptor.name!r} on {descriptor.target} is asynchronous; "
                    f"use plan_async()"
                )
            decisions[descriptor.key] = bool(result)
        return self._finish(decisions)

    async def plan_async(
        self,
        context: Any,
        *,
        variables: Mapping[str, Any] | None = None,
        root_value: Any = None,
    ) -> VisibilityPlan:
        """Evaluate every mask, awaiting asynchronous ones concurrently."""
        arguments = MappingProxyType(dict(variables or {}))
        decisions: dict[GuardKey, bool] = {}
        pending: dict[GuardKey, Any] = {}
        for descriptor in self._masks:
            result = descriptor.evaluate(root_value, arguments, context)
            if isawaitable(result):
                pending[descriptor.key] = result
            else:
                decisions[descriptor.key] = bool(result)

        if pending:
            results = await asyncio.gather(*pending.values())
            for key, result in zip(pending, results):
                decisions[key] = bool(result)
        return self._finish(decisions)

    def _finish(self, decisions: dict[GuardKey, bool]) -> VisibilityPlan:
        plan = VisibilityPlan(decisions)
        if self._config.log_guard_decisions:
            log_visibility_plan(plan)
        return plan
