"""GuardedSchema — run graphql-core queries with guards and masks applied."""

from __future__ import annotations

from asyncio import iscoroutine
from collections.abc import Awaitable, Mapping
from inspect import isawaitable
from typing import Any, cast

from graphql import (
    DocumentNode,
    ExecutionResult,
    GraphQLError,
    GraphQLSchema,
    execute,
    parse,
    validate,
)

from graphql_guard.config._config import GuardConfig
from graphql_guard.execution._context import GuardExecutionContext
from graphql_guard.execution._interceptor import AuthorizationInterceptor
from graphql_guard.execution._middleware import GuardMiddleware
from graphql_guard.execution._resolver import GuardResolver
from graphql_guard.masking._plan import VisibilityPlan
from graphql_guard.masking._planner import MaskPlanner
from graphql_guard.masking._view import build_schema_view
from graphql_guard.registry._registry import GuardRegistry

__all__ = ["GuardedSchema"]


class GuardedSchema:
    """A graphql-core schema with field-level authorization.

    Construction binds the registry to the schema (collecting ``guard`` and
    ``mask`` extensions, checking targets and resolving policy objects) and
    wires the interceptor once. Misconfiguration therefore fails here, not
    on the first request. The instance is read-only afterwards and can
    serve concurrent requests.

    Each request then:

    1. plans visibility from the masks (when the schema has any),
    2. validates against the resulting schema view,
    3. executes with the guard middleware.

    Args:
        schema: The schema to guard.
        config: Guard configuration. Defaults to exception mode.
        registry: Guards registered in code. A fresh registry is used when
            omitted; either way it is bound to *schema* here.

    Example::

        guarded = GuardedSchema(schema, config=GuardConfig(on_denied="error"))
        result = guarded.execute(
            "{ posts(userId: 1) { id title } }",
            context={"current_user": user},
        )
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        *,
        config: GuardConfig | None = None,
        registry: GuardRegistry | None = None,
    ) -> None:
        self.schema = schema
        self.config = config if config is not None else GuardConfig()
        target_registry = registry if registry is not None else GuardRegistry()
        self.registry = target_registry.bind(schema, policy_locator=self.config.policy_locator)

        self.interceptor = AuthorizationInterceptor(GuardResolver(self.registry), self.config)
        self.middleware = GuardMiddleware(self.interceptor)
        self._planner = (
            MaskPlanner(self.registry, self.config) if self.registry.has_masks() else None
        )

    @property
    def has_masks(self) -> bool:
        return self._planner is not None

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def plan(
        self,
        context: Any,
        *,
        variables: Mapping[str, Any] | None = None,
        root_value: Any = None,
    ) -> VisibilityPlan:
        """Compute the visibility plan for one request."""
        if self._planner is None:
            return VisibilityPlan()
        return self._planner.plan(context, variables=variables, root_value=root_value)

    async def plan_async(
        self,
        context: Any,
        *,
        variables: Mapping[str, Any] | None = None,
        root_value: Any = None,
    ) -> VisibilityPlan:
        if self._planner is None:
            return VisibilityPlan()
        return await self._planner.plan_async(context, variables=variables, root_value=root_value)

    def schema_for(
        self,
        context: Any,
        *,
        variables: Mapping[str, Any] | None = None,
        root_value: Any = None,
    ) -> GraphQLSchema:
        """Return the schema this request may see.

        Example::

            view = guarded.schema_for({"current_user": user})
            "auditLog" in view.query_type.fields  # False for non-staff
        """
        if self._planner is None:
            return self.schema
        plan = self._planner.plan(context, variables=variables, root_value=root_value)
        return build_schema_view(self.schema, plan)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(
        self,
        source: str | DocumentNode,
        *,
        variables: Mapping[str, Any] | None = None,
        context: Any = None,
        operation_name: str | None = None,
        root_value: Any = None,
    ) -> ExecutionResult:
        """Parse, validate and execute a query synchronously.

        Returns:
            The ``ExecutionResult``. Syntax and validation errors (including
            masked fields and arguments) come back as
            ``ExecutionResult(data=None, errors=[...])``; guard denials in
            error-collecting mode are listed in ``errors``.

        Raises:
            AuthorizationDenied: A guard denied in exception mode.
            GuardError: A mask predicate was asynchronous.
            RuntimeError: A guard or resolver was asynchronous.
        """
        document = self._parse(source)
        if isinstance(document, ExecutionResult):
            return document

        view = self.schema_for(context, variables=variables, root_value=root_value)
        errors = validate(view, document)
        if errors:
            return ExecutionResult(data=None, errors=errors)

        result = self._execute(view, document, variables, context, operation_name, root_value)
        if isawaitable(result):
            if iscoroutine(result):
                result.close()
            raise RuntimeError("GraphQL execution failed to complete synchronously.")
        return cast(ExecutionResult, result)

    async def execute_async(
        self,
        source: str | DocumentNode,
        *,
        variables: Mapping[str, Any] | None = None,
        context: Any = None,
        operation_name: str | None = None,
        root_value: Any = None,
    ) -> ExecutionResult:
        """Like ``execute``, awaiting asynchronous masks, guards and resolvers.

        Example::

            result = await guarded.execute_async(query, context={"current_user": user})
        """
        document = self._parse(source)
        if isinstance(document, ExecutionResult):
            return document

        plan = await self.plan_async(context, variables=variables, root_value=root_value)
        view = build_schema_view(self.schema, plan)
        errors = validate(view, document)
        if errors:
            return ExecutionResult(data=None, errors=errors)

        result = self._execute(view, document, variables, context, operation_name, root_value)
        if isawaitable(result):
            return await cast(Awaitable[ExecutionResult], result)
        return cast(ExecutionResult, result)

    def _parse(self, source: str | DocumentNode) -> DocumentNode | ExecutionResult:
        if isinstance(source, DocumentNode):
            return source
        try:
            return parse(source)
        except GraphQLError as error:
            return ExecutionResult(data=None, errors=[error])

    def _execute(
        self,
        view: GraphQLSchema,
        document: DocumentNode,
        variables: Mapping[str, Any] | None,
        context: Any,
        operation_name: str | None,
        root_value: Any,
    ) -> ExecutionResult | Awaitable[ExecutionResult]:
        return execute(
            view,
            document,
            root_value=root_value,
            context_value=context,
            variable_values=dict(variables) if variables is not None else None,
            operation_name=operation_name,
            middleware=[self.middleware],
            execution_context_class=GuardExecutionContext,
        )

    def __repr__(self) -> str:
        mode = self.config.on_denied
        return f"<GuardedSchema mode={mode!r} {self.registry!r}>"
