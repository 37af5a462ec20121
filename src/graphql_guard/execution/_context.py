"""Execution context that lets exception-mode denials abort the execution."""

from __future__ import annotations

from typing import Any

from graphql import GraphQLError, GraphQLOutputType
from graphql.execution import ExecutionContext

from graphql_guard.exceptions import AuthorizationDenied

__all__ = ["GuardExecutionContext"]


class GuardExecutionContext(ExecutionContext):
    """``ExecutionContext`` that does not turn ``AuthorizationDenied`` into a field error.

    graphql-core catches every resolver exception and records it as a
    located field error. An ``AuthorizationDenied`` is re-raised instead,
    so it escapes ``execute`` and the caller gets no partial data. Every
    other error, ``FieldDenied`` included, keeps the standard handling and
    non-null propagation.
    """

    def handle_field_error(
        self, error: GraphQLError, return_type: GraphQLOutputType, *args: Any
    ) -> None:
        # graphql-core 3.2.10 added the response path as a third argument.
        if isinstance(error.original_error, AuthorizationDenied):
            raise error.original_error
        super().handle_field_error(error, return_type, *args)
