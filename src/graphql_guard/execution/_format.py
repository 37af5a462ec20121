"""Turn a denial into graphql-core's standard error object."""

from __future__ import annotations

from typing import Any

from graphql_guard.exceptions import FieldDenied
from graphql_guard.execution._event import FieldAccessEvent
from graphql_guard.execution._outcome import MaskWithError
from graphql_guard.registry._base import GuardDescriptor

__all__ = ["DENIED_ERROR_CODE", "format_denial"]

DENIED_ERROR_CODE = "unauthorizedField"


def format_denial(
    outcome: MaskWithError,
    event: FieldAccessEvent,
    descriptor: GuardDescriptor,
    *,
    extensions: bool = False,
) -> FieldDenied:
    """Build the ``FieldDenied`` error reported for a denied field.

    The error carries the field's nodes and response path, so graphql-core
    reports it like any other resolver error::

        {"message": "Not authorized to access Post.id",
         "locations": [{"line": 1, "column": 48}],
         "path": ["posts", 0, "id"]}

    Args:
        outcome: The interceptor's decision.
        event: The denied field access.
        descriptor: The guard that denied.
        extensions: Add ``{"code", "typeName", "fieldName"[, "argumentName"]}``.
    """
    error_extensions: dict[str, Any] | None = None
    if extensions:
        error_extensions = {
            "code": DENIED_ERROR_CODE,
            "typeName": event.type_name,
            "fieldName": event.field_name,
        }
        if descriptor.argument_name is not None:
            error_extensions["argumentName"] = descriptor.argument_name

    return FieldDenied(
        outcome.message,
        type_name=event.type_name,
        field_name=event.field_name,
        argument_name=descriptor.argument_name,
        nodes=list(event.nodes) or None,
        path=list(outcome.path),
        extensions=error_extensions,
    )
