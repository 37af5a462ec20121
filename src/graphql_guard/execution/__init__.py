"""Execution module for graphql-guard — per-field authorization interception."""

from __future__ import annotations

from graphql_guard.execution._context import GuardExecutionContext
from graphql_guard.execution._event import FieldAccessEvent
from graphql_guard.execution._format import DENIED_ERROR_CODE, format_denial
from graphql_guard.execution._interceptor import AuthorizationInterceptor
from graphql_guard.execution._middleware import GuardMiddleware
from graphql_guard.execution._outcome import PROCEED, Abort, DenialOutcome, MaskWithError, Proceed
from graphql_guard.execution._resolver import GuardResolver

__all__ = [
    "DENIED_ERROR_CODE",
    "PROCEED",
    "Abort",
    "AuthorizationInterceptor",
    "DenialOutcome",
    "FieldAccessEvent",
    "GuardExecutionContext",
    "GuardMiddleware",
    "GuardResolver",
    "MaskWithError",
    "Proceed",
    "format_denial",
]
