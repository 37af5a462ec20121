"""Schema integration for graphql-guard."""

from __future__ import annotations

from graphql_guard.schema._guarded import GuardedSchema

__all__ = ["GuardedSchema"]
