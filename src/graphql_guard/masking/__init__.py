"""Masking module for graphql-guard — per-request schema visibility."""

from __future__ import annotations

from graphql_guard.masking._plan import VisibilityPlan
from graphql_guard.masking._planner import MaskPlanner
from graphql_guard.masking._view import build_schema_view

__all__ = ["MaskPlanner", "VisibilityPlan", "build_schema_view"]
