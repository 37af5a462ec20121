"""Configuration module for graphql-guard."""

from __future__ import annotations

from graphql_guard.config._config import GuardConfig

__all__ = ["GuardConfig"]
