"""Denial outcomes produced by the authorization interceptor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from graphql.language import SourceLocation

__all__ = ["PROCEED", "Abort", "DenialOutcome", "MaskWithError", "Proceed"]


@dataclass(frozen=True, slots=True)
class Proceed:
    """Access granted; run the resolver."""


@dataclass(frozen=True, slots=True)
class Abort:
    """Access denied in exception mode; stop the whole execution."""

    message: str
    path: tuple[str | int, ...]


@dataclass(frozen=True, slots=True)
class MaskWithError:
    """Access denied in error-collecting mode; null the field and report."""

    message: str
    path: tuple[str | int, ...]
    locations: tuple[SourceLocation, ...]


PROCEED = Proceed()

DenialOutcome = Union[Proceed, Abort, MaskWithError]
