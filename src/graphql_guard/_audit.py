"""Audit logging for guard evaluations and visibility plans."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graphql_guard.execution._event import FieldAccessEvent
    from graphql_guard.masking._plan import VisibilityPlan
    from graphql_guard.registry._base import GuardDescriptor

__all__ = ["log_guard_evaluation", "log_visibility_plan"]

logger = logging.getLogger("graphql_guard")


def _render_path(path: Sequence[str | int]) -> str:
    return ".".join(str(key) for key in path) or "<root>"


def log_guard_evaluation(
    *,
    descriptor: GuardDescriptor,
    event: FieldAccessEvent,
    allowed: bool,
) -> None:
    """Log a single guard decision.

    Logging levels:
    - INFO: Summary (target, verdict, response path)
    - DEBUG: Detailed (guard name and where it came from)

    Example::

        log_guard_evaluation(descriptor=guard, event=event, allowed=False)
    """
    verdict = "allowed" if allowed else "denied"
    logger.info(
        "Guard evaluation: %s %s at %s",
        descriptor.target,
        verdict,
        _render_path(event.path),
    )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Guard %r (%s) on %s for field %s.%s",
            descriptor.name,
            descriptor.source,
            descriptor.target,
            event.type_name,
            event.field_name,
        )


def log_visibility_plan(plan: VisibilityPlan) -> None:
    """Log the outcome of a mask planning pass.

    INFO carries the number of hidden elements, DEBUG lists them.
    """
    hidden = plan.hidden
    logger.info(
        "Visibility plan: %d of %d masked element(s) hidden",
        len(hidden),
        len(plan.decisions),
    )

    if hidden and logger.isEnabledFor(logging.DEBUG):
        logger.debug("Hidden elements: %s", sorted(plan.hidden_targets()))
