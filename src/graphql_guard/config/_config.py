"""Immutable configuration for a guarded schema."""

from __future__ import annotations

from dataclasses import dataclass

from graphql_guard._types import OnDenied, PolicyLocator

__all__ = ["GuardConfig"]

_VALID_ON_DENIED: set[str] = {"raise", "error"}


@dataclass(frozen=True, slots=True)
class GuardConfig:
    """Per-schema guard configuration.

    Constructed once when a schema is guarded and passed by reference to
    every request. There is no process-wide instance.

    Attributes:
        on_denied: Behavior when a guard denies.
            ``"raise"`` aborts the execution with ``AuthorizationDenied``.
            ``"error"`` nulls the field and records a ``FieldDenied`` error.
        policy_locator: Callable mapping a type name to its policy object,
            or ``None`` to disable policy-object lookup.
        log_guard_decisions: Log every guard evaluation and visibility plan.
        error_extensions: Attach a machine-readable ``extensions`` map to
            ``FieldDenied`` errors.

    Example::

        config = GuardConfig(on_denied="error")
        verbose = config.merge(log_guard_decisions=True)
    """

    on_denied: OnDenied = "raise"
    policy_locator: PolicyLocator | None = None
    log_guard_decisions: bool = False
    error_extensions: bool = False

    def __post_init__(self) -> None:
        if self.on_denied not in _VALID_ON_DENIED:
            raise ValueError(
                f"on_denied must be one of {_VALID_ON_DENIED!r}, got {self.on_denied!r}"
            )
        if self.policy_locator is not None and not callable(self.policy_locator):
            raise ValueError(f"policy_locator must be callable, got {self.policy_locator!r}")

    @property
    def raises(self) -> bool:
        """True in exception mode."""
        return self.on_denied == "raise"

    def merge(
        self,
        *,
        on_denied: OnDenied | None = None,
        policy_locator: PolicyLocator | None = None,
        log_guard_decisions: bool | None = None,
        error_extensions: bool | None = None,
    ) -> GuardConfig:
        """Return a new config with non-None overrides applied.

        Args:
            on_denied: Override for on_denied (ignored if None).
            policy_locator: Override for policy_locator (ignored if None).
            log_guard_decisions: Override for log_guard_decisions (ignored if None).
            error_extensions: Override for error_extensions (ignored if None).

        Returns:
            A new ``GuardConfig`` with overrides merged.

        Example::

            base = GuardConfig()
            collecting = base.merge(on_denied="error")
        """
        return GuardConfig(
            on_denied=on_denied if on_denied is not None else self.on_denied,
            policy_locator=(
                policy_locator if policy_locator is not None else self.policy_locator
            ),
            log_guard_decisions=(
                log_guard_decisions
                if log_guard_decisions is not None
                else self.log_guard_decisions
            ),
            error_extensions=(
                error_extensions if error_extensions is not None else self.error_extensions
            ),
        )
