"""GuardResolver — picks the guards that apply to a field access."""

from __future__ import annotations

from graphql_guard.exceptions import ConfigurationError
from graphql_guard.execution._event import FieldAccessEvent
from graphql_guard.registry._base import GuardDescriptor
from graphql_guard.registry._registry import GuardRegistry

__all__ = ["GuardResolver"]


class GuardResolver:
    """Determine which guards gate a field access.

    Precedence for the field itself: the field-level guard, otherwise the
    type-level guard of the type declaring the field, otherwise nothing.
    Exactly one of them is returned, never both. Argument guards for the
    arguments present in the access come first, in declaration order.

    Policy objects are already folded into the registry when it is bound,
    so resolving never calls the policy locator.

    Example::

        resolver = GuardResolver(registry)
        for guard in resolver.resolve(event):
            ...
    """

    def __init__(self, registry: GuardRegistry) -> None:
        if not registry.is_bound:
            raise ConfigurationError("GuardResolver needs a bound GuardRegistry")
        self._registry = registry

    @property
    def registry(self) -> GuardRegistry:
        return self._registry

    def field_level(self, type_name: str, field_name: str) -> GuardDescriptor | None:
        """Return the single guard gating ``type_name.field_name``."""
        descriptor = self._registry.field_guard(type_name, field_name)
        if descriptor is None:
            descriptor = self._registry.type_guard(type_name)
        return descriptor

    def resolve(self, event: FieldAccessEvent) -> tuple[GuardDescriptor, ...]:
        """Return the guards to evaluate for *event*, in evaluation order."""
        # Meta fields (__typename, __schema, __type) are governed by masking only.
        if event.field_name.startswith("__"):
            return ()

        checks = [
            descriptor
            for descriptor in self._registry.argument_guards(event.type_name, event.field_name)
            if descriptor.argument_name in event.arguments
        ]
        descriptor = self.field_level(event.type_name, event.field_name)
        if descriptor is not None:
            checks.append(descriptor)
        return tuple(checks)
