"""GuardRegistry — stores guards and masks keyed by schema coordinates."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, cast

from graphql import GraphQLObjectType, GraphQLSchema, is_object_type

from graphql_guard._types import GuardKey, GuardKind, Predicate, PolicyLocator
from graphql_guard.exceptions import ConfigurationError, describe_target
from graphql_guard.registry._base import POLICY, GuardDescriptor

__all__ = ["GuardRegistry", "iter_object_types"]

logger = logging.getLogger("graphql_guard.registry")


def iter_object_types(schema: GraphQLSchema) -> Iterator[GraphQLObjectType]:
    """Yield the schema's object types, skipping introspection types."""
    for type_ in schema.type_map.values():
        if is_object_type(type_) and not type_.name.startswith("__"):
            yield type_


class GuardRegistry:
    """Registry that maps schema coordinates to guard and mask predicates.

    Keys are exact ``(type, field, argument)`` triples; there is no
    wildcard matching. Each key holds at most one guard and one mask.
    Registration happens while the schema is being built; ``bind`` then
    validates every target against the schema, resolves policy objects and
    freezes the registry. A bound registry is read-only and safe to share
    between concurrent requests.

    Example::

        registry = GuardRegistry()
        registry.register("Query", "posts", lambda obj, args, ctx: ctx["user"] is not None)
        registry.register_mask("Query", "auditLog", lambda root, variables, ctx: is_staff(ctx))
        registry.bind(schema)
    """

    def __init__(self) -> None:
        self._guards: dict[GuardKey, GuardDescriptor] = {}
        self._masks: dict[GuardKey, GuardDescriptor] = {}
        self._argument_guards: dict[tuple[str, str], tuple[GuardDescriptor, ...]] = {}
        self._policies: dict[str, Any] = {}
        self._schema: GraphQLSchema | None = None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        type_name: str,
        field_name: str | None,
        predicate: Predicate,
        *,
        argument: str | None = None,
        name: str = "",
    ) -> GuardDescriptor:
        """Register a guard for a type, a field or an argument.

        Args:
            type_name: The object type name.
            field_name: The field name, or ``None`` for a type-level guard
                that applies to every field of the type without its own guard.
            predicate: ``(parent, arguments, context) -> bool`` (or an
                awaitable of bool), or ``POLICY`` to look the guard up
                through the configured policy locator at bind time.
            argument: Guard a single argument of the field instead.
            name: Human-readable name for logging. Defaults to the
                predicate's ``__name__``.

        Returns:
            The stored ``GuardDescriptor``.

        Raises:
            ConfigurationError: If the registry is bound, the key already
                holds a guard, or the predicate is not callable.

        Example::

            registry.register(
                "Query", "posts",
                lambda obj, args, ctx: args["userId"] == ctx["current_user"].id,
            )
        """
        return self._add("guard", type_name, field_name, predicate, argument=argument, name=name)

    def register_mask(
        self,
        type_name: str,
        field_name: str,
        predicate: Predicate,
        *,
        argument: str | None = None,
        name: str = "",
    ) -> GuardDescriptor:
        """Register a mask hiding a field or an argument per request.

        Mask predicates are called before validation as
        ``predicate(root_value, variables, context)``; there is no parent
        object yet.

        Raises:
            ConfigurationError: If the registry is bound, the key already
                holds a mask, or the predicate is not callable.
        """
        if field_name is None:
            raise ConfigurationError(f"Masks apply to fields or arguments, not to type {type_name}")
        if predicate is POLICY:
            raise ConfigurationError(
                f"Mask on {describe_target(type_name, field_name, argument)} "
                f"must be an inline predicate"
            )
        return self._add("mask", type_name, field_name, predicate, argument=argument, name=name)

    def _add(
        self,
        kind: GuardKind,
        type_name: str,
        field_name: str | None,
        predicate: Predicate,
        *,
        argument: str | None,
        name: str,
    ) -> GuardDescriptor:
        target = describe_target(type_name, field_name, argument)
        if self._schema is not None:
            raise ConfigurationError(f"Cannot register {kind} for {target}: registry is bound")
        if argument is not None and field_name is None:
            raise ConfigurationError(f"Argument {kind} on {type_name} needs a field name")
        is_policy = predicate is POLICY
        if not is_policy and not callable(predicate):
            raise ConfigurationError(f"{kind.capitalize()} for {target} is not callable: {predicate!r}")
        if is_policy and argument is not None:
            raise ConfigurationError(f"POLICY markers are not supported on arguments ({target})")

        store = self._guards if kind == "guard" else self._masks
        key: GuardKey = (type_name, field_name, argument)
        if key in store:
            raise ConfigurationError(f"Duplicate {kind} for {target}")

        descriptor = GuardDescriptor(
            type_name=type_name,
            field_name=field_name,
            argument_name=argument,
            predicate=None if is_policy else predicate,
            source="policy" if is_policy else "inline",
            kind=kind,
            name=name or getattr(predicate, "__name__", "") or target,
        )
        store[key] = descriptor
        return descriptor

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    @property
    def is_bound(self) -> bool:
        return self._schema is not None

    def bind(
        self,
        schema: GraphQLSchema,
        *,
        policy_locator: PolicyLocator | None = None,
    ) -> GuardRegistry:
        """Validate the registry against *schema* and freeze it.

        Collects ``guard``/``mask`` extensions declared on the schema,
        checks that every target exists, resolves ``POLICY`` markers and,
        when *policy_locator* is given, turns each type's policy object into
        guards. The locator is called exactly once per object type.

        Args:
            schema: The schema the guards belong to.
            policy_locator: Callable mapping a type name to its policy
                object (or ``None``).

        Returns:
            ``self``, now read-only.

        Raises:
            ConfigurationError: On any misconfiguration.
        """
        from graphql_guard.registry._annotations import collect_schema_annotations

        if self._schema is not None:
            raise ConfigurationError("GuardRegistry is already bound to a schema")

        collect_schema_annotations(schema, self)

        for descriptor in (*self._guards.values(), *self._masks.values()):
            _check_target(schema, descriptor)

        if policy_locator is not None:
            for type_ in iter_object_types(schema):
                handle = policy_locator(type_.name)
                self._policies[type_.name] = handle
                if handle is not None:
                    logger.debug("Resolved policy %r for type %s", handle, type_.name)

        for key, descriptor in list(self._guards.items()):
            if descriptor.is_policy_reference:
                self._guards[key] = self._resolve_reference(descriptor, policy_locator)

        for type_name, handle in self._policies.items():
            if handle is not None:
                self._adopt_policy(schema, type_name, handle)

        self._index_arguments(schema)
        self._schema = schema
        return self

    def _resolve_reference(
        self,
        descriptor: GuardDescriptor,
        policy_locator: PolicyLocator | None,
    ) -> GuardDescriptor:
        if policy_locator is None:
            raise ConfigurationError(
                f"POLICY marker on {descriptor.target} requires a policy_locator"
            )
        handle = self._policies.get(descriptor.type_name)
        if handle is None:
            raise ConfigurationError(
                f"No policy object found for type {descriptor.type_name} "
                f"(referenced by {descriptor.target})"
            )
        predicate: Predicate | None = None
        if descriptor.field_name is not None:
            predicate = _policy_fields(handle).get(descriptor.field_name)
        if predicate is None:
            predicate = getattr(handle, "authorize", None)
        if predicate is None or not callable(predicate):
            raise ConfigurationError(
                f"Policy {handle!r} has no authorization entry point for {descriptor.target}"
            )
        return GuardDescriptor(
            type_name=descriptor.type_name,
            field_name=descriptor.field_name,
            argument_name=None,
            predicate=predicate,
            source="policy",
            name=f"{_handle_name(handle)}.{descriptor.field_name or 'authorize'}",
        )

    def _adopt_policy(self, schema: GraphQLSchema, type_name: str, handle: Any) -> None:
        type_ = cast(GraphQLObjectType, schema.get_type(type_name))
        for field_name, predicate in _policy_fields(handle).items():
            if field_name not in type_.fields:
                raise ConfigurationError(
                    f"Policy {_handle_name(handle)} guards {type_name}.{field_name}, "
                    f"which does not exist"
                )
            if not callable(predicate):
                raise ConfigurationError(
                    f"Policy {_handle_name(handle)} entry for {type_name}.{field_name} "
                    f"is not callable"
                )
            key: GuardKey = (type_name, field_name, None)
            if key in self._guards:
                logger.debug("Inline guard on %s.%s overrides policy entry", type_name, field_name)
                continue
            self._guards[key] = GuardDescriptor(
                type_name=type_name,
                field_name=field_name,
                argument_name=None,
                predicate=predicate,
                source="policy",
                name=f"{_handle_name(handle)}.{field_name}",
            )

        authorize = getattr(handle, "authorize", None)
        type_key: GuardKey = (type_name, None, None)
        if callable(authorize) and type_key not in self._guards:
            self._guards[type_key] = GuardDescriptor(
                type_name=type_name,
                field_name=None,
                argument_name=None,
                predicate=authorize,
                source="policy",
                name=f"{_handle_name(handle)}.authorize",
            )

    def _index_arguments(self, schema: GraphQLSchema) -> None:
        grouped: dict[tuple[str, str], list[GuardDescriptor]] = {}
        for (type_name, field_name, argument), descriptor in self._guards.items():
            if argument is not None and field_name is not None:
                grouped.setdefault((type_name, field_name), []).append(descriptor)
        for (type_name, field_name), descriptors in grouped.items():
            type_ = cast(GraphQLObjectType, schema.get_type(type_name))
            order = list(type_.fields[field_name].args)
            descriptors.sort(key=lambda d: order.index(d.argument_name))
            self._argument_guards[(type_name, field_name)] = tuple(descriptors)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def field_guard(self, type_name: str, field_name: str) -> GuardDescriptor | None:
        """Return the field-level guard for ``type_name.field_name``, if any.

        Example::

            guard = registry.field_guard("Query", "posts")
        """
        return self._guards.get((type_name, field_name, None))

    def type_guard(self, type_name: str) -> GuardDescriptor | None:
        """Return the type-level guard for *type_name*, if any."""
        return self._guards.get((type_name, None, None))

    def argument_guards(self, type_name: str, field_name: str) -> tuple[GuardDescriptor, ...]:
        """Return argument guards of a field in argument declaration order.

        Only populated once the registry is bound.
        """
        return self._argument_guards.get((type_name, field_name), ())

    def mask_for(
        self, type_name: str, field_name: str, argument: str | None = None
    ) -> GuardDescriptor | None:
        return self._masks.get((type_name, field_name, argument))

    def masks(self) -> tuple[GuardDescriptor, ...]:
        """Return every registered mask."""
        return tuple(self._masks.values())

    def has_masks(self) -> bool:
        return bool(self._masks)

    def policy_for(self, type_name: str) -> Any:
        """Return the cached policy object for *type_name*, or ``None``."""
        return self._policies.get(type_name)

    def descriptors(self, kind: GuardKind = "guard") -> tuple[GuardDescriptor, ...]:
        """Return every guard (or every mask, with ``kind="mask"``)."""
        store = self._guards if kind == "guard" else self._masks
        return tuple(store.values())

    def __len__(self) -> int:
        return len(self._guards) + len(self._masks)

    def __repr__(self) -> str:
        state = "bound" if self.is_bound else "unbound"
        return f"<GuardRegistry {state} guards={len(self._guards)} masks={len(self._masks)}>"


def _policy_fields(handle: Any) -> dict[str, Predicate]:
    return dict(getattr(handle, "fields", None) or {})


def _handle_name(handle: Any) -> str:
    return getattr(handle, "__name__", None) or type(handle).__name__


def _check_target(schema: GraphQLSchema, descriptor: GuardDescriptor) -> None:
    type_ = schema.get_type(descriptor.type_name)
    if type_ is None or not is_object_type(type_):
        raise ConfigurationError(
            f"{descriptor.kind.capitalize()} {descriptor.name!r} targets "
            f"{descriptor.target}, but {descriptor.type_name} is not an object type "
            f"of the schema"
        )
    if descriptor.field_name is None:
        return
    field = type_.fields.get(descriptor.field_name)
    if field is None:
        raise ConfigurationError(
            f"{descriptor.kind.capitalize()} {descriptor.name!r} targets "
            f"{descriptor.target}, but the field does not exist"
        )
    if descriptor.argument_name is not None and descriptor.argument_name not in field.args:
        raise ConfigurationError(
            f"{descriptor.kind.capitalize()} {descriptor.name!r} targets "
            f"{descriptor.target}, but the argument does not exist"
        )
