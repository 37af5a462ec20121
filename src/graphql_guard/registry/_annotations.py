"""Collect guard and mask annotations declared through graphql-core ``extensions``."""

from __future__ import annotations

from graphql import GraphQLSchema

from graphql_guard.registry._base import GUARD_EXTENSION, MASK_EXTENSION
from graphql_guard.registry._registry import GuardRegistry, iter_object_types

__all__ = ["collect_schema_annotations"]


def collect_schema_annotations(schema: GraphQLSchema, registry: GuardRegistry) -> int:
    """Register every ``guard``/``mask`` extension found on *schema*.

    Walks each object type, its fields and their arguments. A type-level
    ``mask`` is not supported and is reported by the registry.

    Returns:
        The number of annotations registered.

    Example::

        GraphQLField(
            GraphQLList(post_type),
            extensions={"guard": lambda obj, args, ctx: ctx["current_user"].is_admin},
        )
    """
    count = 0
    for type_ in iter_object_types(schema):
        type_extensions = type_.extensions or {}
        if GUARD_EXTENSION in type_extensions:
            registry.register(type_.name, None, type_extensions[GUARD_EXTENSION])
            count += 1
        if MASK_EXTENSION in type_extensions:
            registry.register_mask(type_.name, None, type_extensions[MASK_EXTENSION])  # type: ignore[arg-type]

        for field_name, field in type_.fields.items():
            field_extensions = field.extensions or {}
            if GUARD_EXTENSION in field_extensions:
                registry.register(type_.name, field_name, field_extensions[GUARD_EXTENSION])
                count += 1
            if MASK_EXTENSION in field_extensions:
                registry.register_mask(type_.name, field_name, field_extensions[MASK_EXTENSION])
                count += 1

            for arg_name, arg in field.args.items():
                arg_extensions = arg.extensions or {}
                if GUARD_EXTENSION in arg_extensions:
                    registry.register(
                        type_.name, field_name, arg_extensions[GUARD_EXTENSION], argument=arg_name
                    )
                    count += 1
                if MASK_EXTENSION in arg_extensions:
                    registry.register_mask(
                        type_.name, field_name, arg_extensions[MASK_EXTENSION], argument=arg_name
                    )
                    count += 1
    return count
