"""Build the schema a request is validated and executed against."""

from __future__ import annotations

from typing import cast

from graphql import (
    GraphQLField,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLType,
    GraphQLUnionType,
    is_interface_type,
    is_introspection_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_union_type,
)

from graphql_guard.masking._plan import VisibilityPlan

__all__ = ["build_schema_view"]


def build_schema_view(schema: GraphQLSchema, plan: VisibilityPlan) -> GraphQLSchema:
    """Return *schema* without the fields and arguments *plan* hides.

    Hidden elements are removed rather than flagged, so graphql-core's
    validation reports them exactly like elements that never existed and
    introspection does not list them. Object, interface and union types are
    rebuilt to point at each other; scalars, enums, input types, directives
    and introspection types are shared with the original schema. Resolvers
    are kept as they are.

    A field or argument hidden on an object type is also removed from the
    interfaces that declare it, so it cannot be selected through a fragment
    on the interface either.

    Returns the original schema when the plan hides nothing.

    Example::

        view = build_schema_view(schema, planner.plan(context))
        errors = validate(view, parse(query))
    """
    if not plan.hides_anything:
        return schema

    def replace_type(type_: GraphQLType) -> GraphQLType:
        if is_list_type(type_):
            return GraphQLList(replace_type(cast(GraphQLList, type_).of_type))
        if is_non_null_type(type_):
            return GraphQLNonNull(replace_type(cast(GraphQLNonNull, type_).of_type))
        return replace_named_type(cast(GraphQLNamedType, type_))

    def replace_named_type(type_: GraphQLNamedType) -> GraphQLNamedType:
        return type_map[type_.name]

    def replace_maybe_type(type_: GraphQLObjectType | None) -> GraphQLObjectType | None:
        return cast(GraphQLObjectType, replace_named_type(type_)) if type_ else None

    def mask_fields(type_name: str, fields_map: dict[str, GraphQLField]) -> dict[str, GraphQLField]:
        fields: dict[str, GraphQLField] = {}
        for field_name, field in fields_map.items():
            if not plan.is_visible(type_name, field_name):
                continue
            if field_name in interface_fields.get(type_name, ()):
                continue
            hidden_args = plan.hidden_arguments(type_name, field_name) | frozenset(
                interface_arguments.get((type_name, field_name), ())
            )
            kwargs = field.to_kwargs()
            kwargs.update(
                type_=replace_type(field.type),
                args={
                    arg_name: arg
                    for arg_name, arg in field.args.items()
                    if arg_name not in hidden_args
                },
            )
            fields[field_name] = GraphQLField(**kwargs)
        return fields

    def mask_named_type(type_: GraphQLNamedType) -> GraphQLNamedType:
        if is_introspection_type(type_):
            return type_
        if is_object_type(type_):
            object_type = cast(GraphQLObjectType, type_)
            kwargs = object_type.to_kwargs()
            kwargs.update(
                interfaces=lambda: [
                    cast(GraphQLInterfaceType, replace_named_type(interface))
                    for interface in object_type.interfaces
                ],
                fields=lambda: mask_fields(object_type.name, object_type.fields),
            )
            return GraphQLObjectType(**kwargs)
        if is_interface_type(type_):
            interface_type = cast(GraphQLInterfaceType, type_)
            kwargs = interface_type.to_kwargs()
            kwargs.update(
                interfaces=lambda: [
                    cast(GraphQLInterfaceType, replace_named_type(interface))
                    for interface in interface_type.interfaces
                ],
                fields=lambda: mask_fields(interface_type.name, interface_type.fields),
            )
            return GraphQLInterfaceType(**kwargs)
        if is_union_type(type_):
            union_type = cast(GraphQLUnionType, type_)
            kwargs = union_type.to_kwargs()
            kwargs.update(
                types=lambda: [
                    cast(GraphQLObjectType, replace_named_type(member))
                    for member in union_type.types
                ],
            )
            return GraphQLUnionType(**kwargs)
        # Scalars, enums and input objects only reference input types.
        return type_

    # Interface name -> fields hidden on an implementing object type.
    interface_fields: dict[str, set[str]] = {}
    interface_arguments: dict[tuple[str, str], set[str]] = {}
    for named_type in schema.type_map.values():
        if not is_object_type(named_type) or is_introspection_type(named_type):
            continue
        object_type = cast(GraphQLObjectType, named_type)
        hidden = plan.hidden_fields(object_type.name)
        for interface in object_type.interfaces:
            for field_name, field in interface.fields.items():
                if field_name in hidden:
                    interface_fields.setdefault(interface.name, set()).add(field_name)
                    continue
                hidden_args = plan.hidden_arguments(object_type.name, field_name) & set(field.args)
                if hidden_args:
                    interface_arguments.setdefault((interface.name, field_name), set()).update(
                        hidden_args
                    )

    type_map: dict[str, GraphQLNamedType] = {
        name: mask_named_type(type_) for name, type_ in schema.type_map.items()
    }

    return GraphQLSchema(
        query=replace_maybe_type(schema.query_type),
        mutation=replace_maybe_type(schema.mutation_type),
        subscription=replace_maybe_type(schema.subscription_type),
        types=list(type_map.values()),
        directives=schema.directives,
        description=schema.description,
        extensions=schema.extensions,
        ast_node=schema.ast_node,
        extension_ast_nodes=schema.extension_ast_nodes,
        assume_valid=True,
    )
