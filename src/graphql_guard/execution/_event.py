"""FieldAccessEvent — what the interceptor knows about a field about to resolve."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from graphql import FieldNode, GraphQLResolveInfo
from graphql.language import SourceLocation, get_location

__all__ = ["FieldAccessEvent"]


@dataclass(frozen=True, slots=True)
class FieldAccessEvent:
    """One field about to be resolved. Lives for a single resolution step.

    Attributes:
        parent: The parent value the field is resolved on.
        type_name: The object type declaring the field.
        field_name: The field name.
        arguments: Coerced argument values (read-only view).
        context: The request context.
        path: Response path from the operation root.
        nodes: The field's AST nodes in the query document.

    Example::

        event = FieldAccessEvent.from_info(root, info, args)
        event.path       # ("posts", 0, "id")
        event.locations  # (SourceLocation(line=1, column=48),)
    """

    parent: Any
    type_name: str
    field_name: str
    arguments: Mapping[str, Any]
    context: Any
    path: tuple[str | int, ...] = ()
    nodes: tuple[FieldNode, ...] = ()

    @classmethod
    def from_info(
        cls,
        parent: Any,
        info: GraphQLResolveInfo,
        arguments: Mapping[str, Any],
    ) -> FieldAccessEvent:
        """Build an event from graphql-core's resolve info."""
        return cls(
            parent=parent,
            type_name=info.parent_type.name,
            field_name=info.field_name,
            arguments=MappingProxyType(dict(arguments)),
            context=info.context,
            path=tuple(info.path.as_list()),
            nodes=tuple(info.field_nodes),
        )

    @property
    def locations(self) -> tuple[SourceLocation, ...]:
        """Line/column of each field node in the original query text."""
        locations: list[SourceLocation] = []
        for node in self.nodes:
            loc = node.loc
            if loc is not None and loc.source is not None:
                locations.append(get_location(loc.source, loc.start))
        return tuple(locations)
