"""Policy base class — per-type authorization located by convention."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from graphql_guard._types import Predicate
from graphql_guard.exceptions import ConfigurationError

__all__ = ["Policy"]


class Policy:
    """Optional base class for policy objects.

    A policy object holds the authorization rules of one GraphQL type and
    is found through a policy locator rather than declared on the schema.
    It may expose:

    - ``fields``: a mapping from field name to predicate, checked before
      anything else for that field;
    - a class-level ``authorize(parent, arguments, context)`` entry point,
      applied to every field of the type without its own entry.

    Subclassing is not required; any object with these attributes works.

    Example::

        class PostPolicy(Policy):
            fields = {"title": lambda post, args, ctx: True}

            @classmethod
            def authorize(cls, post, args, ctx) -> bool:
                return ctx["current_user"].is_admin
    """

    fields: ClassVar[Mapping[str, Predicate]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for field_name, predicate in dict(cls.fields).items():
            if not callable(predicate):
                raise ConfigurationError(
                    f"{cls.__name__}.fields[{field_name!r}] is not callable: {predicate!r}"
                )
        cls.fields = MappingProxyType(dict(cls.fields))
