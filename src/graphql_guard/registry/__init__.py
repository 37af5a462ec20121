"""Guard registry — registration and lookup of guards and masks."""

from graphql_guard.registry._annotations import collect_schema_annotations
from graphql_guard.registry._base import GUARD_EXTENSION, MASK_EXTENSION, POLICY, GuardDescriptor
from graphql_guard.registry._decorator import guard, mask
from graphql_guard.registry._registry import GuardRegistry, iter_object_types

__all__ = [
    "GUARD_EXTENSION",
    "MASK_EXTENSION",
    "POLICY",
    "GuardDescriptor",
    "GuardRegistry",
    "collect_schema_annotations",
    "guard",
    "iter_object_types",
    "mask",
]
