"""Policy locators — map a GraphQL type name to its policy object."""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from types import ModuleType
from typing import Any

from graphql_guard.exceptions import ConfigurationError

__all__ = ["ConventionPolicyLocator"]


class ConventionPolicyLocator:
    """Find policy objects by naming convention.

    The policy for type ``Post`` is the attribute ``{prefix}Post{suffix}``
    of a namespace: a module, a dotted module path or a mapping. Dotted
    paths are imported immediately, so a wrong path fails while the schema
    is being guarded rather than on the first request.

    Args:
        namespace: Module object, importable module path, or mapping of
            names to policy objects.
        suffix: Appended to the type name. Defaults to ``"Policy"``.
        prefix: Prepended to the type name.

    Raises:
        ConfigurationError: If *namespace* is a module path that cannot
            be imported.

    Example::

        locator = ConventionPolicyLocator("myapp.policies")
        locator("Post")  # myapp.policies.PostPolicy, or None
    """

    def __init__(
        self,
        namespace: ModuleType | str | Mapping[str, Any],
        *,
        suffix: str = "Policy",
        prefix: str = "",
    ) -> None:
        if isinstance(namespace, str):
            try:
                namespace = importlib.import_module(namespace)
            except ImportError as exc:
                raise ConfigurationError(
                    f"Cannot import policy module {namespace!r}: {exc}"
                ) from exc
        self._namespace = namespace
        self._suffix = suffix
        self._prefix = prefix

    def policy_name(self, type_name: str) -> str:
        return f"{self._prefix}{type_name}{self._suffix}"

    def __call__(self, type_name: str) -> Any:
        name = self.policy_name(type_name)
        if isinstance(self._namespace, Mapping):
            return self._namespace.get(name)
        return getattr(self._namespace, name, None)

    def __repr__(self) -> str:
        namespace = getattr(self._namespace, "__name__", type(self._namespace).__name__)
        return f"ConventionPolicyLocator({namespace!r}, pattern={self.policy_name('{type}')!r})"
