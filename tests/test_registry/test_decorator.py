"""Tests for registry/_decorator.py — @guard and @mask decorators."""

from __future__ import annotations

import pytest

from graphql_guard import AuthorizationDenied, ConfigurationError, GuardedSchema, guard, mask
from graphql_guard.registry import GuardRegistry
from tests.blog import USERS_QUERY, build_blog_schema


class TestGuardDecorator:
    """The @guard decorator registers functions on the given registry."""

    def test_registers_function(self, guard_registry: GuardRegistry):
        @guard("User", "id", registry=guard_registry)
        def user_id(obj, args, ctx) -> bool:
            return True

        descriptor = guard_registry.field_guard("User", "id")
        assert descriptor.predicate is user_id
        assert descriptor.name == "user_id"

    def test_preserves_function_identity(self, guard_registry: GuardRegistry):
        """Decorated function should still be callable directly."""

        @guard("User", "id", registry=guard_registry)
        def user_id(obj, args, ctx) -> bool:
            return ctx == "ok"

        assert user_id(None, {}, "ok") is True

    def test_type_level(self, guard_registry: GuardRegistry):
        @guard("User", registry=guard_registry)
        def users(obj, args, ctx) -> bool:
            return True

        assert guard_registry.type_guard("User").predicate is users

    def test_argument(self, guard_registry: GuardRegistry):
        @guard("Query", "usersWithArgumentMask", argument="userId", registry=guard_registry)
        def filter_by_user(obj, args, ctx) -> bool:
            return True

        guard_registry.bind(build_blog_schema())
        (descriptor,) = guard_registry.argument_guards("Query", "usersWithArgumentMask")
        assert descriptor.predicate is filter_by_user
        assert descriptor.target == "Query.usersWithArgumentMask(userId)"

    def test_duplicate_raises(self, guard_registry: GuardRegistry):
        @guard("User", "id", registry=guard_registry)
        def first(obj, args, ctx) -> bool:
            return True

        with pytest.raises(ConfigurationError, match="Duplicate guard"):

            @guard("User", "id", registry=guard_registry)
            def second(obj, args, ctx) -> bool:
                return True

    def test_decorated_guard_denies(self, guard_registry: GuardRegistry, admin, context_for):
        @guard("User", "id", registry=guard_registry)
        def nobody(obj, args, ctx) -> bool:
            return False

        guarded = GuardedSchema(build_blog_schema(), registry=guard_registry)
        with pytest.raises(AuthorizationDenied, match=r"User\.id$"):
            guarded.execute(USERS_QUERY, context=context_for(admin))


class TestMaskDecorator:
    def test_registers_mask(self, guard_registry: GuardRegistry):
        @mask("User", "id", registry=guard_registry)
        def staff(root, variables, ctx) -> bool:
            return True

        descriptor = guard_registry.mask_for("User", "id")
        assert descriptor.predicate is staff
        assert descriptor.kind == "mask"

    def test_registers_argument_mask(self, guard_registry: GuardRegistry):
        @mask("Query", "posts", argument="userId", registry=guard_registry)
        def staff(root, variables, ctx) -> bool:
            return False

        assert guard_registry.mask_for("Query", "posts", "userId").predicate is staff
