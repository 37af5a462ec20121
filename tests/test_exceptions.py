"""Tests for exceptions.py — GuardError hierarchy."""

from __future__ import annotations

import pytest
from graphql import GraphQLError

from graphql_guard.exceptions import (
    AuthorizationDenied,
    ConfigurationError,
    FieldDenied,
    GuardError,
    describe_target,
)


class TestDescribeTarget:
    """Targets are spelled the way denial messages use them."""

    def test_type(self):
        assert describe_target("Post", None) == "Post"

    def test_field(self):
        assert describe_target("Query", "posts") == "Query.posts"

    def test_argument(self):
        assert describe_target("Query", "posts", "userId") == "Query.posts(userId)"


class TestGuardError:
    """Base exception for all graphql-guard errors."""

    def test_is_exception(self):
        assert issubclass(GuardError, Exception)

    def test_message(self):
        err = GuardError("something went wrong")
        assert str(err) == "something went wrong"

    def test_configuration_error_is_guard_error(self):
        assert issubclass(ConfigurationError, GuardError)
        with pytest.raises(GuardError):
            raise ConfigurationError("bad guard")


class TestAuthorizationDenied:
    """Raised in exception mode; aborts the whole execution."""

    def test_is_guard_error_not_graphql_error(self):
        assert issubclass(AuthorizationDenied, GuardError)
        # graphql-core would otherwise record it as a field error.
        assert not issubclass(AuthorizationDenied, GraphQLError)

    def test_attributes(self):
        err = AuthorizationDenied(type_name="Post", field_name="id", path=("posts", 0, "id"))
        assert err.type_name == "Post"
        assert err.field_name == "id"
        assert err.argument_name is None
        assert err.path == ["posts", 0, "id"]

    def test_default_message(self):
        err = AuthorizationDenied(type_name="Query", field_name="posts")
        assert str(err) == "Not authorized to access: Query.posts"

    def test_default_message_for_argument(self):
        err = AuthorizationDenied(type_name="Query", field_name="posts", argument_name="userId")
        assert str(err) == "Not authorized to access: Query.posts(userId)"

    def test_custom_message(self):
        err = AuthorizationDenied(type_name="Query", field_name="posts", message="nope")
        assert str(err) == "nope"


class TestFieldDenied:
    """Raised in error-collecting mode; recorded by graphql-core."""

    def test_is_graphql_error_and_guard_error(self):
        assert issubclass(FieldDenied, GraphQLError)
        assert issubclass(FieldDenied, GuardError)

    def test_formatted(self):
        err = FieldDenied(
            "Not authorized to access Post.id",
            type_name="Post",
            field_name="id",
            path=["posts", 0, "id"],
        )
        assert err.formatted["message"] == "Not authorized to access Post.id"
        assert err.formatted["path"] == ["posts", 0, "id"]
        assert err.formatted.get("locations") is None
        assert err.type_name == "Post"
        assert err.field_name == "id"

    def test_extensions(self):
        err = FieldDenied(
            "denied",
            type_name="Post",
            field_name="id",
            extensions={"code": "unauthorizedField"},
        )
        assert err.formatted["extensions"] == {"code": "unauthorizedField"}
