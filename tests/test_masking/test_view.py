"""Tests for masking/_view.py — per-request schema views."""

from __future__ import annotations

from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
    GraphQLUnionType,
    graphql_sync,
    parse,
    validate,
)

from graphql_guard import VisibilityPlan
from graphql_guard.masking import build_schema_view
from tests.blog import build_blog_schema

HIDE_BLOG = VisibilityPlan(
    {
        ("Query", "postsWithMask", None): False,
        ("Query", "usersWithArgumentMask", "userId"): False,
    }
)


class TestBuildSchemaView:
    def test_nothing_hidden_returns_original(self):
        schema = build_blog_schema()
        assert build_schema_view(schema, VisibilityPlan()) is schema
        visible = VisibilityPlan({("Query", "postsWithMask", None): True})
        assert build_schema_view(schema, visible) is schema

    def test_hidden_field_and_argument_removed(self):
        schema = build_blog_schema()
        view = build_schema_view(schema, HIDE_BLOG)

        assert set(view.query_type.fields) == {"posts", "usersWithArgumentMask"}
        assert view.query_type.fields["usersWithArgumentMask"].args == {}
        assert set(view.query_type.fields["posts"].args) == {"userId"}

    def test_original_schema_untouched(self):
        schema = build_blog_schema()
        build_schema_view(schema, HIDE_BLOG)
        assert "postsWithMask" in schema.query_type.fields
        assert "userId" in schema.query_type.fields["usersWithArgumentMask"].args

    def test_view_matches_schema_without_the_elements(self):
        view = build_schema_view(build_blog_schema(), HIDE_BLOG)
        reference = build_blog_schema(with_masked=False)

        for query in (
            "{ postsWithMask(userId: 1) { id } }",
            "{ usersWithArgumentMask(userId: 1) { id } }",
            "{ posts(userId: 1) { id title } }",
        ):
            document = parse(query)
            assert [e.formatted for e in validate(view, document)] == [
                e.formatted for e in validate(reference, document)
            ]

    def test_types_point_at_the_rebuilt_types(self):
        view = build_schema_view(build_blog_schema(), HIDE_BLOG)
        post_in_query = view.query_type.fields["posts"].type.of_type.of_type.of_type
        assert post_in_query is view.get_type("Post")
        payload = view.mutation_type.fields["createPost"].type
        assert payload is view.get_type("CreatePostPayload")
        assert payload.fields["post"].type is view.get_type("Post")

    def test_input_types_and_scalars_are_shared(self):
        schema = build_blog_schema()
        view = build_schema_view(schema, HIDE_BLOG)
        assert view.get_type("CreatePostInput") is schema.get_type("CreatePostInput")
        assert view.get_type("ID") is schema.get_type("ID")

    def test_resolvers_and_extensions_kept(self):
        schema = build_blog_schema()
        view = build_schema_view(schema, HIDE_BLOG)
        original = schema.query_type.fields["posts"]
        masked = view.query_type.fields["posts"]
        assert masked.resolve is original.resolve
        assert masked.extensions == original.extensions
        assert view.get_type("Post").extensions == schema.get_type("Post").extensions

    def test_interfaces_and_unions_are_rebuilt(self):
        node = GraphQLInterfaceType(
            "Node",
            lambda: {"id": GraphQLField(GraphQLString), "internal": GraphQLField(GraphQLString)},
        )
        article = GraphQLObjectType(
            "Article",
            lambda: {
                "id": GraphQLField(GraphQLString),
                "internal": GraphQLField(GraphQLString),
            },
            interfaces=[node],
            is_type_of=lambda obj, info: True,
        )
        result = GraphQLUnionType("SearchResult", [article])
        schema = GraphQLSchema(
            GraphQLObjectType(
                "Query",
                {
                    "node": GraphQLField(node, resolve=lambda root, info: {"id": "1"}),
                    "search": GraphQLField(
                        result,
                        args={"term": GraphQLArgument(GraphQLString)},
                        resolve=lambda root, info, **args: {"id": "2"},
                    ),
                },
            ),
            types=[article],
        )
        plan = VisibilityPlan(
            {
                ("Node", "internal", None): False,
                ("Article", "internal", None): False,
                ("Query", "search", "term"): False,
            }
        )
        view = build_schema_view(schema, plan)

        assert set(view.get_type("Node").fields) == {"id"}
        assert list(view.get_type("Article").interfaces) == [view.get_type("Node")]
        assert list(view.get_type("SearchResult").types) == [view.get_type("Article")]
        assert view.query_type.fields["search"].args == {}

        executed = graphql_sync(view, "{ node { id } search { ... on Article { id } } }")
        assert executed.errors is None
        assert executed.data == {"node": {"id": "1"}, "search": {"id": "2"}}

    def test_field_hidden_on_object_type_is_removed_from_its_interfaces(self):
        node = GraphQLInterfaceType(
            "Node",
            lambda: {
                "id": GraphQLField(GraphQLString),
                "internal": GraphQLField(
                    GraphQLString, args={"raw": GraphQLArgument(GraphQLString)}
                ),
                "label": GraphQLField(
                    GraphQLString, args={"locale": GraphQLArgument(GraphQLString)}
                ),
            },
        )
        article = GraphQLObjectType(
            "Article",
            lambda: {
                "id": GraphQLField(GraphQLString),
                "internal": GraphQLField(
                    GraphQLString, args={"raw": GraphQLArgument(GraphQLString)}
                ),
                "label": GraphQLField(
                    GraphQLString, args={"locale": GraphQLArgument(GraphQLString)}
                ),
            },
            interfaces=[node],
        )
        schema = GraphQLSchema(
            GraphQLObjectType("Query", {"node": GraphQLField(node)}), types=[article]
        )
        plan = VisibilityPlan(
            {
                ("Article", "internal", None): False,
                ("Article", "label", "locale"): False,
            }
        )
        view = build_schema_view(schema, plan)

        assert set(view.get_type("Node").fields) == {"id", "label"}
        assert view.get_type("Node").fields["label"].args == {}
        assert set(view.get_type("Article").fields) == {"id", "label"}

        errors = validate(view, parse("{ node { ... on Node { internal } } }"))
        assert len(errors) == 1
        assert errors[0].message.startswith("Cannot query field 'internal' on type 'Node'.")
        errors = validate(view, parse('{ node { label(locale: "en") } }'))
        assert [e.message for e in errors] == [
            "Unknown argument 'locale' on field 'Node.label'."
        ]

    def test_introspection_lists_only_visible_elements(self):
        view = build_schema_view(build_blog_schema(), HIDE_BLOG)
        result = graphql_sync(
            view, '{ __type(name: "Query") { fields { name args { name } } } }'
        )
        assert result.data == {
            "__type": {
                "fields": [
                    {"name": "posts", "args": [{"name": "userId"}]},
                    {"name": "usersWithArgumentMask", "args": []},
                ]
            }
        }
