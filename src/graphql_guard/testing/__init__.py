"""graphql-guard testing utilities — MockActor, assertions, and fixtures.

Provides test helpers for verifying guards and masks:

- **MockActor / factories**: Lightweight actors and request contexts.
- **Assertion helpers**: ``assert_authorized``, ``assert_denied``,
  ``assert_hidden``.
- **Fixtures**: ``guard_registry``, ``guard_config``.

Example::

    from graphql_guard.testing import assert_denied, make_context, make_user

    def test_viewer_cannot_read_ids(guarded):
        assert_denied(
            guarded,
            "{ posts(userId: 1) { id } }",
            context=make_context(make_user(id="1")),
            target="Post.id",
        )
"""

from graphql_guard.testing._actors import (
    MockActor,
    make_admin,
    make_anonymous,
    make_context,
    make_user,
)
from graphql_guard.testing._assertions import assert_authorized, assert_denied, assert_hidden
from graphql_guard.testing._fixtures import guard_config, guard_registry

__all__ = [
    "MockActor",
    "assert_authorized",
    "assert_denied",
    "assert_hidden",
    "guard_config",
    "guard_registry",
    "make_admin",
    "make_anonymous",
    "make_context",
    "make_user",
]
