"""Shared test fixtures for graphql-guard tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from graphql import GraphQLSchema
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from graphql_guard import ConventionPolicyLocator, GuardConfig, GuardedSchema
from graphql_guard.testing import MockActor, make_context
from graphql_guard.testing import guard_config, guard_registry  # noqa: F401
from tests.blog import Base, build_blog_schema, seed

# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine():
    """Create an in-memory SQLite engine with all tables."""
    eng = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture()
def session(engine):
    """Provide a transactional session that rolls back after each test."""
    factory = sessionmaker(bind=engine)
    sess = factory()
    try:
        yield sess
    finally:
        sess.rollback()
        sess.close()


@pytest.fixture()
def sample_data(session: Session) -> dict[str, list]:
    """Seed the database with two users and one post."""
    return seed(session)


# ---------------------------------------------------------------------------
# Actors and contexts
# ---------------------------------------------------------------------------


@pytest.fixture()
def admin() -> MockActor:
    return MockActor(id="1", role="admin")


@pytest.fixture()
def not_admin() -> MockActor:
    return MockActor(id="1", role="not_admin")


@pytest.fixture()
def context_for(session: Session, sample_data: dict) -> Callable[[MockActor], dict[str, Any]]:
    """Build a request context for an actor, carrying the seeded session."""

    def build(actor: MockActor) -> dict[str, Any]:
        return make_context(actor, session=session)

    return build


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


@pytest.fixture()
def blog_schema() -> GraphQLSchema:
    return build_blog_schema()


@pytest.fixture()
def inline_schema(blog_schema: GraphQLSchema) -> GuardedSchema:
    """Inline guards, exception mode."""
    return GuardedSchema(blog_schema)


@pytest.fixture()
def collecting_schema(blog_schema: GraphQLSchema) -> GuardedSchema:
    """Inline guards, error-collecting mode."""
    return GuardedSchema(blog_schema, config=GuardConfig(on_denied="error"))


@pytest.fixture()
def policy_schema() -> GuardedSchema:
    """Policy objects located by convention in ``tests.blog``, exception mode."""
    return GuardedSchema(
        build_blog_schema(with_guards=False),
        config=GuardConfig(policy_locator=ConventionPolicyLocator("tests.blog")),
    )
