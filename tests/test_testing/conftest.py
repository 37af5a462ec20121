"""Import fixtures from graphql_guard.testing for test discovery."""

from graphql_guard.testing._fixtures import guard_config, guard_registry

__all__ = ["guard_config", "guard_registry"]
