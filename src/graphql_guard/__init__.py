"""graphql-guard — field-level authorization for graphql-core schemas.

Attaches a predicate to types, fields and arguments, checks it right
before each field resolves, and optionally hides fields and arguments from
the schema per request.

Example::

    from graphql_guard import GuardConfig, GuardedSchema

    posts_field = GraphQLField(
        GraphQLNonNull(GraphQLList(GraphQLNonNull(post_type))),
        args={"userId": GraphQLArgument(GraphQLNonNull(GraphQLID))},
        resolve=resolve_posts,
        extensions={"guard": lambda obj, args, ctx: args["userId"] == ctx["current_user"].id},
    )

    guarded = GuardedSchema(schema, config=GuardConfig(on_denied="error"))
    result = guarded.execute(query, variables={"userId": "1"}, context={"current_user": user})
"""

from importlib.metadata import PackageNotFoundError, version

from graphql_guard._types import ActorLike, Predicate
from graphql_guard.config._config import GuardConfig
from graphql_guard.exceptions import (
    AuthorizationDenied,
    ConfigurationError,
    FieldDenied,
    GuardError,
)
from graphql_guard.execution._context import GuardExecutionContext
from graphql_guard.execution._middleware import GuardMiddleware
from graphql_guard.masking._plan import VisibilityPlan
from graphql_guard.policy._base import Policy
from graphql_guard.policy._locator import ConventionPolicyLocator
from graphql_guard.registry._base import POLICY
from graphql_guard.registry._decorator import guard, mask
from graphql_guard.registry._registry import GuardRegistry
from graphql_guard.schema._guarded import GuardedSchema

try:
    __version__ = version("graphql-guard")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "POLICY",
    "ActorLike",
    "AuthorizationDenied",
    "ConfigurationError",
    "ConventionPolicyLocator",
    "FieldDenied",
    "GuardConfig",
    "GuardError",
    "GuardExecutionContext",
    "GuardMiddleware",
    "GuardRegistry",
    "GuardedSchema",
    "Policy",
    "Predicate",
    "VisibilityPlan",
    "guard",
    "mask",
]
