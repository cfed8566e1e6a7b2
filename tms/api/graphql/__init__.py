"""GraphQL API surface."""
from tms.api.graphql.context import GraphQLContext, get_context
from tms.api.graphql.schema import schema

__all__ = ["GraphQLContext", "get_context", "schema"]
