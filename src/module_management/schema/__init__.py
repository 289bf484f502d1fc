"""GraphQL schema"""

from typing import Callable, Optional

import strawberry
from strawberry.fastapi import GraphQLRouter

from module_management.schema.types import Bundle
from module_management.schema.queries import Query
from module_management.schema.mutations import Mutation


schema = strawberry.federation.Schema(
    query=Query,
    mutation=Mutation
)


def create_graphql_router(context_getter: Optional[Callable] = None) -> GraphQLRouter:
    """Create GraphQL router for FastAPI"""
    return GraphQLRouter(
        schema,
        context_getter=context_getter,
        graphql_ide="graphiql",  # Enable GraphiQL interface
    )


__all__ = ["schema", "create_graphql_router", "Bundle", "Query", "Mutation"]
