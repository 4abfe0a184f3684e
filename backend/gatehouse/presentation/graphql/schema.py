"""
Main GraphQL Schema

Combines the module operations into the schema mounted at ``/graphql``.
"""

from typing import Any

import strawberry
from fastapi import Request
from strawberry.fastapi import GraphQLRouter
from strawberry.tools import merge_types

from gatehouse.modules.auth.presentation.graphql import AuthMutations, AuthQueries
from gatehouse.presentation.http.context import get_app_context

from .extensions import ErrorCodeExtension

Query = merge_types("Query", (AuthQueries,))
Mutation = merge_types("Mutation", (AuthMutations,))


def create_schema() -> strawberry.Schema:
    return strawberry.Schema(
        query=Query, mutation=Mutation, extensions=[ErrorCodeExtension]
    )


async def get_context(request: Request) -> dict[str, Any]:
    """Per-request resolver context."""
    state = request.app.state
    return {
        "app_context": get_app_context(request),
        "auth_module": state.auth_module,
        "error_registry": state.error_registry,
    }


def create_graphql_router(graphiql: bool = False) -> GraphQLRouter:
    return GraphQLRouter(
        create_schema(),
        graphql_ide="graphiql" if graphiql else None,
        context_getter=get_context,
    )
