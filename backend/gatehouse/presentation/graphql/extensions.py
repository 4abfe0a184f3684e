"""
GraphQL Extensions

Rewrites resolver errors so clients see the same error codes as the REST API
in ``extensions.code``.
"""

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from gatehouse.core.errors import ErrorCodeRegistry, GatehouseError, SystemErrorCode
from gatehouse.core.logging import get_logger

logger = get_logger(__name__)


class ErrorCodeExtension(SchemaExtension):
    """Standardizes error extensions after execution."""

    def on_execute(self):
        yield
        result = self.execution_context.result
        if result is None or not result.errors:
            return
        registry = self._registry()
        result.errors = [self._process_error(error, registry) for error in result.errors]

    def _registry(self) -> ErrorCodeRegistry | None:
        context = self.execution_context.context
        if isinstance(context, dict):
            return context.get("error_registry")
        return None

    @staticmethod
    def _process_error(
        error: GraphQLError, registry: ErrorCodeRegistry | None
    ) -> GraphQLError:
        original = error.original_error
        if original is None:
            return error

        if isinstance(original, GatehouseError):
            status = registry.resolve(original) if registry else original.status_code
            extensions = {"code": original.code, "data": original.data, "status": status}
            message = original.message
        else:
            logger.error(
                "Unhandled error in GraphQL resolver",
                error=str(original),
                path=error.path,
            )
            extensions = {"code": SystemErrorCode.INTERNAL_SERVER_ERROR.value, "status": 500}
            message = "Internal server error"

        return GraphQLError(
            message,
            nodes=error.nodes,
            source=error.source,
            positions=error.positions,
            path=error.path,
            original_error=original,
            extensions=extensions,
        )
