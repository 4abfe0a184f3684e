"""Application entry point."""

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gatehouse.core.config import Settings, get_settings
from gatehouse.core.database import DatabaseManager
from gatehouse.core.errors import ErrorCodeRegistry
from gatehouse.core.events import EventDispatcher
from gatehouse.core.logging import LogConfig, configure_logging, get_logger
from gatehouse.modules.auth.domain.interfaces import ExternalAuthenticationService
from gatehouse.modules.auth.infrastructure.dependencies import (
    AuthModule,
    register_auth_error_codes,
)
from gatehouse.modules.auth.infrastructure.services import FirebaseAuthenticationService
from gatehouse.modules.auth.presentation.api import router as auth_api_router
from gatehouse.presentation.graphql import create_graphql_router
from gatehouse.presentation.http import (
    RequestContextMiddleware,
    health_router,
    register_exception_handlers,
)

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    database: DatabaseManager | None = None,
    external_authentication_service: ExternalAuthenticationService | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (loaded from the environment if omitted)
        database: Database manager, mostly for tests
        external_authentication_service: Identity provider, Firebase if omitted

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()
    configure_logging(
        LogConfig(
            level=settings.log_level,
            format=settings.log_format,
            environment=settings.environment,
        )
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        logger.info(
            "Starting Gatehouse Backend",
            version=settings.app.version,
            environment=settings.environment.value,
        )
        db = database or DatabaseManager(settings.database)
        provider = external_authentication_service or FirebaseAuthenticationService(
            settings.firebase
        )

        auth_module = AuthModule(db, settings, provider, EventDispatcher())
        await db.create_all()
        await auth_module.seed()

        app.state.database = db
        app.state.auth_module = auth_module
        logger.info("Gatehouse Backend startup completed")

        yield

        logger.info("Starting graceful shutdown")
        if isinstance(provider, FirebaseAuthenticationService):
            await provider.close()
        await db.dispose()
        logger.info("Gatehouse Backend shutdown completed")

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        debug=settings.app.debug,
        lifespan=lifespan,
    )

    error_registry = ErrorCodeRegistry()
    register_auth_error_codes(error_registry)
    app.state.error_registry = error_registry
    register_exception_handlers(app, error_registry)

    if settings.app.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.app.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(health_router)
    app.include_router(auth_api_router)
    app.include_router(create_graphql_router(graphiql=settings.app.debug), prefix="/graphql")

    return app


if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", "8000"))

    logger.info("Starting Gatehouse Backend server", host=host, port=port)
    uvicorn.run(
        "gatehouse.main:create_app",
        factory=True,
        host=host,
        port=port,
        log_config=None,
    )
