"""
HTTP Error Handlers

Translates exceptions into the JSON error envelope. Status codes for
``GatehouseError`` come from the ``ErrorCodeRegistry``.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from gatehouse.core.errors import ErrorCodeRegistry, GatehouseError, SystemErrorCode
from gatehouse.core.logging import get_logger

logger = get_logger(__name__)


def register_exception_handlers(app: FastAPI, registry: ErrorCodeRegistry) -> None:
    """Install the error handlers on ``app``."""

    @app.exception_handler(GatehouseError)
    async def gatehouse_error_handler(request: Request, exc: GatehouseError) -> JSONResponse:
        status_code = registry.resolve(exc)
        if status_code >= 500:
            logger.error(
                "Request failed",
                error_code=exc.code,
                path=request.url.path,
                method=request.method,
            )
        return JSONResponse(status_code=status_code, content=jsonable_encoder(exc.to_dict()))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": SystemErrorCode.VALIDATION_ERROR.value,
                "data": {"validation": jsonable_encoder(exc.errors())},
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404 and exc.detail == "Not Found":
            return JSONResponse(
                status_code=404,
                content={
                    "message": f"Route {request.method}:{request.url.path} not found",
                    "error": "Not Found",
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error in request",
            error=str(exc),
            path=request.url.path,
            method=request.method,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": SystemErrorCode.INTERNAL_SERVER_ERROR.value,
                "message": "Internal server error",
            },
        )
