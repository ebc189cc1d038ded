from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fleetsy.core.errors import ErrorKind, TelemetryError
from fleetsy.schemas.telemetry import ErrorRead

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.DEVICE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_TIMESTAMP: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_STATS: status.HTTP_400_BAD_REQUEST,
}


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    body = ErrorRead(code=status_code, message=message)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(), headers=headers
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TelemetryError)
    async def telemetry_error_handler(request: Request, exc: TelemetryError) -> JSONResponse:
        status_code = STATUS_BY_KIND[exc.kind]
        logger.info(
            "%s %s rejected: %s (device=%s)",
            request.method,
            request.url.path,
            exc.kind.value,
            exc.device_id,
        )
        return error_response(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("%s %s invalid request body: %s", request.method, request.url.path, exc.errors())
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
