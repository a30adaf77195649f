"""
Uniform error payloads for the Taskboard API.

Every failure that reaches the client has the shape
``{"code": int, "type": "error" | "warning", "message": str, "date": str}``.
Handlers either build it directly through `send_error_message` (curated
message plus category/action tags for the log) or raise `ApiError`, which the
global handlers registered by `register_error_handlers` translate.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .utils import format_datetime

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND_MESSAGE = "Route not found"


def error_body(code: int, error_type: str, message: str, **extra: Any) -> dict:
    body = {"code": code, "type": error_type, "message": message, "date": format_datetime()}
    body.update(extra)
    return body


def send_error_message(
    request: Request,
    error: Optional[BaseException],
    category: str,
    action: str,
    code: int,
    error_type: str,
    message: str,
) -> JSONResponse:
    """Registra a falha no log e devolve a resposta de erro padronizada."""
    level = logging.WARNING if error_type == "warning" else logging.ERROR
    logger.log(
        level,
        "%s/%s: %s",
        category,
        action,
        message,
        exc_info=error if isinstance(error, BaseException) else None,
        extra={
            "category": category,
            "action": action,
            "severity": error_type,
            "path": request.url.path,
            "error_code": code,
        },
    )
    return JSONResponse(status_code=code, content=error_body(code, error_type, message))


class ApiError(Exception):
    """Erro de dominio/infra convertido em resposta padronizada pelo handler global."""

    def __init__(
        self,
        message: str,
        code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_type: str = "error",
        *,
        category: str = "API",
        action: str = "REQUISICAO",
        headers: Optional[dict[str, str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.error_type = error_type
        self.category = category
        self.action = action
        self.headers = headers


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        response = send_error_message(
            request, None, exc.category, exc.action, exc.code, exc.error_type, exc.message
        )
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = ROUTE_NOT_FOUND_MESSAGE
        else:
            message = str(exc.detail)
        logger.warning("HTTP %s on %s: %s", exc.status_code, request.url.path, message)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, "error", message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        details = [
            {
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(
                status.HTTP_400_BAD_REQUEST, "warning", "Dados da requisição inválidos", details=details
            ),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        return send_error_message(
            request,
            exc,
            "API",
            "ERRO INESPERADO",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "error",
            "Falha inesperada, tente novamente mais tarde",
        )
