import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core import codes
from core.entities.response import Response

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Short-circuits a request with an envelope response."""
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def envelope(status: int, message: str, data: Optional[Any] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content=jsonable_encoder({"status": status, "message": message, "data": data}),
    )


def to_json_response(resp: Response) -> JSONResponse:
    return envelope(resp.status, resp.message, resp.data)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or codes.ERR_READING_REQ_BODY


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return envelope(exc.status, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("request_validation_failed", extra={"path": request.url.path, "errors": len(exc.errors())})
        return envelope(400, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return envelope(404, codes.ERR_ROUTE_NOT_FOUND)
        if exc.status_code == 405:
            return envelope(405, codes.ERR_METHOD_NOT_ALLOWED)
        return envelope(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "unhandled_exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
                "type": type(exc).__name__,
            },
            exc_info=True,
        )
        return envelope(500, codes.ERR_INTERNAL)
