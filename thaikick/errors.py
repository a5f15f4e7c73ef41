"""App-level error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .core.exceptions import DomainException, ServiceException

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        # Routes convert their own DomainExceptions; this catches the rest
        if isinstance(exc, ServiceException):
            logger.error(f"Service failure on {request.url.path}: {exc.message}")
        http_exc = exc.to_http_exception()
        return JSONResponse(
            status_code=http_exc.status_code,
            content=jsonable_encoder({"detail": http_exc.detail}),
        )
