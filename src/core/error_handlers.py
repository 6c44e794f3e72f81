"""Global error handlers.

Storage rejections are passed through to the client verbatim; there is no
classification beyond the status code.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

from core.exceptions import PolicyViolationError

logger = logging.getLogger(__name__)


def add_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PolicyViolationError)
    async def policy_violation_handler(request: Request, exc: PolicyViolationError):
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": str(exc)},
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        message = str(exc.orig)
        logger.info("Constraint rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": message},
        )

    @app.exception_handler(DataError)
    async def data_error_handler(request: Request, exc: DataError):
        # e.g. a score too large for NUMERIC(5, 2) on PostgreSQL
        message = str(exc.orig)
        logger.info("Store rejected value on %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": message},
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(getattr(exc, "orig", None) or exc)},
        )
