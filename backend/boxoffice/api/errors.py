"""
Translate domain errors into HTTP responses.

Services raise DomainError subclasses and never HTTPException; this module is
the one place that knows about status codes.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from boxoffice.core.logging import get_logger
from boxoffice.domain import DomainError, ErrorCode

logger = get_logger(__name__)

STATUS_BY_CODE = {
    ErrorCode.SHOW_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.HOLDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_COORDINATE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.EMPTY_SELECTION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.STORAGE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST)
    logger.info("domain_error", code=exc.code.value, status_code=status_code)
    return JSONResponse(
        status_code=status_code,
        content={"code": exc.code.value, "detail": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
