from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException

from app.Core.Exceptions.errors import AuthenticationError, FormValidationError, RelayError
from app.Http.DTOs.error_schemas import APIErrorResponse, ErrorDetail
from app.Http.cors import CORS_HEADERS


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = APIErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Installs the handlers that turn exceptions into JSON error bodies."""

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        if exc.status_code >= 500:
            logger.error(f"{request.url.path} failed ({exc.status_code}): {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_payload(),
            headers=CORS_HEADERS,
        )

    @app.exception_handler(FormValidationError)
    async def form_error_handler(request: Request, exc: FormValidationError):
        return JSONResponse(status_code=422, content={"errors": exc.errors})

    @app.exception_handler(AuthenticationError)
    async def auth_error_handler(request: Request, exc: AuthenticationError):
        return _error_response(401, "unauthorized", str(exc))

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return _error_response(exc.status_code, f"http_{exc.status_code}", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(422, "validation_error", str(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}: {exc}")
        return _error_response(500, "internal_error", "Internal server error")
