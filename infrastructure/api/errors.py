import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.errors import RegistrationError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "uniqueness": status.HTTP_400_BAD_REQUEST,
    "store": status.HTTP_400_BAD_REQUEST,
    "unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
    "timeout": status.HTTP_504_GATEWAY_TIMEOUT,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def registration_error_response(error: RegistrationError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.warning("Registration failed (%s): %s", error.kind, error.message)
    return error_response(status_code, error.message)


def _describe(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error.get('msg')}" if location else str(error.get("msg"))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies answer 400 with the same error shape as store failures"""
    message = "; ".join(_describe(e) for e in exc.errors()) or "Invalid request body"
    return error_response(status.HTTP_400_BAD_REQUEST, message)
