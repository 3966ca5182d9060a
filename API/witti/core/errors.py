import logging
import uuid

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Something went wrong. Please try again later."


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def error_response(
    request: Request,
    *,
    code: str,
    message: str,
    status_code: int,
    details=None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    payload = {
        "success": False,
        "message": message,
        "error": {
            "code": code,
            "request_id": get_request_id(request),
            "details": details,
        },
    }
    return JSONResponse(status_code=status_code, content=payload, headers=headers)


def _describe_validation_error(errors: list[dict]) -> str:
    if not errors:
        return "Request validation failed"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc) or "body"
    return f"{field}: {first.get('msg', 'invalid value')}"


async def http_exception_handler(request: Request, exc: HTTPException):
    code = "http_error"
    if exc.status_code == 401:
        code = "unauthorized"
    elif exc.status_code == 404:
        code = "not_found"
    elif exc.status_code == 409:
        code = "conflict"
    elif exc.status_code >= 500:
        code = "internal_error"
    return error_response(
        request,
        code=code,
        message=str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return error_response(
        request,
        code="validation_error",
        message=_describe_validation_error(errors),
        status_code=400,
        details=[{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in errors],
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception | request_id=%s", get_request_id(request), exc_info=exc)
    return error_response(
        request,
        code="internal_error",
        message=GENERIC_SERVER_ERROR,
        status_code=500,
    )


async def request_id_middleware(request: Request, call_next):
    incoming = request.headers.get("x-request-id")
    request.state.request_id = incoming or str(uuid.uuid4())
    response = await call_next(request)
    response.headers["x-request-id"] = request.state.request_id
    return response
