"""Exception handlers for the API.

Every error is rendered with the same envelope:
``{"success": false, "error": {"message", "code", "details"}, "data": null}``.
"""

import typing as t

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404, HttpRequest
from ninja.errors import HttpError
from ninja.errors import ValidationError as NinjaValidationError
from ninja.responses import Response
from ninja_extra.exceptions import APIException

from common.exceptions import ApiError, code_for_status

logger = structlog.get_logger(__name__)


def error_response(status: int, message: str, code: str | None = None, details: t.Any = None) -> Response:
    """Build an error envelope response."""
    error: dict[str, t.Any] = {"message": message, "code": code or code_for_status(status)}
    if details is not None:
        error["details"] = details
    return Response({"success": False, "error": error, "data": None}, status=status)


def handle_api_error(request: HttpRequest, exc: ApiError | t.Type[ApiError]) -> Response:
    """Handle an error raised by a service."""
    exc = t.cast(ApiError, exc)
    log = logger.error if exc.status_code >= 500 else logger.info
    log("api_error", status_code=exc.status_code, code=exc.code, error_message=exc.message)
    return error_response(exc.status_code, exc.message, exc.code, exc.details)


def handle_request_validation_error(
    request: HttpRequest, exc: NinjaValidationError | t.Type[NinjaValidationError]
) -> Response:
    """Handle a request that does not match the declared input schema."""
    exc = t.cast(NinjaValidationError, exc)
    logger.info("request_validation_error", errors=exc.errors)
    return error_response(422, "Request validation failed", "VALIDATION_ERROR", exc.errors)


def handle_django_validation_error(
    request: HttpRequest, exc: DjangoValidationError | t.Type[DjangoValidationError]
) -> Response:
    """Handle a model validation error."""
    exc = t.cast(DjangoValidationError, exc)
    logger.info("model_validation_error", errors=exc.messages)
    details: t.Any = exc.message_dict if hasattr(exc, "error_dict") else exc.messages
    return error_response(422, exc.messages[0] if exc.messages else "Validation failed", "VALIDATION_ERROR", details)


def handle_http_error(request: HttpRequest, exc: HttpError | t.Type[HttpError]) -> Response:
    """Handle a ninja HttpError (including authentication failures)."""
    exc = t.cast(HttpError, exc)
    return error_response(exc.status_code, str(exc))


def handle_framework_api_exception(request: HttpRequest, exc: APIException | t.Type[APIException]) -> Response:
    """Handle ninja-extra exceptions such as permission denied and throttling."""
    exc = t.cast(APIException, exc)
    detail = exc.detail
    message = str(detail) if not isinstance(detail, (dict, list)) else "Request failed"
    details = detail if isinstance(detail, (dict, list)) else None
    return error_response(exc.status_code, message, details=details)


def handle_not_found(request: HttpRequest, exc: Http404 | t.Type[Http404]) -> Response:
    """Handle a Django Http404."""
    return error_response(404, str(exc) or "Not found")


def json_payload(request: HttpRequest) -> t.Any:
    """The JSON body of a write request, if it has one that parses."""
    if request.method not in ("POST", "PUT", "PATCH") or request.content_type != "application/json":
        return None
    try:
        return orjson.loads(request.body) if request.body else None
    except orjson.JSONDecodeError:
        return None


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle an unexpected exception.

    The request body is logged with the error; the log processors redact its PII.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    logger.exception(
        "INTERNAL_SERVER_ERROR",
        path=request.path,
        method=request.method,
        payload=json_payload(request),
    )
    details = {"exception": repr(exc)} if settings.DEBUG else None
    return error_response(500, "Internal server error", "INTERNAL_ERROR", details)
