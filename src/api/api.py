from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404, HttpRequest
from ninja.errors import HttpError
from ninja.errors import ValidationError as NinjaValidationError
from ninja_extra import NinjaExtraAPI
from ninja_extra.exceptions import APIException

from common.exceptions import ApiError
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle
from events.controllers.events import EventController
from events.controllers.organizers import OrganizerController
from registrations.controllers import EventRegistrationController, RegistrationController

from .exception_handlers import (
    handle_api_error,
    handle_django_validation_error,
    handle_framework_api_exception,
    handle_general_exception,
    handle_http_error,
    handle_not_found,
    handle_request_validation_error,
)

api = NinjaExtraAPI(
    title="EventHub API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"EventHub API {settings.VERSION}",
    app_name=f"eventhub-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version."""
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API."""
    return 200, ResponseOk()


api.register_controllers(
    OrganizerController,
    EventController,
    EventRegistrationController,
    RegistrationController,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ApiError: handle_api_error,
    NinjaValidationError: handle_request_validation_error,
    DjangoValidationError: handle_django_validation_error,
    HttpError: handle_http_error,
    APIException: handle_framework_api_exception,
    Http404: handle_not_found,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
