"""CORS header injection for API responses."""

import typing as t

from django.conf import settings
from django.http import HttpRequest, HttpResponse


def cors_headers() -> dict[str, str]:
    """Build the CORS headers from settings."""
    headers = {
        "Access-Control-Allow-Origin": settings.CORS_ALLOWED_ORIGIN,
        "Access-Control-Allow-Methods": ",".join(settings.CORS_ALLOW_METHODS),
        "Access-Control-Allow-Headers": ",".join(settings.CORS_ALLOW_HEADERS),
    }
    if settings.CORS_ALLOW_CREDENTIALS:
        headers["Access-Control-Allow-Credentials"] = "true"
    return headers


class CorsHeadersMiddleware:
    """Adds CORS headers to every API response and answers preflight requests."""

    def __init__(self, get_response: t.Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if not request.path.startswith(settings.CORS_PATH_PREFIX):
            return self.get_response(request)

        if request.method == "OPTIONS" and "HTTP_ACCESS_CONTROL_REQUEST_METHOD" in request.META:
            response = HttpResponse(status=204)
        else:
            response = self.get_response(request)

        for header, value in cors_headers().items():
            response[header] = value
        return response
