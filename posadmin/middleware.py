"""
Project middleware for the /api/ surface: CORS headers on every API answer
(including the error responses built here), CSRF exemption for API views,
and the JSON error boundary.
"""
import logging

from corsheaders.defaults import default_headers
from django.conf import settings
from django.http import Http404, JsonResponse

from core.exceptions import PosError

logger = logging.getLogger(__name__)

API_PREFIX = "/api/"
API_METHODS = "GET, POST, PATCH, OPTIONS"


def is_api_request(request):
    return request.path.startswith(API_PREFIX)


class ApiCorsMiddleware:
    """
    Add CORS headers to API responses that corsheaders did not decorate,
    such as answers produced by a later middleware. Listed right after
    corsheaders' own middleware so it sees the final response.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.allowed_origins = frozenset(settings.CORS_ALLOWED_ORIGINS)
        self.allow_credentials = settings.CORS_ALLOW_CREDENTIALS

    def __call__(self, request):
        response = self.get_response(request)
        origin = request.headers.get("Origin", "").strip()
        if not is_api_request(request) or origin not in self.allowed_origins:
            return response
        response.setdefault("Access-Control-Allow-Origin", origin)
        response.setdefault("Access-Control-Allow-Methods", API_METHODS)
        response.setdefault("Access-Control-Allow-Headers", ", ".join(default_headers))
        if self.allow_credentials:
            response.setdefault("Access-Control-Allow-Credentials", "true")
        return response


class ApiCsrfExemptMiddleware:
    """API clients authenticate with a session cookie or a bearer token; neither sends a CSRF token."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_view(self, request, view_func, view_args, view_kwargs):
        if is_api_request(request):
            view_func.csrf_exempt = True
        return None


class ApiErrorMiddleware:
    """
    Convert exceptions raised by /api/ views into ``{"message": ...}`` responses.

    Domain errors (PosError) keep their status and message, except 5xx ones
    which answer with their generic message. Http404 becomes a JSON 404.
    Anything else is logged with its traceback and answered with a generic
    500 so storage details never reach the client.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if not is_api_request(request):
            return None
        if isinstance(exception, PosError):
            if exception.status_code >= 500:
                logger.error("%s %s failed: %s", request.method, request.path, exception.message)
                return JsonResponse({"message": exception.default_message}, status=exception.status_code)
            return JsonResponse({"message": exception.message}, status=exception.status_code)
        if isinstance(exception, Http404):
            return JsonResponse({"message": "Not found"}, status=404)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return JsonResponse({"message": "Internal server error"}, status=500)
