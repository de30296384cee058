import logging

from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

from catalog.exceptions import CatalogError

logger = logging.getLogger("request_errors")

GENERIC_ERROR_MESSAGE = "Внутренняя ошибка сервера"
VALIDATION_ERROR_MESSAGE = "Ошибка валидации данных"


def api_exception_handler(exc, context):
    """
    Wrap every API error into the ``{"success": false, "error": ...}`` envelope.

    Domain errors keep their own status code, DRF errors keep DRF's status,
    anything else is logged with traceback and answered with a generic 500.
    """
    if isinstance(exc, CatalogError):
        set_rollback()
        payload = {"success": False, "error": exc.message}
        if exc.details:
            payload["details"] = exc.details
        return Response(payload, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        data = response.data
        if isinstance(exc, exceptions.ValidationError):
            response.data = {"success": False, "error": VALIDATION_ERROR_MESSAGE, "details": data}
        elif isinstance(data, dict) and "detail" in data:
            response.data = {"success": False, "error": str(data["detail"])}
        else:
            response.data = {"success": False, "error": data}
        return response

    view = context.get("view")
    request = context.get("request")
    logger.error(
        "Unhandled API error in %s",
        view.__class__.__name__ if view else "unknown view",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={
            "path": getattr(request, "path", None),
            "method": getattr(request, "method", None),
            "request_id": getattr(getattr(request, "_request", request), "request_id", None),
        },
    )
    set_rollback()
    return Response({"success": False, "error": GENERIC_ERROR_MESSAGE}, status=500)
