import logging
import uuid
from pathlib import Path
from typing import Callable

from django.conf import settings
from django.core.files.uploadedfile import UploadedFile
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.http.multipartparser import MultiPartParserError

logger = logging.getLogger("request_errors")


class ErrorLoggingMiddleware:
    """
    Adds a request id to each request/response and writes errors to logs/errors.log.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.request_id = request_id
        request.META["HTTP_X_REQUEST_ID"] = request_id

        try:
            response = self.get_response(request)
        except Exception:
            logger.exception(
                "Unhandled exception",
                extra={"request_id": request_id, "path": request.path, "method": request.method},
            )
            raise

        response["X-Request-ID"] = request_id
        if response.status_code >= 500:
            logger.error(
                "Response with %s",
                response.status_code,
                extra={"request_id": request_id, "path": request.path, "method": request.method},
            )
        return response


class UploadValidationMiddleware:
    """
    Rejects uploads that exceed size limits or use disallowed formats.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if request.method in {"POST", "PUT", "PATCH"} and request.content_type == "multipart/form-data":
            try:
                files = request.FILES
            except MultiPartParserError:
                logger.warning("Invalid multipart upload", extra={"path": request.path})
                return JsonResponse({"success": False, "error": "Invalid upload payload."}, status=400)

            for field_name, uploaded_file in files.items():
                failure = self._validate_file(uploaded_file)
                if failure:
                    logger.warning(
                        "Rejected upload: %s",
                        failure,
                        extra={
                            "path": request.path,
                            "field": field_name,
                            "content_type": getattr(uploaded_file, "content_type", None),
                            "size": getattr(uploaded_file, "size", None),
                        },
                    )
                    return JsonResponse({"success": False, "error": failure}, status=400)

        return self.get_response(request)

    def _validate_file(self, uploaded_file: UploadedFile) -> str | None:
        allowed_extensions = {ext.lower().lstrip(".") for ext in settings.MEDIA_ALLOWED_IMAGE_EXTENSIONS}
        allowed_mime_types = {mime.lower() for mime in settings.MEDIA_ALLOWED_IMAGE_MIME_TYPES}
        max_size_bytes = settings.MAX_IMAGE_SIZE

        file_size = getattr(uploaded_file, "size", None)
        if max_size_bytes and file_size is not None and file_size > max_size_bytes:
            return f"File '{uploaded_file.name}' exceeds maximum size of {max_size_bytes} bytes."

        extension = Path(uploaded_file.name or "").suffix.lower().lstrip(".")
        content_type = (getattr(uploaded_file, "content_type", "") or "").lower()

        if not extension or extension not in allowed_extensions:
            return f"File '{uploaded_file.name}' has a disallowed extension."

        if content_type and content_type not in allowed_mime_types:
            return f"File '{uploaded_file.name}' has a disallowed content type."

        return None
