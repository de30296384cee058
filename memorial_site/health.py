import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.core.cache import caches
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils.timezone import now
from django.views.decorators.cache import never_cache

from catalog.models import SeoTemplate

logger = logging.getLogger(__name__)


def _check_database() -> str | None:
    try:
        connection = connections[DEFAULT_DB_ALIAS]
        connection.ensure_connection()
    except DatabaseError as exc:
        return str(exc)
    return None


def _check_cache() -> str | None:
    try:
        cache = caches["default"]
        probe_key = "healthcheck_ping"
        cache.set(probe_key, "pong", timeout=5)
        if cache.get(probe_key) != "pong":
            return "Cache read/write validation failed."
    except Exception as exc:
        return str(exc)
    return None


def _check_writable_dir(path, name: str) -> str | None:
    path = Path(path)
    if not path.exists():
        return f"{name} is missing."
    if not path.is_dir():
        return f"{name} is not a directory."
    if not os.access(path, os.W_OK):
        return f"{name} is not writable."
    return None


def _build_check(status: str, detail: Any | None = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {"status": status}
    if detail not in (None, "", [], {}):
        data["detail"] = detail
    return data


def run_health_checks(request: Optional[HttpRequest] = None) -> Dict[str, Any]:
    errors: List[str] = []
    warnings: List[str] = []
    checks: Dict[str, Any] = {}

    db_error = _check_database()
    checks["database"] = _build_check("ok" if not db_error else "error", db_error)
    if db_error:
        errors.append(f"Database unavailable: {db_error}")

    if not db_error:
        try:
            templates = SeoTemplate.objects.count()
        except DatabaseError as exc:
            logger.exception("Failed to count SEO templates")
            checks["seo_templates"] = _build_check("error", str(exc))
            errors.append(f"SEO templates table unavailable: {exc}")
        else:
            checks["seo_templates"] = _build_check("ok", {"count": templates})
    else:
        checks["seo_templates"] = _build_check("skipped", "Database unavailable")

    cache_issue = _check_cache()
    checks["cache"] = _build_check("ok" if not cache_issue else "error", cache_issue)
    if cache_issue:
        errors.append(f"Cache unavailable: {cache_issue}")

    media_issue = _check_writable_dir(settings.MEDIA_ROOT, "MEDIA_ROOT")
    checks["media_root"] = _build_check("ok" if not media_issue else "warning", media_issue)
    if media_issue:
        warnings.append(media_issue)

    log_dir_issue = _check_writable_dir(settings.LOG_DIR, "LOG_DIR")
    checks["log_dir"] = _build_check("ok" if not log_dir_issue else "warning", log_dir_issue)
    if log_dir_issue:
        warnings.append(log_dir_issue)

    status = "ok"
    if errors:
        status = "error"
    elif warnings:
        status = "degraded"

    report: Dict[str, Any] = {
        "status": status,
        "errors": errors,
        "warnings": warnings,
        "checks": checks,
        "meta": {
            "debug": settings.DEBUG,
            "timestamp": now().isoformat(),
        },
    }
    if status == "ok":
        logger.debug("Health check report: %s", report)
    elif status == "degraded":
        logger.info("Health degraded (warnings only): %s", report)
    else:
        logger.error("Health errors detected: %s", report)
    return report


@never_cache
def health_view(request: HttpRequest) -> JsonResponse:
    report = run_health_checks(request=request)
    strict_mode = request.GET.get("strict", "").lower() in ("1", "true", "yes")

    # Warnings alone keep 200; strict mode requires a clean report.
    if report["status"] == "error" or (strict_mode and report["status"] != "ok"):
        status_code = 503
    else:
        status_code = 200

    return JsonResponse(report, status=status_code)
