import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Каталог памятников"

    def ready(self):
        self._log_upload_config()

    def _log_upload_config(self):
        """Log upload and bulk SEO limits at startup."""
        folders = getattr(settings, "UPLOAD_ALLOWED_FOLDERS", []) or []
        if not folders:
            logger.warning("UPLOAD_ALLOWED_FOLDERS is empty. Image uploads will be rejected.")
        logger.debug(
            "Uploads: %s folders, max %s bytes; bulk SEO cap %s rows",
            len(folders),
            getattr(settings, "MAX_IMAGE_SIZE", None),
            getattr(settings, "BULK_SEO_MAX_ROWS", None),
        )
