from django.conf import settings

from memorial_site import settings as project_settings


def test_upload_settings_are_normalised():
    assert all(not ext.startswith(".") for ext in settings.MEDIA_ALLOWED_IMAGE_EXTENSIONS)
    assert "image/png" in settings.MEDIA_ALLOWED_IMAGE_MIME_TYPES
    assert settings.MAX_IMAGE_SIZE > 0


def test_bulk_seo_cap_defaults_to_one_thousand():
    assert project_settings.BULK_SEO_MAX_ROWS == 1000


def test_settings_carry_no_unused_site_values():
    for name in ("DJANGO_VERSION_STR", "TESTING", "SITE_DOMAIN"):
        assert not hasattr(project_settings, name)
