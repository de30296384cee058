import pytest
from pytest_factoryboy import register
from rest_framework.test import APIClient

from tests import factories

pytest_plugins = ["pytest_factoryboy"]

register(factories.ProductFactory)
register(factories.SingleMonumentFactory)
register(factories.DoubleMonumentFactory)
register(factories.FenceFactory)
register(factories.AccessoryFactory)
register(factories.SeoTemplateFactory)
register(factories.BlogPostFactory)
register(factories.CampaignFactory)
register(factories.WorkFactory)
register(factories.EpitaphFactory)


@pytest.fixture(autouse=True)
def _configure_test_settings(settings, tmp_path_factory):
    base_dir = tmp_path_factory.mktemp("test-artifacts")
    media_root = base_dir / "media"
    log_dir = base_dir / "logs"

    media_root.mkdir(parents=True, exist_ok=True)
    log_dir.mkdir(parents=True, exist_ok=True)

    settings.MEDIA_ROOT = media_root
    settings.LOG_DIR = log_dir
    settings.ALLOWED_HOSTS = ["testserver", "localhost", "k-r.by"]
    settings.BULK_SEO_MAX_ROWS = 1000
    return settings


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def granite_template(seo_template_factory):
    return seo_template_factory(
        entity_type="fences",
        category_key="granite",
        category_name="Гранитные ограды",
        seo_title="Гранитные ограды на кладбище",
        seo_description="Гранитные ограды под заказ",
        seo_keywords="ограды, гранит",
        og_image="/fences/granite.webp",
    )
