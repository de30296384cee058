from io import StringIO

import pytest
from django.core.management import call_command
from django.db import IntegrityError, transaction

from catalog.models import Fence, SeoTemplate

pytestmark = pytest.mark.django_db(transaction=True)


def test_models_have_no_pending_migrations():
    out = StringIO()
    call_command("makemigrations", "--check", "--dry-run", stdout=out)
    assert "No changes detected" in out.getvalue()


def test_seo_template_pair_unique_at_db_level():
    SeoTemplate.objects.create(
        entity_type="fences",
        category_key="granite",
        category_name="Гранитные ограды",
        seo_title="Гранитные ограды",
        seo_description="Ограды из гранита",
    )
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            SeoTemplate.objects.create(
                entity_type="fences",
                category_key="granite",
                category_name="Дубль",
                seo_title="Дубль",
                seo_description="Дубль",
            )


def test_same_category_key_allowed_for_other_entity_type():
    SeoTemplate.objects.create(
        entity_type="fences", category_key="metal", category_name="a", seo_title="a", seo_description="a"
    )
    SeoTemplate.objects.create(
        entity_type="accessories", category_key="metal", category_name="b", seo_title="b", seo_description="b"
    )
    assert SeoTemplate.objects.filter(category_key="metal").count() == 2


def test_catalog_slug_unique_at_db_level():
    Fence.objects.create(name="Ограда", slug="ograda", category="Гранитные ограды")
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            Fence.objects.create(name="Ограда 2", slug="ograda", category="Гранитные ограды")
