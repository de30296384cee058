from unittest.mock import patch

import pytest
from django.db import DatabaseError

from catalog.models import Fence
from catalog.seo_templates import SeoData, fill_missing_seo, get_template, resolve_seo, stamp_seo

pytestmark = pytest.mark.django_db


def test_resolve_uses_template_when_nothing_submitted(granite_template):
    seo = resolve_seo({}, "fences", "granite")

    assert seo == SeoData(
        seo_title="Гранитные ограды на кладбище",
        seo_description="Гранитные ограды под заказ",
        seo_keywords="ограды, гранит",
        og_image="/fences/granite.webp",
    )


def test_resolve_keeps_only_submitted_fields(granite_template):
    seo = resolve_seo({"seo_keywords": "своя ограда"}, "fences", "granite")

    assert seo == SeoData(seo_keywords="своя ограда")


def test_blank_submitted_values_count_as_missing(granite_template):
    seo = resolve_seo({"seo_title": "   ", "seo_description": ""}, "fences", "granite")

    assert seo.seo_title == "Гранитные ограды на кладбище"


def test_submitted_values_are_stored_verbatim():
    seo = resolve_seo({"seo_title": " Ограда "}, "fences", "granite")

    assert seo.seo_title == " Ограда "


def test_resolve_without_template_is_empty():
    assert resolve_seo({}, "fences", "metal").is_empty()


def test_template_of_other_type_is_not_used(seo_template_factory):
    seo_template_factory(entity_type="accessories", category_key="granite")

    assert resolve_seo({}, "fences", "granite").is_empty()


def test_template_lookup_failure_counts_as_missing():
    with patch("catalog.seo_templates.SeoTemplate") as template_model:
        template_model.objects.filter.side_effect = DatabaseError("connection lost")

        assert get_template("fences", "granite") is None


def test_stamp_seo_sets_fields_without_saving(granite_template):
    fence = Fence(name="Ограда", category="Гранитные ограды")

    stamp_seo(fence, "fences", "granite")

    assert fence.pk is None
    assert fence.seo_title == granite_template.seo_title
    assert fence.og_image == granite_template.og_image


def test_fill_missing_seo_only_touches_rows_without_seo(granite_template, fence_factory):
    empty = fence_factory(seo_title=None)
    own = fence_factory(seo_title="Своя", seo_keywords=None)

    assert fill_missing_seo(empty, "fences", "granite") is True
    assert fill_missing_seo(own, "fences", "granite") is False

    empty.refresh_from_db()
    own.refresh_from_db()
    assert empty.seo_title == granite_template.seo_title
    assert own.seo_title == "Своя"
    assert own.seo_keywords is None
