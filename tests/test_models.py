import pytest

from catalog.models import Fence, build_unique_slug

pytestmark = pytest.mark.django_db


def test_slug_is_generated_from_name_with_suffix(fence_factory):
    first = fence_factory(name="Ограда Классика", slug="")
    second = fence_factory(name="Ограда Классика", slug="")

    assert first.slug == "ограда-классика"
    assert second.slug == "ограда-классика-2"


def test_build_unique_slug_ignores_own_row(fence_factory):
    fence = fence_factory(name="Ограда", slug="ограда")

    assert build_unique_slug(Fence, "Ограда", exclude_pk=fence.pk) == "ограда"
    assert build_unique_slug(Fence, "Ограда") == "ограда-2"


def test_without_seo_matches_has_seo_title(fence_factory):
    rows = [
        fence_factory(seo_title=None),
        fence_factory(seo_title=""),
        fence_factory(seo_title=" "),
        fence_factory(seo_title="Ограда"),
    ]

    missing = set(Fence.objects.without_seo().values_list("pk", flat=True))

    assert missing == {row.pk for row in rows if not row.has_seo_title()}
    assert Fence.objects.with_seo().count() == 2


def test_search_covers_name_and_description(fence_factory):
    fence_factory(name="Ограда", description="кованая")
    fence_factory(name="Ограда кованая")
    fence_factory(name="Другое")

    assert Fence.objects.search("кованая").count() == 2
    assert Fence.objects.search("  ").count() == 3
