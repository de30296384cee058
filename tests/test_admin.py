import pytest
from django.contrib.admin.sites import AdminSite
from django.test import RequestFactory

from catalog.admin import CatalogEntityAdmin
from catalog.models import Fence, SingleMonument

pytestmark = pytest.mark.django_db


def _fence_form(**overrides):
    data = {
        "name": "Ограда А-1",
        "slug": "",
        "category": "Гранитные ограды",
        "image": "",
        "description": "",
        "price": "",
        "old_price": "",
        "discount": "",
        "text_price": "",
        "availability": "под заказ",
        "height": "",
        "specifications": "{}",
        "options": "{}",
        "colors": "[]",
        "seo_title": "",
        "seo_description": "",
        "seo_keywords": "",
        "og_image": "",
    }
    data.update(overrides)
    return data


def test_added_fence_gets_template_seo(admin_client, granite_template):
    response = admin_client.post("/admin/catalog/fence/add/", _fence_form())

    assert response.status_code == 302
    fence = Fence.objects.get()
    assert fence.category == "Гранитные ограды"
    assert (fence.seo_title, fence.seo_description, fence.seo_keywords, fence.og_image) == (
        granite_template.seo_title,
        granite_template.seo_description,
        granite_template.seo_keywords,
        granite_template.og_image,
    )


def test_added_fence_keeps_own_seo(admin_client, granite_template):
    admin_client.post("/admin/catalog/fence/add/", _fence_form(seo_title="Своя ограда"))

    fence = Fence.objects.get()
    assert fence.seo_title == "Своя ограда"
    assert fence.seo_description is None


def test_free_text_category_is_rejected(admin_client, granite_template):
    response = admin_client.post("/admin/catalog/fence/add/", _fence_form(category="гранитные"))

    assert response.status_code == 200
    assert "category" in response.context["adminform"].form.errors
    assert not Fence.objects.exists()


def test_category_choices_follow_table():
    request = RequestFactory().get("/")
    fence_field = CatalogEntityAdmin(Fence, AdminSite()).get_form(request)().fields["category"]
    monument_field = CatalogEntityAdmin(SingleMonument, AdminSite()).get_form(request)().fields["category"]

    assert [value for value, _ in fence_field.choices if value] == [
        "Гранитные ограды",
        "Металлические ограды",
        "С полимерным покрытием",
    ]
    assert [value for value, _ in monument_field.choices if value] == ["Одиночные"]


def test_change_that_clears_seo_restamps_template(admin_client, granite_template, fence_factory):
    fence = fence_factory(name="Ограда Б-2", slug="ograda-b-2", seo_title="Старое", seo_description="Старое")

    response = admin_client.post(
        f"/admin/catalog/fence/{fence.pk}/change/",
        _fence_form(name="Ограда Б-2", slug="ograda-b-2"),
    )

    assert response.status_code == 302
    fence.refresh_from_db()
    assert fence.seo_title == granite_template.seo_title
