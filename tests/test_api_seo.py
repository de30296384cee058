import pytest
from django.urls import reverse

from catalog.models import Fence, SeoTemplate

pytestmark = pytest.mark.django_db


def _bulk_url(action, entity_type="fences", category_key="granite"):
    return reverse(f"api-bulk-seo-{action}", args=[entity_type, category_key])


def test_preview_endpoint(api_client, granite_template, fence_factory):
    fence_factory.create_batch(3, seo_title=None)
    fence_factory(seo_title="Своя")

    response = api_client.get(_bulk_url("preview"))

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["preview"] == {
        "templateName": "Гранитные ограды",
        "entityType": "fences",
        "categoryKey": "granite",
        "totalInCategory": 4,
        "withoutSeo": 3,
        "willBeUpdated": 3,
        "template": {
            "seoTitle": granite_template.seo_title,
            "seoDescription": granite_template.seo_description,
            "seoKeywords": granite_template.seo_keywords,
            "ogImage": granite_template.og_image,
        },
    }


def test_preview_force_update_from_query(api_client, granite_template, fence_factory):
    fence_factory.create_batch(2, seo_title="Своя")

    response = api_client.get(_bulk_url("preview"), {"forceUpdate": "true"})

    assert response.json()["preview"]["willBeUpdated"] == 2


def test_preview_without_template_is_404(api_client):
    response = api_client.get(_bulk_url("preview", "blogs", "blogs"))

    assert response.status_code == 404
    data = response.json()
    assert data["success"] is False
    assert data["error"] == "SEO шаблон не найден для данной категории"


def test_preview_unknown_entity_type_is_400(api_client):
    response = api_client.get(_bulk_url("preview", "cars", "granite"))

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_update_unknown_category_is_400(api_client, seo_template_factory):
    seo_template_factory(entity_type="fences", category_key="wooden")

    response = api_client.post(_bulk_url("update", "fences", "wooden"), {}, format="json")

    assert response.status_code == 400
    assert response.json()["details"]["available"] == ["granite", "metal", "polymer"]


def test_update_endpoint(api_client, granite_template, fence_factory):
    fence_factory.create_batch(2, seo_title=None)
    fence_factory(seo_title="Своя")

    response = api_client.post(_bulk_url("update"), {"forceUpdate": False}, format="json")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["stats"] == {"total": 3, "updated": 2, "skipped": 1, "errors": 0}
    assert "errorDetails" not in data
    assert Fence.objects.without_seo().count() == 0


def test_update_endpoint_force(api_client, granite_template, fence_factory):
    fence_factory.create_batch(2, seo_title="Своя")

    response = api_client.post(_bulk_url("update"), {"forceUpdate": True}, format="json")

    assert response.json()["stats"]["updated"] == 2
    assert set(Fence.objects.values_list("seo_title", flat=True)) == {granite_template.seo_title}


def test_check_template(api_client, granite_template):
    found = api_client.get(_bulk_url("check-template")).json()
    missing = api_client.get(_bulk_url("check-template", "fences", "metal")).json()

    assert found["hasTemplate"] is True
    assert found["template"]["id"] == granite_template.pk
    assert found["template"]["categoryName"] == "Гранитные ограды"
    assert missing == {"success": True, "hasTemplate": False, "template": None}


def test_seo_hierarchy(api_client, granite_template):
    url = reverse("api-seo-hierarchy", args=["fences", "granite"])

    data = api_client.get(url).json()

    assert data["success"] is True
    assert data["template"]["seoTitle"] == granite_template.seo_title
    assert api_client.get(reverse("api-seo-hierarchy", args=["fences", "metal"])).json()["template"] is None


class TestSeoTemplateCrud:
    url = "/api/admin/seo-templates/"

    def payload(self, **overrides):
        data = {
            "entityType": "accessories",
            "categoryKey": "vases",
            "categoryName": "Вазы",
            "seoTitle": "Вазы на кладбище",
            "seoDescription": "Гранитные вазы",
        }
        data.update(overrides)
        return data

    def test_create(self, api_client):
        response = api_client.post(self.url, self.payload(), format="json")

        assert response.status_code == 201
        assert response.json()["data"]["categoryKey"] == "vases"
        template = SeoTemplate.objects.get()
        assert template.seo_keywords is None

    def test_duplicate_pair_is_rejected(self, api_client):
        api_client.post(self.url, self.payload(), format="json")

        response = api_client.post(self.url, self.payload(categoryName="Другое"), format="json")

        assert response.status_code == 400
        assert "categoryKey" in response.json()["details"]
        assert SeoTemplate.objects.count() == 1

    def test_title_length_is_limited(self, api_client):
        response = api_client.post(self.url, self.payload(seoTitle="x" * 256), format="json")

        assert response.status_code == 400
        assert "seoTitle" in response.json()["details"]

    def test_unknown_category_key_is_rejected(self, api_client):
        response = api_client.post(self.url, self.payload(categoryKey="pots"), format="json")

        assert response.status_code == 400

    def test_uncategorized_type_accepts_own_key(self, api_client):
        response = api_client.post(
            self.url, self.payload(entityType="blogs", categoryKey="blogs", categoryName="Блог"), format="json"
        )

        assert response.status_code == 201

    def test_update_and_delete(self, api_client, granite_template):
        detail = reverse("api-seo-template-detail", args=[granite_template.pk])

        response = api_client.patch(detail, {"seoTitle": "Новый заголовок"}, format="json")
        assert response.status_code == 200
        granite_template.refresh_from_db()
        assert granite_template.seo_title == "Новый заголовок"

        response = api_client.delete(detail)
        assert response.status_code == 200
        assert not SeoTemplate.objects.exists()

    def test_list_filters_by_entity_type(self, api_client, granite_template, seo_template_factory):
        seo_template_factory(entity_type="blogs", category_key="blogs")

        data = api_client.get(self.url, {"entityType": "fences"}).json()

        assert data["count"] == 1
        assert data["data"][0]["id"] == granite_template.pk


class TestEntitySeo:
    def test_get(self, api_client, fence_factory):
        fence = fence_factory(seo_title="Ограда", seo_description=None)

        data = api_client.get(f"/api/admin/fences/{fence.pk}/seo/").json()

        assert data["data"] == {
            "id": fence.pk,
            "seoTitle": "Ограда",
            "seoDescription": None,
            "seoKeywords": None,
            "ogImage": None,
        }

    def test_put_sets_fields_directly(self, api_client, granite_template, single_monument_factory):
        monument = single_monument_factory()

        response = api_client.put(
            f"/api/admin/single-monuments/{monument.pk}/seo/",
            {"seoTitle": "Памятник", "seoDescription": "", "seoKeywords": "гранит"},
            format="json",
        )

        assert response.status_code == 200
        monument.refresh_from_db()
        assert monument.seo_title == "Памятник"
        assert monument.seo_description is None
        assert monument.seo_keywords == "гранит"
        assert monument.og_image is None

    def test_put_rejects_long_title(self, api_client, fence_factory):
        fence = fence_factory(seo_title="Ограда")

        response = api_client.put(f"/api/admin/fences/{fence.pk}/seo/", {"seoTitle": "x" * 256}, format="json")

        assert response.status_code == 400
        fence.refresh_from_db()
        assert fence.seo_title == "Ограда"

    def test_unknown_kind_and_id(self, api_client):
        assert api_client.get("/api/admin/granite/1/seo/").status_code == 400
        assert api_client.get("/api/admin/fences/999/seo/").status_code == 404
