from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from blog import api as blog_api
from catalog import api as catalog_api
from catalog.registry import EntityType
from memorial_site.health import health_view

# Single-table catalog types share one set of views.
CATEGORIZED_TABLES = (EntityType.FENCES, EntityType.ACCESSORIES, EntityType.LANDSCAPE)


def _categorized_patterns():
    patterns = []
    for entity_type in CATEGORIZED_TABLES:
        name = entity_type.value
        view_kwargs = {"entity_type": entity_type}
        patterns += [
            path(
                f"api/admin/{name}/",
                catalog_api.AdminCategorizedListCreateAPI.as_view(**view_kwargs),
                name=f"api-admin-{name}",
            ),
            path(
                f"api/admin/{name}/<int:pk>/",
                catalog_api.AdminCategorizedDetailAPI.as_view(**view_kwargs),
                name=f"api-admin-{name}-detail",
            ),
            path(f"api/{name}/", catalog_api.CategorizedListAPI.as_view(**view_kwargs), name=f"api-{name}"),
            path(
                f"api/{name}/<str:slug>/",
                catalog_api.CategorizedDetailAPI.as_view(**view_kwargs),
                name=f"api-{name}-detail",
            ),
        ]
    return patterns


seo_urlpatterns = [
    path(
        "api/admin/bulk-seo/preview/<str:entity_type>/<str:category_key>/",
        catalog_api.BulkSeoPreviewAPI.as_view(),
        name="api-bulk-seo-preview",
    ),
    path(
        "api/admin/bulk-seo/update/<str:entity_type>/<str:category_key>/",
        catalog_api.BulkSeoUpdateAPI.as_view(),
        name="api-bulk-seo-update",
    ),
    path(
        "api/admin/bulk-seo/check-template/<str:entity_type>/<str:category_key>/",
        catalog_api.BulkSeoCheckTemplateAPI.as_view(),
        name="api-bulk-seo-check-template",
    ),
    path(
        "api/seo-hierarchy/<str:entity_type>/<str:category_key>/",
        catalog_api.SeoHierarchyAPI.as_view(),
        name="api-seo-hierarchy",
    ),
    path("api/admin/seo-templates/", catalog_api.SeoTemplateListCreateAPI.as_view(), name="api-seo-templates"),
    path(
        "api/admin/seo-templates/<int:pk>/",
        catalog_api.SeoTemplateDetailAPI.as_view(),
        name="api-seo-template-detail",
    ),
    path(
        "api/admin/<str:entity_kind>/<int:pk>/seo/",
        catalog_api.EntitySeoAPI.as_view(),
        name="api-entity-seo",
    ),
]

monument_urlpatterns = [
    path("api/monuments/", catalog_api.MonumentListAPI.as_view(), name="api-monuments"),
    # Literal "slug/" before the category patterns.
    path("api/monuments/slug/<str:slug>/", catalog_api.MonumentBySlugAPI.as_view(), name="api-monument-by-slug"),
    path(
        "api/monuments/<str:category>/",
        catalog_api.MonumentCategoryListAPI.as_view(),
        name="api-monument-category",
    ),
    path(
        "api/monuments/<str:category>/<str:slug>/",
        catalog_api.MonumentDetailAPI.as_view(),
        name="api-monument-detail",
    ),
    path(
        "api/admin/monuments/<str:category>/",
        catalog_api.AdminMonumentListCreateAPI.as_view(),
        name="api-admin-monuments",
    ),
    path(
        "api/admin/monuments/<str:category>/<int:pk>/",
        catalog_api.AdminMonumentDetailAPI.as_view(),
        name="api-admin-monument-detail",
    ),
]

content_urlpatterns = [
    path("api/blogs/", blog_api.BlogListAPI.as_view(), name="api-blogs"),
    path("api/blogs/<str:slug>/", blog_api.BlogDetailAPI.as_view(), name="api-blog-detail"),
    path("api/campaigns/", blog_api.CampaignListAPI.as_view(), name="api-campaigns"),
    path("api/campaigns/<str:slug>/", blog_api.CampaignDetailAPI.as_view(), name="api-campaign-detail"),
    path("api/admin/blogs/", blog_api.AdminBlogListCreateAPI.as_view(), name="api-admin-blogs"),
    path("api/admin/blogs/<int:pk>/", blog_api.AdminBlogDetailAPI.as_view(), name="api-admin-blog-detail"),
    path("api/admin/campaigns/", blog_api.AdminCampaignListCreateAPI.as_view(), name="api-admin-campaigns"),
    path(
        "api/admin/campaigns/<int:pk>/",
        blog_api.AdminCampaignDetailAPI.as_view(),
        name="api-admin-campaign-detail",
    ),
    path("api/epitaphs/", catalog_api.EpitaphListAPI.as_view(), name="api-epitaphs"),
    path("api/admin/epitaphs/", catalog_api.AdminEpitaphListCreateAPI.as_view(), name="api-admin-epitaphs"),
    path(
        "api/admin/epitaphs/<int:pk>/",
        catalog_api.AdminEpitaphDetailAPI.as_view(),
        name="api-admin-epitaph-detail",
    ),
    path("api/works/", catalog_api.WorkListAPI.as_view(), name="api-works"),
    path("api/admin/works/", catalog_api.AdminWorkListCreateAPI.as_view(), name="api-admin-works"),
    path("api/admin/works/<int:pk>/", catalog_api.AdminWorkDetailAPI.as_view(), name="api-admin-work-detail"),
    path("api/page-seo/<str:page_slug>/", catalog_api.PageSEOPublicAPI.as_view(), name="api-page-seo"),
    path("api/admin/page-seo/", catalog_api.AdminPageSEOListCreateAPI.as_view(), name="api-admin-page-seo"),
    path(
        "api/admin/page-seo/<int:pk>/",
        catalog_api.AdminPageSEODetailAPI.as_view(),
        name="api-admin-page-seo-detail",
    ),
    path(
        "api/page-descriptions/<str:page_slug>/",
        catalog_api.PageDescriptionPublicAPI.as_view(),
        name="api-page-description",
    ),
    path(
        "api/admin/page-descriptions/",
        catalog_api.AdminPageDescriptionListCreateAPI.as_view(),
        name="api-admin-page-descriptions",
    ),
    path(
        "api/admin/page-descriptions/<int:pk>/",
        catalog_api.AdminPageDescriptionDetailAPI.as_view(),
        name="api-admin-page-description-detail",
    ),
    path("api/files/images/", catalog_api.ImageListAPI.as_view(), name="api-images"),
    path("api/upload/", catalog_api.UploadAPI.as_view(), name="api-upload"),
]

api_urlpatterns = [
    *seo_urlpatterns,
    *monument_urlpatterns,
    *_categorized_patterns(),
    *content_urlpatterns,
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path("health/", health_view, name="health"),
    *api_urlpatterns,
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
