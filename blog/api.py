import logging

from rest_framework import generics

from catalog.api import CatalogPagination, EnvelopeMixin
from catalog.filters import PublicationFilter
from catalog.registry import EntityType
from catalog.seo_templates import fill_missing_seo, resolve_seo

from .models import BlogPost, Campaign
from .serializers import BlogPostSerializer, CampaignSerializer

logger = logging.getLogger(__name__)


class PublicationMixin:
    """
    Blogs and campaigns have no categories: their SEO template is keyed by
    the entity type on both sides, e.g. ("blogs", "blogs").
    """

    entity_type = EntityType.BLOGS
    filterset_class = PublicationFilter
    pagination_class = CatalogPagination

    @property
    def template_key(self) -> str:
        return self.entity_type.value


class BlogMixin(PublicationMixin):
    entity_type = EntityType.BLOGS
    queryset = BlogPost.objects.order_by("-created_at", "-id")
    serializer_class = BlogPostSerializer


class CampaignMixin(PublicationMixin):
    entity_type = EntityType.CAMPAIGNS
    queryset = Campaign.objects.order_by("-created_at", "-id")
    serializer_class = CampaignSerializer


class PublicationCreateMixin:
    def perform_create(self, serializer):
        seo = resolve_seo(serializer.validated_data, self.entity_type.value, self.template_key)
        instance = serializer.save(**seo.as_dict())
        logger.info("Created %s id=%s", instance._meta.label, instance.pk)


class PublicationUpdateMixin:
    def perform_update(self, serializer):
        instance = serializer.save()
        fill_missing_seo(instance, self.entity_type.value, self.template_key)


class BlogListAPI(BlogMixin, generics.ListAPIView):
    pass


class BlogDetailAPI(BlogMixin, EnvelopeMixin, generics.RetrieveAPIView):
    lookup_field = "slug"


class CampaignListAPI(CampaignMixin, generics.ListAPIView):
    pass


class CampaignDetailAPI(CampaignMixin, EnvelopeMixin, generics.RetrieveAPIView):
    lookup_field = "slug"


class AdminBlogListCreateAPI(BlogMixin, PublicationCreateMixin, EnvelopeMixin, generics.ListCreateAPIView):
    pass


class AdminBlogDetailAPI(BlogMixin, PublicationUpdateMixin, EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    deleted_message = "Статья удалена"


class AdminCampaignListCreateAPI(CampaignMixin, PublicationCreateMixin, EnvelopeMixin, generics.ListCreateAPIView):
    pass


class AdminCampaignDetailAPI(
    CampaignMixin, PublicationUpdateMixin, EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView
):
    deleted_message = "Акция удалена"
