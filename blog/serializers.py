from rest_framework import serializers

from catalog.serializers import SeoFieldsSerializer, UniqueSlugMixin

from .models import BlogPost, Campaign


class PublicationSerializer(UniqueSlugMixin, SeoFieldsSerializer, serializers.ModelSerializer):
    slug = serializers.SlugField(max_length=255, allow_unicode=True, required=False, allow_blank=True)
    metaTitle = serializers.CharField(source="meta_title", max_length=255, required=False, allow_null=True, allow_blank=True)
    metaDescription = serializers.CharField(
        source="meta_description", required=False, allow_null=True, allow_blank=True
    )
    featuredImage = serializers.CharField(
        source="featured_image", max_length=500, required=False, allow_null=True, allow_blank=True
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = BlogPost
        fields = [
            "id",
            "slug",
            "title",
            "description",
            "content",
            "metaTitle",
            "metaDescription",
            "featuredImage",
            "images",
            "blocks",
            "tags",
            "seoTitle",
            "seoDescription",
            "seoKeywords",
            "ogImage",
            "createdAt",
            "updatedAt",
        ]

    def validate_tags(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError("Ожидается список тегов")
        return value


class BlogPostSerializer(PublicationSerializer):
    pass


class CampaignSerializer(PublicationSerializer):
    class Meta(PublicationSerializer.Meta):
        model = Campaign
        fields = PublicationSerializer.Meta.fields + ["products"]
