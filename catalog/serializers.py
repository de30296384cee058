import re
from functools import lru_cache

from rest_framework import serializers

from . import registry
from .models import CatalogEntity, Epitaph, PageDescription, PageSEO, SeoTemplate, Work

_PRICE_JUNK = re.compile(r"[^\d.,-]")


class PriceField(serializers.DecimalField):
    """Decimal price that also accepts "1 200,50 руб." style strings and renders as a number."""

    def __init__(self, **kwargs):
        kwargs.setdefault("max_digits", 10)
        kwargs.setdefault("decimal_places", 2)
        kwargs.setdefault("coerce_to_string", False)
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = _PRICE_JUNK.sub("", data).replace(",", ".").strip(".")
            if not data:
                return None
        return super().to_internal_value(data)

    def validate_empty_values(self, data):
        if data == "":
            return (True, None)
        return super().validate_empty_values(data)


class SeoFieldsSerializer(serializers.Serializer):
    seoTitle = serializers.CharField(
        source="seo_title", max_length=255, required=False, allow_null=True, allow_blank=True, trim_whitespace=False
    )
    seoDescription = serializers.CharField(
        source="seo_description", max_length=500, required=False, allow_null=True, allow_blank=True, trim_whitespace=False
    )
    seoKeywords = serializers.CharField(
        source="seo_keywords", max_length=500, required=False, allow_null=True, allow_blank=True, trim_whitespace=False
    )
    ogImage = serializers.CharField(
        source="og_image", max_length=500, required=False, allow_null=True, allow_blank=True
    )


class UniqueSlugMixin:
    """Reject a slug already used by another row of the same table."""

    def validate_slug(self, value):
        value = (value or "").strip()
        if not value:
            return value
        existing = self.Meta.model._default_manager.filter(slug=value)
        if self.instance is not None:
            existing = existing.exclude(pk=self.instance.pk)
        if existing.exists():
            raise serializers.ValidationError("Запись с таким slug уже существует")
        return value


class CatalogEntitySerializer(UniqueSlugMixin, SeoFieldsSerializer, serializers.ModelSerializer):
    slug = serializers.SlugField(max_length=255, allow_unicode=True, required=False, allow_blank=True)
    price = PriceField()
    oldPrice = PriceField(source="old_price")
    discount = PriceField()
    textPrice = serializers.CharField(source="text_price", required=False, allow_blank=True)
    category = serializers.CharField(required=False)
    categoryKey = serializers.SerializerMethodField()
    new = serializers.BooleanField(source="is_new", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = CatalogEntity
        fields = [
            "id",
            "slug",
            "name",
            "price",
            "oldPrice",
            "discount",
            "textPrice",
            "category",
            "categoryKey",
            "image",
            "height",
            "specifications",
            "options",
            "colors",
            "description",
            "availability",
            "hit",
            "popular",
            "new",
            "seoTitle",
            "seoDescription",
            "seoKeywords",
            "ogImage",
            "createdAt",
        ]

    def get_categoryKey(self, obj) -> str | None:
        entity_type = self.context.get("entity_type")
        if not entity_type:
            return None
        return registry.key_for_label(entity_type, obj.category)


@lru_cache(maxsize=None)
def entity_serializer_for(model) -> type[CatalogEntitySerializer]:
    """Concrete serializer for one catalog table; all tables share the same columns."""
    meta = type("Meta", (CatalogEntitySerializer.Meta,), {"model": model})
    return type(f"{model.__name__}Serializer", (CatalogEntitySerializer,), {"Meta": meta})


class EntitySeoSerializer(SeoFieldsSerializer):
    """Per-row SEO update; blank values clear the field."""

    def update(self, instance, validated_data):
        for field, value in validated_data.items():
            setattr(instance, field, value if value and value.strip() else None)
        instance.save(update_fields=list(validated_data))
        return instance


class SeoTemplateSerializer(serializers.ModelSerializer):
    entityType = serializers.ChoiceField(source="entity_type", choices=registry.EntityType.choices)
    categoryKey = serializers.CharField(source="category_key", max_length=64)
    categoryName = serializers.CharField(source="category_name", max_length=255)
    seoTitle = serializers.CharField(source="seo_title", max_length=255)
    seoDescription = serializers.CharField(source="seo_description", max_length=500)
    seoKeywords = serializers.CharField(
        source="seo_keywords", max_length=500, required=False, allow_null=True, allow_blank=True
    )
    ogImage = serializers.CharField(source="og_image", max_length=500, required=False, allow_null=True, allow_blank=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = SeoTemplate
        fields = [
            "id",
            "entityType",
            "categoryKey",
            "categoryName",
            "seoTitle",
            "seoDescription",
            "seoKeywords",
            "ogImage",
            "createdAt",
            "updatedAt",
        ]
        # Uniqueness is checked in validate() with a readable message.
        validators = []

    def validate(self, attrs):
        entity_type = attrs.get("entity_type", getattr(self.instance, "entity_type", None))
        category_key = attrs.get("category_key", getattr(self.instance, "category_key", None))
        if registry.is_categorized(entity_type):
            keys = [entry.key for entry in registry.categories_for(entity_type)]
            if category_key not in keys:
                raise serializers.ValidationError(
                    {"categoryKey": [f"Неверная категория. Доступные: {', '.join(keys)}"]}
                )

        duplicates = SeoTemplate.objects.filter(entity_type=entity_type, category_key=category_key)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError(
                {"categoryKey": ["Шаблон для этой категории уже существует"]}
            )
        for field in ("seo_keywords", "og_image"):
            if field in attrs and not (attrs[field] or "").strip():
                attrs[field] = None
        return attrs


class BulkSeoOptionsSerializer(serializers.Serializer):
    entityType = serializers.CharField()
    categoryKey = serializers.CharField()
    forceUpdate = serializers.BooleanField(required=False, default=False)


class PageSEOSerializer(serializers.ModelSerializer):
    pageSlug = serializers.CharField(source="page_slug", max_length=255)
    pageTitle = serializers.CharField(source="page_title", max_length=255)
    seoTitle = serializers.CharField(source="seo_title", max_length=255)
    seoDescription = serializers.CharField(source="seo_description", max_length=500)
    seoKeywords = serializers.CharField(source="seo_keywords", required=False, allow_null=True, allow_blank=True)
    ogTitle = serializers.CharField(source="og_title", required=False, allow_null=True, allow_blank=True)
    ogDescription = serializers.CharField(source="og_description", required=False, allow_null=True, allow_blank=True)
    ogImage = serializers.CharField(source="og_image", required=False, allow_null=True, allow_blank=True)
    ogImageWidth = serializers.IntegerField(source="og_image_width", required=False, min_value=1)
    ogImageHeight = serializers.IntegerField(source="og_image_height", required=False, min_value=1)
    twitterTitle = serializers.CharField(source="twitter_title", required=False, allow_null=True, allow_blank=True)
    twitterDescription = serializers.CharField(
        source="twitter_description", required=False, allow_null=True, allow_blank=True
    )
    twitterImage = serializers.CharField(source="twitter_image", required=False, allow_null=True, allow_blank=True)
    canonicalUrl = serializers.CharField(source="canonical_url", required=False, allow_null=True, allow_blank=True)
    robotsMeta = serializers.CharField(source="robots_meta", required=False, allow_null=True, allow_blank=True)
    schemaMarkup = serializers.JSONField(source="schema_markup", required=False, allow_null=True)
    isIndexed = serializers.BooleanField(source="is_indexed", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = PageSEO
        fields = [
            "id",
            "pageSlug",
            "pageTitle",
            "seoTitle",
            "seoDescription",
            "seoKeywords",
            "ogTitle",
            "ogDescription",
            "ogImage",
            "ogImageWidth",
            "ogImageHeight",
            "twitterTitle",
            "twitterDescription",
            "twitterImage",
            "canonicalUrl",
            "robotsMeta",
            "author",
            "schemaMarkup",
            "isIndexed",
            "createdAt",
            "updatedAt",
        ]
        extra_kwargs = {"author": {"required": False, "allow_null": True, "allow_blank": True}}

    def validate_pageSlug(self, value):
        existing = PageSEO.objects.filter(page_slug=value)
        if self.instance is not None:
            existing = existing.exclude(pk=self.instance.pk)
        if existing.exists():
            raise serializers.ValidationError("SEO для этой страницы уже существует")
        return value


class PageDescriptionSerializer(serializers.ModelSerializer):
    pageSlug = serializers.CharField(source="page_slug", max_length=255)
    pageTitle = serializers.CharField(source="page_title", max_length=255)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = PageDescription
        fields = ["id", "pageSlug", "pageTitle", "blocks", "createdAt", "updatedAt"]

    def validate_pageSlug(self, value):
        existing = PageDescription.objects.filter(page_slug=value)
        if self.instance is not None:
            existing = existing.exclude(pk=self.instance.pk)
        if existing.exists():
            raise serializers.ValidationError("Описание для этой страницы уже существует")
        return value

    def validate_blocks(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError("Ожидается список блоков")
        return value


class WorkSerializer(serializers.ModelSerializer):
    productId = serializers.CharField(source="product_id", required=False, allow_null=True, allow_blank=True)
    productType = serializers.ChoiceField(source="product_type", choices=registry.EntityType.choices)
    isActive = serializers.BooleanField(source="is_active", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Work
        fields = [
            "id",
            "title",
            "description",
            "image",
            "productId",
            "productType",
            "category",
            "isActive",
            "createdAt",
            "updatedAt",
        ]


class EpitaphSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Epitaph
        fields = ["id", "text", "createdAt"]
