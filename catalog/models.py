from django.db import models
from django.db.models import Q
from django.utils.text import slugify

from .registry import EntityType


class SeoFields(models.Model):
    """Four SEO columns shared by every catalog table, blogs and campaigns."""

    seo_title = models.CharField("SEO title", max_length=255, null=True, blank=True)
    seo_description = models.CharField("SEO description", max_length=500, null=True, blank=True)
    seo_keywords = models.CharField("SEO keywords", max_length=500, null=True, blank=True)
    og_image = models.CharField("OG image", max_length=500, null=True, blank=True)

    class Meta:
        abstract = True

    def has_seo_title(self) -> bool:
        # Same predicate as SeoQuerySet.without_seo(): NULL and "" count as missing.
        return bool(self.seo_title)


class SeoQuerySet(models.QuerySet):
    def without_seo(self):
        """Rows whose SEO title is NULL or an empty string."""
        return self.filter(Q(seo_title__isnull=True) | Q(seo_title=""))

    def with_seo(self):
        return self.exclude(Q(seo_title__isnull=True) | Q(seo_title=""))


class CatalogEntityQuerySet(SeoQuerySet):
    def search(self, term: str):
        term = (term or "").strip()
        if not term:
            return self
        return self.filter(Q(name__icontains=term) | Q(description__icontains=term))


def build_unique_slug(model, source: str, exclude_pk=None, max_length: int = 255) -> str:
    """Slugify ``source`` (Cyrillic kept) and add a numeric suffix until unique in ``model``."""
    base = slugify(source or "", allow_unicode=True)[:max_length].strip("-") or model._meta.model_name
    candidate = base
    suffix = 2
    existing = model._default_manager.all()
    if exclude_pk is not None:
        existing = existing.exclude(pk=exclude_pk)
    while existing.filter(slug=candidate).exists():
        tail = f"-{suffix}"
        candidate = f"{base[: max_length - len(tail)]}{tail}"
        suffix += 1
    return candidate


class CatalogEntity(SeoFields):
    """Column superset of the product tables (monuments, fences, accessories, landscape)."""

    class Availability(models.TextChoices):
        IN_STOCK = "в наличии", "В наличии"
        ON_REQUEST = "под заказ", "Под заказ"

    objects = CatalogEntityQuerySet.as_manager()

    slug = models.SlugField("URL", max_length=255, unique=True, allow_unicode=True, blank=True)
    name = models.CharField("Название", max_length=255)
    price = models.DecimalField("Цена", max_digits=10, decimal_places=2, null=True, blank=True)
    old_price = models.DecimalField("Старая цена", max_digits=10, decimal_places=2, null=True, blank=True)
    discount = models.DecimalField("Скидка", max_digits=10, decimal_places=2, null=True, blank=True)
    text_price = models.CharField("Цена (текстом)", max_length=255, blank=True, default="")
    category = models.CharField(
        "Категория",
        max_length=255,
        db_index=True,
        help_text="Отображаемое название категории, например «Гранитные ограды».",
    )
    image = models.CharField("Изображение", max_length=500, blank=True, default="")
    height = models.CharField("Высота", max_length=100, blank=True, default="")
    specifications = models.JSONField("Характеристики", blank=True, default=dict)
    options = models.JSONField("Опции", blank=True, default=dict)
    colors = models.JSONField("Цвета", blank=True, default=list)
    description = models.TextField("Описание", blank=True, default="")
    availability = models.CharField(
        "Наличие",
        max_length=50,
        choices=Availability.choices,
        default=Availability.ON_REQUEST,
    )
    hit = models.BooleanField("Хит", default=False)
    popular = models.BooleanField("Популярное", default=False)
    is_new = models.BooleanField("Новинка", default=False, db_column="new")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["id"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.slug = (self.slug or "").strip()
        if not self.slug:
            self.slug = build_unique_slug(type(self), self.name, exclude_pk=self.pk)
        super().save(*args, **kwargs)


class Product(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "products"
        verbose_name = "Эксклюзивный памятник"
        verbose_name_plural = "Эксклюзивные памятники"


class SingleMonument(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "single_monuments"
        verbose_name = "Одиночный памятник"
        verbose_name_plural = "Одиночные памятники"


class DoubleMonument(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "double_monuments"
        verbose_name = "Двойной памятник"
        verbose_name_plural = "Двойные памятники"


class CheapMonument(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "cheap_monuments"
        verbose_name = "Недорогой памятник"
        verbose_name_plural = "Недорогие памятники"


class CrossMonument(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "cross_monuments"
        verbose_name = "Памятник в виде креста"
        verbose_name_plural = "Памятники в виде креста"


class HeartMonument(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "heart_monuments"
        verbose_name = "Памятник в виде сердца"
        verbose_name_plural = "Памятники в виде сердца"


class CompositeMonument(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "composite_monuments"
        verbose_name = "Составной памятник"
        verbose_name_plural = "Составные памятники"


class EuropeMonument(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "europe_monuments"
        verbose_name = "Европейский памятник"
        verbose_name_plural = "Европейские памятники"


class ArtisticMonument(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "artistic_monuments"
        verbose_name = "Памятник с художественной резкой"
        verbose_name_plural = "Памятники с художественной резкой"


class TreeMonument(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "tree_monuments"
        verbose_name = "Памятник в виде дерева"
        verbose_name_plural = "Памятники в виде дерева"


class ComplexMonument(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "complex_monuments"
        verbose_name = "Мемориальный комплекс"
        verbose_name_plural = "Мемориальные комплексы"


class Fence(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "fences"
        verbose_name = "Ограда"
        verbose_name_plural = "Ограды"


class Accessory(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "accessories"
        verbose_name = "Аксессуар"
        verbose_name_plural = "Аксессуары"


class LandscapeItem(CatalogEntity):
    class Meta(CatalogEntity.Meta):
        db_table = "landscape"
        verbose_name = "Благоустройство"
        verbose_name_plural = "Благоустройство"


class SeoTemplate(models.Model):
    """
    Reusable SEO metadata for one (entity type, category key) pair.

    Values are copied into rows when they are written (and by the bulk SEO
    run); editing a template does not change rows that were already stamped.
    """

    entity_type = models.CharField("Тип сущности", max_length=32, choices=EntityType.choices)
    category_key = models.CharField("Ключ категории", max_length=64)
    category_name = models.CharField("Название категории", max_length=255)
    seo_title = models.CharField("SEO title", max_length=255)
    seo_description = models.CharField("SEO description", max_length=500)
    seo_keywords = models.CharField("SEO keywords", max_length=500, null=True, blank=True)
    og_image = models.CharField("OG image", max_length=500, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "seo_templates"
        ordering = ["entity_type", "category_name"]
        verbose_name = "SEO шаблон"
        verbose_name_plural = "SEO шаблоны"
        constraints = [
            models.UniqueConstraint(
                fields=["entity_type", "category_key"], name="seo_template_type_key_unique"
            )
        ]

    def __str__(self):
        return f"{self.entity_type}/{self.category_key}: {self.category_name}"


class PageSEO(models.Model):
    page_slug = models.CharField("Страница", max_length=255, unique=True)
    page_title = models.CharField("Название страницы", max_length=255)
    seo_title = models.CharField("SEO title", max_length=255)
    seo_description = models.CharField("SEO description", max_length=500)
    seo_keywords = models.CharField("SEO keywords", max_length=500, null=True, blank=True)
    og_title = models.CharField("OG title", max_length=255, null=True, blank=True)
    og_description = models.CharField("OG description", max_length=500, null=True, blank=True)
    og_image = models.CharField("OG image", max_length=500, null=True, blank=True)
    og_image_width = models.PositiveIntegerField(default=1200)
    og_image_height = models.PositiveIntegerField(default=630)
    twitter_title = models.CharField(max_length=255, null=True, blank=True)
    twitter_description = models.CharField(max_length=500, null=True, blank=True)
    twitter_image = models.CharField(max_length=500, null=True, blank=True)
    canonical_url = models.CharField(max_length=500, null=True, blank=True)
    robots_meta = models.CharField(max_length=100, null=True, blank=True)
    author = models.CharField(max_length=255, null=True, blank=True)
    schema_markup = models.JSONField("Schema.org JSON-LD", null=True, blank=True)
    is_indexed = models.BooleanField("Индексировать", default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "page_seo"
        ordering = ["page_slug"]
        verbose_name = "SEO страницы"
        verbose_name_plural = "SEO страниц"

    def __str__(self):
        return self.page_slug


class PageDescription(models.Model):
    page_slug = models.CharField("Страница", max_length=255, unique=True)
    page_title = models.CharField("Название страницы", max_length=255)
    blocks = models.JSONField("Блоки", blank=True, default=list)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "page_descriptions"
        ordering = ["page_slug"]
        verbose_name = "Описание страницы"
        verbose_name_plural = "Описания страниц"

    def __str__(self):
        return self.page_slug


class Work(models.Model):
    """Photo of a finished installation, optionally tied to a catalog item."""

    title = models.CharField("Название", max_length=255)
    description = models.TextField("Описание", blank=True, default="")
    image = models.CharField("Изображение", max_length=500)
    product_id = models.CharField("ID товара", max_length=64, null=True, blank=True)
    product_type = models.CharField("Тип товара", max_length=32, choices=EntityType.choices)
    category = models.CharField("Категория", max_length=255, null=True, blank=True)
    is_active = models.BooleanField("Активна", default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "works"
        ordering = ["created_at", "id"]
        verbose_name = "Работа"
        verbose_name_plural = "Наши работы"

    def __str__(self):
        return self.title


class Epitaph(models.Model):
    text = models.TextField("Текст")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "epitaphs"
        ordering = ["id"]
        verbose_name = "Эпитафия"
        verbose_name_plural = "Эпитафии"

    def __str__(self):
        return self.text[:50]
