from django.db import models

from catalog.models import SeoFields, SeoQuerySet, build_unique_slug


class PublicationQuerySet(SeoQuerySet):
    def search(self, term: str):
        term = (term or "").strip()
        if not term:
            return self
        return self.filter(models.Q(title__icontains=term) | models.Q(description__icontains=term))


class Publication(SeoFields):
    objects = PublicationQuerySet.as_manager()

    slug = models.SlugField("URL", max_length=255, unique=True, allow_unicode=True, blank=True)
    title = models.CharField("Заголовок", max_length=255)
    description = models.TextField("Краткое описание", blank=True, default="")
    content = models.TextField("Текст")
    meta_title = models.CharField("Meta title", max_length=255, null=True, blank=True)
    meta_description = models.TextField("Meta description", null=True, blank=True)
    featured_image = models.CharField("Обложка", max_length=500, null=True, blank=True)
    images = models.JSONField("Изображения", blank=True, default=list)
    blocks = models.JSONField("Блоки контента", blank=True, default=list)
    tags = models.JSONField("Теги", blank=True, default=list)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["id"]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        self.slug = (self.slug or "").strip()
        if not self.slug:
            self.slug = build_unique_slug(type(self), self.title, exclude_pk=self.pk)
        super().save(*args, **kwargs)


class BlogPost(Publication):
    class Meta(Publication.Meta):
        db_table = "blogs"
        verbose_name = "Статья"
        verbose_name_plural = "Статьи"


class Campaign(Publication):
    products = models.JSONField(
        "Товары акции",
        blank=True,
        default=list,
        help_text="Список ссылок на товары разных категорий, например {\"type\": \"fences\", \"id\": 3}.",
    )

    class Meta(Publication.Meta):
        db_table = "campaigns"
        verbose_name = "Акция"
        verbose_name_plural = "Акции"
