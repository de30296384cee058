from django.db import migrations, models


def publication_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("seo_title", models.CharField(blank=True, max_length=255, null=True, verbose_name="SEO title")),
        ("seo_description", models.CharField(blank=True, max_length=500, null=True, verbose_name="SEO description")),
        ("seo_keywords", models.CharField(blank=True, max_length=500, null=True, verbose_name="SEO keywords")),
        ("og_image", models.CharField(blank=True, max_length=500, null=True, verbose_name="OG image")),
        ("slug", models.SlugField(allow_unicode=True, blank=True, max_length=255, unique=True, verbose_name="URL")),
        ("title", models.CharField(max_length=255, verbose_name="Заголовок")),
        ("description", models.TextField(blank=True, default="", verbose_name="Краткое описание")),
        ("content", models.TextField(verbose_name="Текст")),
        ("meta_title", models.CharField(blank=True, max_length=255, null=True, verbose_name="Meta title")),
        ("meta_description", models.TextField(blank=True, null=True, verbose_name="Meta description")),
        ("featured_image", models.CharField(blank=True, max_length=500, null=True, verbose_name="Обложка")),
        ("images", models.JSONField(blank=True, default=list, verbose_name="Изображения")),
        ("blocks", models.JSONField(blank=True, default=list, verbose_name="Блоки контента")),
        ("tags", models.JSONField(blank=True, default=list, verbose_name="Теги")),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="BlogPost",
            fields=publication_fields(),
            options={
                "verbose_name": "Статья",
                "verbose_name_plural": "Статьи",
                "db_table": "blogs",
                "ordering": ["id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Campaign",
            fields=[
                *publication_fields(),
                (
                    "products",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text='Список ссылок на товары разных категорий, например {"type": "fences", "id": 3}.',
                        verbose_name="Товары акции",
                    ),
                ),
            ],
            options={
                "verbose_name": "Акция",
                "verbose_name_plural": "Акции",
                "db_table": "campaigns",
                "ordering": ["id"],
                "abstract": False,
            },
        ),
    ]
