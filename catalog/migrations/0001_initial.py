from django.db import migrations, models

ENTITY_TYPE_CHOICES = [
    ("monuments", "Памятники"),
    ("fences", "Ограды"),
    ("accessories", "Аксессуары"),
    ("landscape", "Благоустройство"),
    ("campaigns", "Акции"),
    ("blogs", "Блог"),
]

CATALOG_TABLES = [
    ("Product", "products", "Эксклюзивный памятник", "Эксклюзивные памятники"),
    ("SingleMonument", "single_monuments", "Одиночный памятник", "Одиночные памятники"),
    ("DoubleMonument", "double_monuments", "Двойной памятник", "Двойные памятники"),
    ("CheapMonument", "cheap_monuments", "Недорогой памятник", "Недорогие памятники"),
    ("CrossMonument", "cross_monuments", "Памятник в виде креста", "Памятники в виде креста"),
    ("HeartMonument", "heart_monuments", "Памятник в виде сердца", "Памятники в виде сердца"),
    ("CompositeMonument", "composite_monuments", "Составной памятник", "Составные памятники"),
    ("EuropeMonument", "europe_monuments", "Европейский памятник", "Европейские памятники"),
    ("ArtisticMonument", "artistic_monuments", "Памятник с художественной резкой", "Памятники с художественной резкой"),
    ("TreeMonument", "tree_monuments", "Памятник в виде дерева", "Памятники в виде дерева"),
    ("ComplexMonument", "complex_monuments", "Мемориальный комплекс", "Мемориальные комплексы"),
    ("Fence", "fences", "Ограда", "Ограды"),
    ("Accessory", "accessories", "Аксессуар", "Аксессуары"),
    ("LandscapeItem", "landscape", "Благоустройство", "Благоустройство"),
]


def seo_fields():
    return [
        ("seo_title", models.CharField(blank=True, max_length=255, null=True, verbose_name="SEO title")),
        ("seo_description", models.CharField(blank=True, max_length=500, null=True, verbose_name="SEO description")),
        ("seo_keywords", models.CharField(blank=True, max_length=500, null=True, verbose_name="SEO keywords")),
        ("og_image", models.CharField(blank=True, max_length=500, null=True, verbose_name="OG image")),
    ]


def catalog_entity_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        *seo_fields(),
        ("slug", models.SlugField(allow_unicode=True, blank=True, max_length=255, unique=True, verbose_name="URL")),
        ("name", models.CharField(max_length=255, verbose_name="Название")),
        ("price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name="Цена")),
        (
            "old_price",
            models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name="Старая цена"),
        ),
        ("discount", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name="Скидка")),
        ("text_price", models.CharField(blank=True, default="", max_length=255, verbose_name="Цена (текстом)")),
        (
            "category",
            models.CharField(
                db_index=True,
                help_text="Отображаемое название категории, например «Гранитные ограды».",
                max_length=255,
                verbose_name="Категория",
            ),
        ),
        ("image", models.CharField(blank=True, default="", max_length=500, verbose_name="Изображение")),
        ("height", models.CharField(blank=True, default="", max_length=100, verbose_name="Высота")),
        ("specifications", models.JSONField(blank=True, default=dict, verbose_name="Характеристики")),
        ("options", models.JSONField(blank=True, default=dict, verbose_name="Опции")),
        ("colors", models.JSONField(blank=True, default=list, verbose_name="Цвета")),
        ("description", models.TextField(blank=True, default="", verbose_name="Описание")),
        (
            "availability",
            models.CharField(
                choices=[("в наличии", "В наличии"), ("под заказ", "Под заказ")],
                default="под заказ",
                max_length=50,
                verbose_name="Наличие",
            ),
        ),
        ("hit", models.BooleanField(default=False, verbose_name="Хит")),
        ("popular", models.BooleanField(default=False, verbose_name="Популярное")),
        ("is_new", models.BooleanField(db_column="new", default=False, verbose_name="Новинка")),
        ("created_at", models.DateTimeField(auto_now_add=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        *(
            migrations.CreateModel(
                name=name,
                fields=catalog_entity_fields(),
                options={
                    "verbose_name": verbose_name,
                    "verbose_name_plural": verbose_name_plural,
                    "db_table": db_table,
                    "ordering": ["id"],
                    "abstract": False,
                },
            )
            for name, db_table, verbose_name, verbose_name_plural in CATALOG_TABLES
        ),
        migrations.CreateModel(
            name="SeoTemplate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "entity_type",
                    models.CharField(choices=ENTITY_TYPE_CHOICES, max_length=32, verbose_name="Тип сущности"),
                ),
                ("category_key", models.CharField(max_length=64, verbose_name="Ключ категории")),
                ("category_name", models.CharField(max_length=255, verbose_name="Название категории")),
                ("seo_title", models.CharField(max_length=255, verbose_name="SEO title")),
                ("seo_description", models.CharField(max_length=500, verbose_name="SEO description")),
                ("seo_keywords", models.CharField(blank=True, max_length=500, null=True, verbose_name="SEO keywords")),
                ("og_image", models.CharField(blank=True, max_length=500, null=True, verbose_name="OG image")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "SEO шаблон",
                "verbose_name_plural": "SEO шаблоны",
                "db_table": "seo_templates",
                "ordering": ["entity_type", "category_name"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("entity_type", "category_key"), name="seo_template_type_key_unique"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="PageSEO",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("page_slug", models.CharField(max_length=255, unique=True, verbose_name="Страница")),
                ("page_title", models.CharField(max_length=255, verbose_name="Название страницы")),
                ("seo_title", models.CharField(max_length=255, verbose_name="SEO title")),
                ("seo_description", models.CharField(max_length=500, verbose_name="SEO description")),
                ("seo_keywords", models.CharField(blank=True, max_length=500, null=True, verbose_name="SEO keywords")),
                ("og_title", models.CharField(blank=True, max_length=255, null=True, verbose_name="OG title")),
                ("og_description", models.CharField(blank=True, max_length=500, null=True, verbose_name="OG description")),
                ("og_image", models.CharField(blank=True, max_length=500, null=True, verbose_name="OG image")),
                ("og_image_width", models.PositiveIntegerField(default=1200)),
                ("og_image_height", models.PositiveIntegerField(default=630)),
                ("twitter_title", models.CharField(blank=True, max_length=255, null=True)),
                ("twitter_description", models.CharField(blank=True, max_length=500, null=True)),
                ("twitter_image", models.CharField(blank=True, max_length=500, null=True)),
                ("canonical_url", models.CharField(blank=True, max_length=500, null=True)),
                ("robots_meta", models.CharField(blank=True, max_length=100, null=True)),
                ("author", models.CharField(blank=True, max_length=255, null=True)),
                ("schema_markup", models.JSONField(blank=True, null=True, verbose_name="Schema.org JSON-LD")),
                ("is_indexed", models.BooleanField(default=True, verbose_name="Индексировать")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "SEO страницы",
                "verbose_name_plural": "SEO страниц",
                "db_table": "page_seo",
                "ordering": ["page_slug"],
            },
        ),
        migrations.CreateModel(
            name="PageDescription",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("page_slug", models.CharField(max_length=255, unique=True, verbose_name="Страница")),
                ("page_title", models.CharField(max_length=255, verbose_name="Название страницы")),
                ("blocks", models.JSONField(blank=True, default=list, verbose_name="Блоки")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Описание страницы",
                "verbose_name_plural": "Описания страниц",
                "db_table": "page_descriptions",
                "ordering": ["page_slug"],
            },
        ),
        migrations.CreateModel(
            name="Work",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255, verbose_name="Название")),
                ("description", models.TextField(blank=True, default="", verbose_name="Описание")),
                ("image", models.CharField(max_length=500, verbose_name="Изображение")),
                ("product_id", models.CharField(blank=True, max_length=64, null=True, verbose_name="ID товара")),
                (
                    "product_type",
                    models.CharField(choices=ENTITY_TYPE_CHOICES, max_length=32, verbose_name="Тип товара"),
                ),
                ("category", models.CharField(blank=True, max_length=255, null=True, verbose_name="Категория")),
                ("is_active", models.BooleanField(default=True, verbose_name="Активна")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Работа",
                "verbose_name_plural": "Наши работы",
                "db_table": "works",
                "ordering": ["created_at", "id"],
            },
        ),
        migrations.CreateModel(
            name="Epitaph",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("text", models.TextField(verbose_name="Текст")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Эпитафия",
                "verbose_name_plural": "Эпитафии",
                "db_table": "epitaphs",
                "ordering": ["id"],
            },
        ),
    ]
