import factory

from blog.models import BlogPost, Campaign
from catalog.models import (
    Accessory,
    DoubleMonument,
    Epitaph,
    Fence,
    Product,
    SeoTemplate,
    SingleMonument,
    Work,
)


class CatalogEntityFactory(factory.django.DjangoModelFactory):
    name = factory.Sequence(lambda n: f"Изделие {n}")
    slug = factory.Sequence(lambda n: f"item-{n}")
    price = factory.Sequence(lambda n: 1000 + n)
    description = ""


class ProductFactory(CatalogEntityFactory):
    class Meta:
        model = Product

    category = "Эксклюзивные"


class SingleMonumentFactory(CatalogEntityFactory):
    class Meta:
        model = SingleMonument

    category = "Одиночные"


class DoubleMonumentFactory(CatalogEntityFactory):
    class Meta:
        model = DoubleMonument

    category = "Двойные"


class FenceFactory(CatalogEntityFactory):
    class Meta:
        model = Fence

    category = "Гранитные ограды"


class AccessoryFactory(CatalogEntityFactory):
    class Meta:
        model = Accessory

    category = "Вазы"


class SeoTemplateFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SeoTemplate

    entity_type = "fences"
    category_key = "granite"
    category_name = "Гранитные ограды"
    seo_title = factory.Sequence(lambda n: f"SEO title {n}")
    seo_description = factory.Sequence(lambda n: f"SEO description {n}")
    seo_keywords = None
    og_image = None


class PublicationFactory(factory.django.DjangoModelFactory):
    title = factory.Sequence(lambda n: f"Публикация {n}")
    slug = factory.Sequence(lambda n: f"post-{n}")
    description = ""
    content = factory.Faker("paragraph")


class BlogPostFactory(PublicationFactory):
    class Meta:
        model = BlogPost


class CampaignFactory(PublicationFactory):
    class Meta:
        model = Campaign


class WorkFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Work

    title = factory.Sequence(lambda n: f"Работа {n}")
    image = factory.Sequence(lambda n: f"/works/{n}.webp")
    product_type = "monuments"
    category = "Одиночные"


class EpitaphFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Epitaph

    text = factory.Faker("sentence")
