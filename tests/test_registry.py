import pytest
from django.apps import apps

from blog.models import BlogPost, Campaign
from catalog import registry
from catalog.exceptions import CategoryNotFound, UnknownEntityType
from catalog.models import CatalogEntity, Fence, Product, SingleMonument


def test_resolve_monument_category_to_own_table():
    route = registry.resolve("monuments", "single")

    assert route.model is SingleMonument
    assert route.label == "Одиночные"
    assert route.is_categorized


def test_resolve_fence_categories_share_one_table():
    granite = registry.resolve("fences", "granite")
    metal = registry.resolve("fences", "metal")

    assert granite.model is metal.model is Fence
    assert granite.label == "Гранитные ограды"
    assert metal.label == "Металлические ограды"


def test_exclusive_monuments_live_in_products_table():
    route = registry.resolve("monuments", "exclusive")

    assert route.model is Product
    assert route.label == "Эксклюзивные"


def test_unknown_category_lists_available_keys():
    with pytest.raises(CategoryNotFound) as excinfo:
        registry.resolve("fences", "wooden")

    assert excinfo.value.status_code == 400
    assert excinfo.value.details["available"] == ["granite", "metal", "polymer"]


def test_unknown_entity_type():
    with pytest.raises(UnknownEntityType):
        registry.resolve("cars", "granite")


@pytest.mark.parametrize(
    ("entity_type", "model"),
    [("blogs", BlogPost), ("campaigns", Campaign)],
)
def test_uncategorized_types_accept_any_key(entity_type, model):
    route = registry.resolve(entity_type, "anything")

    assert route.model is model
    assert route.label is None
    assert not route.is_categorized
    assert route.key == "anything"


def test_key_for_label_is_case_insensitive():
    assert registry.key_for_label("accessories", "вазы") == "vases"
    assert registry.key_for_label("landscape", " Столы и скамейки ") == "tables-benches"
    assert registry.key_for_label("fences", "Деревянные") is None


def test_resolve_key_or_label_accepts_display_label():
    route = registry.resolve_key_or_label("fences", "С полимерным покрытием")

    assert route.key == "polymer"


def test_monument_models_are_unique_and_ordered():
    models = registry.monument_models()

    assert models[0] is Product
    assert models[1] is SingleMonument
    assert len(models) == len(set(models)) == 11


def test_model_for_rejects_multi_table_type():
    with pytest.raises(UnknownEntityType):
        registry.model_for("monuments")
    assert registry.model_for("fences") is Fence


def test_entity_kinds_address_one_table_each():
    kinds = registry.entity_kinds()

    assert registry.model_for_kind("single-monuments") is SingleMonument
    assert registry.model_for_kind("exclusive-monuments") is Product
    assert registry.model_for_kind("blogs") is BlogPost
    assert kinds["fences"] == "catalog.Fence"
    with pytest.raises(UnknownEntityType):
        registry.model_for_kind("granite")


def test_every_catalog_table_is_reachable_from_the_registry():
    concrete = {
        model
        for model in apps.get_app_config("catalog").get_models()
        if issubclass(model, CatalogEntity)
    }
    routed = {
        entry.model
        for entity_type in ("monuments", "fences", "accessories", "landscape")
        for entry in registry.categories_for(entity_type)
    }

    assert routed == concrete


def test_only_shared_tables_are_narrowed_by_label():
    assert not registry.resolve("monuments", "single").shared_table
    assert registry.resolve("monuments", "exclusive").shared_table
    assert registry.resolve("fences", "metal").shared_table
    assert not registry.resolve("blogs", "blogs").shared_table


@pytest.mark.django_db
def test_dedicated_table_route_serves_rows_with_other_labels(single_monument_factory):
    drifted = single_monument_factory(category="Одиночный")
    route = registry.resolve("monuments", "single")

    assert list(route.queryset()) == [drifted]
    assert not route.category_rows().exists()


def test_categories_for_model():
    assert [entry.key for entry in registry.categories_for_model(Fence)] == ["granite", "metal", "polymer"]
    assert [entry.key for entry in registry.categories_for_model(SingleMonument)] == ["single"]
    assert registry.categories_for_model(BlogPost) == ()
