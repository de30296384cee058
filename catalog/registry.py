"""
Category registry: the one place that knows which physical table a catalog
category lives in and which display label its rows carry.

Categorized entity types (monuments, fences, accessories, landscape) address
rows by an English category key ("single", "granite") while the rows
themselves store a Russian label ("Одиночные", "Гранитные ограды") in their
``category`` column. Several keys can share a table (all fence kinds live in
``fences``, the exclusive line lives in ``products`` next to rows of other
lines), and reads of such a table filter by label. A dedicated monument table
is read whole, so rows whose label has drifted stay reachable. The bulk SEO
run always filters by label. Blogs and campaigns have no category dimension.

Models are referenced by app label so this module stays importable from
``models.py``.
"""
from __future__ import annotations

from dataclasses import dataclass

from django.apps import apps
from django.db import models

from .exceptions import CategoryNotFound, UnknownEntityType


class EntityType(models.TextChoices):
    MONUMENTS = "monuments", "Памятники"
    FENCES = "fences", "Ограды"
    ACCESSORIES = "accessories", "Аксессуары"
    LANDSCAPE = "landscape", "Благоустройство"
    CAMPAIGNS = "campaigns", "Акции"
    BLOGS = "blogs", "Блог"


@dataclass(frozen=True)
class CategoryEntry:
    entity_type: str
    key: str
    label: str
    model_label: str

    @property
    def model(self) -> type[models.Model]:
        return apps.get_model(self.model_label)


@dataclass(frozen=True)
class Route:
    """Resolved target of a (entity type, category key) pair."""

    entity_type: str
    key: str
    model_label: str
    label: str | None = None
    shared_table: bool = False

    @property
    def model(self) -> type[models.Model]:
        return apps.get_model(self.model_label)

    @property
    def is_categorized(self) -> bool:
        return self.label is not None

    def queryset(self) -> models.QuerySet:
        """Rows served by this route; only shared tables are narrowed by label."""
        qs = self.model._default_manager.all()
        if self.shared_table:
            qs = qs.filter(category=self.label)
        return qs

    def category_rows(self) -> models.QuerySet:
        """Rows carrying exactly this category's label."""
        qs = self.model._default_manager.all()
        if self.label is not None:
            qs = qs.filter(category=self.label)
        return qs


def _entries(entity_type: str, model_label: str | None, items) -> tuple[CategoryEntry, ...]:
    return tuple(
        CategoryEntry(entity_type, key, label, item_model or model_label)
        for key, label, item_model in items
    )


MONUMENT_CATEGORIES = _entries(
    EntityType.MONUMENTS,
    None,
    (
        ("exclusive", "Эксклюзивные", "catalog.Product"),
        ("single", "Одиночные", "catalog.SingleMonument"),
        ("double", "Двойные", "catalog.DoubleMonument"),
        ("cheap", "Недорогие", "catalog.CheapMonument"),
        ("cross", "В виде креста", "catalog.CrossMonument"),
        ("heart", "В виде сердца", "catalog.HeartMonument"),
        ("composite", "Составные", "catalog.CompositeMonument"),
        ("europe", "Европейские", "catalog.EuropeMonument"),
        ("artistic", "Художественная резка", "catalog.ArtisticMonument"),
        ("tree", "В виде дерева", "catalog.TreeMonument"),
        ("complex", "Мемориальные комплексы", "catalog.ComplexMonument"),
    ),
)

FENCE_CATEGORIES = _entries(
    EntityType.FENCES,
    "catalog.Fence",
    (
        ("granite", "Гранитные ограды", None),
        ("metal", "Металлические ограды", None),
        ("polymer", "С полимерным покрытием", None),
    ),
)

ACCESSORY_CATEGORIES = _entries(
    EntityType.ACCESSORIES,
    "catalog.Accessory",
    (
        ("vases", "Вазы", None),
        ("lamps", "Лампады", None),
        ("tables", "Столы", None),
        ("benches", "Скамейки", None),
        ("urns", "Урны", None),
        ("portrait", "Портреты", None),
        ("sculptures", "Скульптуры", None),
    ),
)

LANDSCAPE_CATEGORIES = _entries(
    EntityType.LANDSCAPE,
    "catalog.LandscapeItem",
    (
        ("tiles", "Плитка", None),
        ("borders", "Бордюры", None),
        ("coverage", "Покрытие", None),
        ("foundation", "Фундамент", None),
        ("installation", "Монтаж", None),
        ("gravel", "Щебень", None),
        ("tables-benches", "Столы и скамейки", None),
    ),
)

UNCATEGORIZED_MODELS: dict[str, str] = {
    EntityType.CAMPAIGNS: "blog.Campaign",
    EntityType.BLOGS: "blog.BlogPost",
}

_CATEGORIES: dict[str, dict[str, CategoryEntry]] = {
    entity_type: {entry.key: entry for entry in entries}
    for entity_type, entries in (
        (EntityType.MONUMENTS, MONUMENT_CATEGORIES),
        (EntityType.FENCES, FENCE_CATEGORIES),
        (EntityType.ACCESSORIES, ACCESSORY_CATEGORIES),
        (EntityType.LANDSCAPE, LANDSCAPE_CATEGORIES),
    )
}


def _shared_tables() -> frozenset[str]:
    counts: dict[str, int] = {}
    for entries in _CATEGORIES.values():
        for entry in entries.values():
            counts[entry.model_label] = counts.get(entry.model_label, 0) + 1
    # products also stores rows of lines that have no route of their own.
    return frozenset(label for label, count in counts.items() if count > 1) | {"catalog.Product"}


SHARED_TABLES = _shared_tables()


def parse_entity_type(value) -> EntityType:
    try:
        return EntityType(value)
    except ValueError:
        raise UnknownEntityType(f"Неверный тип сущности: {value}") from None


def is_categorized(entity_type) -> bool:
    return parse_entity_type(entity_type) in _CATEGORIES


def categories_for(entity_type) -> tuple[CategoryEntry, ...]:
    entity_type = parse_entity_type(entity_type)
    return tuple(_CATEGORIES.get(entity_type, {}).values())


def get_category(entity_type, category_key: str) -> CategoryEntry:
    entity_type = parse_entity_type(entity_type)
    try:
        return _CATEGORIES[entity_type][category_key]
    except KeyError:
        raise CategoryNotFound(
            f"Неверная категория «{category_key}» для типа {entity_type.value}",
            available=[entry.key for entry in categories_for(entity_type)],
        ) from None


def resolve(entity_type, category_key: str) -> Route:
    """
    Map a category key of an entity type to its table and display label.

    Blogs and campaigns accept any key and resolve to their whole table.
    """
    entity_type = parse_entity_type(entity_type)
    if entity_type in UNCATEGORIZED_MODELS:
        return Route(entity_type.value, category_key, UNCATEGORIZED_MODELS[entity_type])
    entry = get_category(entity_type, category_key)
    return Route(
        entity_type.value,
        entry.key,
        entry.model_label,
        entry.label,
        shared_table=entry.model_label in SHARED_TABLES,
    )


def resolve_key_or_label(entity_type, value: str) -> Route:
    """Like :func:`resolve` but also accepts the display label of a category."""
    key = key_for_label(entity_type, value) or value
    return resolve(entity_type, key)


def key_for_label(entity_type, label: str | None) -> str | None:
    normalized = (label or "").strip().lower()
    for entry in categories_for(entity_type):
        if entry.label.lower() == normalized:
            return entry.key
    return None


def categories_for_model(model) -> tuple[CategoryEntry, ...]:
    """Categories whose rows live in ``model``'s table."""
    model_label = model._meta.label
    return tuple(
        entry
        for entries in _CATEGORIES.values()
        for entry in entries.values()
        if entry.model_label == model_label
    )


def model_for(entity_type) -> type[models.Model]:
    """Table of an entity type whose categories all share one table."""
    entity_type = parse_entity_type(entity_type)
    if entity_type in UNCATEGORIZED_MODELS:
        return apps.get_model(UNCATEGORIZED_MODELS[entity_type])
    model_labels = {entry.model_label for entry in categories_for(entity_type)}
    if len(model_labels) != 1:
        raise UnknownEntityType(f"Тип {entity_type.value} хранится в нескольких таблицах")
    return apps.get_model(model_labels.pop())


def monument_models() -> list[type[models.Model]]:
    """Unique physical monument tables in registry order."""
    seen: dict[str, None] = {}
    for entry in MONUMENT_CATEGORIES:
        seen.setdefault(entry.model_label, None)
    return [apps.get_model(label) for label in seen]


def entity_kinds() -> dict[str, str]:
    """
    Slugs addressing one physical table each, as used by the per-row SEO
    endpoint: ``<key>-monuments`` for monuments, the entity type otherwise.
    """
    kinds = {f"{entry.key}-monuments": entry.model_label for entry in MONUMENT_CATEGORIES}
    for entity_type in (EntityType.FENCES, EntityType.ACCESSORIES, EntityType.LANDSCAPE):
        kinds[entity_type.value] = model_for(entity_type)._meta.label
    kinds.update({entity_type.value: label for entity_type, label in UNCATEGORIZED_MODELS.items()})
    return kinds


def model_for_kind(kind: str) -> type[models.Model]:
    try:
        return apps.get_model(entity_kinds()[kind])
    except KeyError:
        raise UnknownEntityType(f"Неверный тип сущности: {kind}") from None
