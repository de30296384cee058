"""
Bulk propagation of an SEO template onto the rows of one category.

Two steps: ``preview`` is read-only and reports how many rows a run would
touch, ``apply`` performs the run. Preview holds no lock, so rows or the
template may change between the two calls; the counts are then advisory only.

A run handles at most ``settings.BULK_SEO_MAX_ROWS`` rows. Rows without SEO
are selected first so that repeated runs over a large category make progress.
Each row is written in its own savepoint: a failing row is counted, logged and
reported, and the run continues with the next one.
"""
import logging
from dataclasses import dataclass, field

from django.conf import settings
from django.db import transaction
from django.db.models import Case, IntegerField, Q, Value, When

from . import registry
from .exceptions import TemplateNotFound
from .models import SeoTemplate
from .seo_templates import SeoData

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROWS = 1000


def max_rows() -> int:
    return int(getattr(settings, "BULK_SEO_MAX_ROWS", DEFAULT_MAX_ROWS))


@dataclass
class BulkSeoPreview:
    entity_type: str
    category_key: str
    template_name: str
    total_in_category: int
    without_seo: int
    will_be_updated: int
    template: SeoData

    def as_dict(self) -> dict:
        return {
            "templateName": self.template_name,
            "entityType": self.entity_type,
            "categoryKey": self.category_key,
            "totalInCategory": self.total_in_category,
            "withoutSeo": self.without_seo,
            "willBeUpdated": self.will_be_updated,
            "template": self.template.as_camel_dict(),
        }


@dataclass
class BulkSeoResult:
    total: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0
    error_details: list[dict] = field(default_factory=list)

    @property
    def message(self) -> str:
        if not self.total:
            return "Нет записей для обновления"
        return f"Успешно обновлено {self.updated} записей"

    def stats(self) -> dict[str, int]:
        return {
            "total": self.total,
            "updated": self.updated,
            "skipped": self.skipped,
            "errors": self.errors,
        }


def find_template(entity_type, category_key: str) -> SeoTemplate | None:
    entity_type = registry.parse_entity_type(entity_type)
    return SeoTemplate.objects.filter(
        entity_type=entity_type, category_key=category_key
    ).first()


def _load(entity_type, category_key: str) -> tuple[SeoTemplate, registry.Route]:
    template = find_template(entity_type, category_key)
    if template is None:
        raise TemplateNotFound(entity_type=str(entity_type), category_key=category_key)
    return template, registry.resolve(entity_type, category_key)


def preview(entity_type, category_key: str, force_update: bool = False) -> BulkSeoPreview:
    template, route = _load(entity_type, category_key)
    queryset = route.category_rows()
    total = queryset.count()
    without_seo = queryset.without_seo().count()
    affected = total if force_update else without_seo
    return BulkSeoPreview(
        entity_type=route.entity_type,
        category_key=route.key,
        template_name=template.category_name,
        total_in_category=total,
        without_seo=without_seo,
        will_be_updated=min(affected, max_rows()),
        template=SeoData.from_instance(template),
    )


def _candidates(route: registry.Route, force_update: bool, limit: int) -> list:
    queryset = route.category_rows().only("pk", "seo_title")
    if force_update:
        queryset = queryset.order_by("pk")
    else:
        missing_first = Case(
            When(Q(seo_title__isnull=True) | Q(seo_title=""), then=Value(0)),
            default=Value(1),
            output_field=IntegerField(),
        )
        queryset = queryset.annotate(seo_rank=missing_first).order_by("seo_rank", "pk")
    return list(queryset[:limit])


def _stamp_row(model, pk, values: dict) -> int:
    return model._default_manager.filter(pk=pk).update(**values)


def apply(entity_type, category_key: str, force_update: bool = False) -> BulkSeoResult:
    logger.info(
        "Bulk SEO update started for %s/%s (force=%s)", entity_type, category_key, force_update
    )
    template, route = _load(entity_type, category_key)
    values = SeoData.from_instance(template).as_dict()
    rows = _candidates(route, force_update, max_rows())
    logger.info(
        "Bulk SEO update: template %r, %s candidate rows in %s",
        template.category_name,
        len(rows),
        route.model._meta.db_table,
    )

    result = BulkSeoResult(total=len(rows))
    for row in rows:
        if not force_update and row.has_seo_title():
            result.skipped += 1
            continue
        try:
            with transaction.atomic():
                changed = _stamp_row(route.model, row.pk, values)
        except Exception as exc:
            logger.exception("Bulk SEO update failed for %s id=%s", route.model._meta.label, row.pk)
            result.errors += 1
            result.error_details.append({"id": row.pk, "error": str(exc)})
            continue
        if not changed:
            result.errors += 1
            result.error_details.append({"id": row.pk, "error": "Запись не найдена"})
            continue
        result.updated += 1

    logger.info(
        "Bulk SEO update completed for %s/%s: %s updated, %s skipped, %s errors",
        route.entity_type,
        route.key,
        result.updated,
        result.skipped,
        result.errors,
    )
    return result
