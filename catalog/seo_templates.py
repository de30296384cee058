"""
SEO resolution for rows being written.

Precedence is all-or-nothing: when any of the four SEO fields is submitted for
the row itself, exactly those four values are stored (no merge with the
template). Otherwise the template of the row's (entity type, category key) is
copied in, and without a template the fields stay empty. The copy happens at
write time, so later template edits reach existing rows only through the bulk
SEO run.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Any, Mapping

from django.db import DatabaseError

from .models import SeoTemplate

logger = logging.getLogger(__name__)

SEO_FIELDS = ("seo_title", "seo_description", "seo_keywords", "og_image")


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


@dataclass(frozen=True)
class SeoData:
    seo_title: str | None = None
    seo_description: str | None = None
    seo_keywords: str | None = None
    og_image: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SeoData":
        return cls(**{field: _clean(data.get(field)) for field in SEO_FIELDS})

    @classmethod
    def from_instance(cls, obj) -> "SeoData":
        return cls(**{field: _clean(getattr(obj, field, None)) for field in SEO_FIELDS})

    def is_empty(self) -> bool:
        return not any(getattr(self, field) for field in SEO_FIELDS)

    def as_dict(self) -> dict[str, str | None]:
        return asdict(self)

    def as_camel_dict(self) -> dict[str, str | None]:
        return {
            "seoTitle": self.seo_title,
            "seoDescription": self.seo_description,
            "seoKeywords": self.seo_keywords,
            "ogImage": self.og_image,
        }


def get_template(entity_type: str, category_key: str | None) -> SeoTemplate | None:
    """Template for the pair, or ``None``; lookup failures count as no template."""
    if not category_key:
        return None
    try:
        return SeoTemplate.objects.filter(
            entity_type=entity_type, category_key=category_key
        ).first()
    except DatabaseError:
        logger.exception(
            "SEO template lookup failed for %s/%s", entity_type, category_key
        )
        return None


def resolve_seo(submitted: Mapping[str, Any], entity_type: str, category_key: str | None) -> SeoData:
    own = SeoData.from_mapping(submitted)
    if not own.is_empty():
        return own

    template = get_template(entity_type, category_key)
    if template is None:
        return SeoData()
    return SeoData.from_instance(template)


def apply_seo(obj, seo: SeoData) -> None:
    for field, value in seo.as_dict().items():
        setattr(obj, field, value)


def stamp_seo(obj, entity_type: str, category_key: str | None, submitted: Mapping[str, Any] | None = None) -> SeoData:
    """Resolve SEO for ``obj`` and set the four fields on it (not saved)."""
    if submitted is None:
        submitted = {field: getattr(obj, field, None) for field in SEO_FIELDS}
    seo = resolve_seo(submitted, entity_type, category_key)
    apply_seo(obj, seo)
    if not seo.is_empty() and SeoData.from_mapping(submitted).is_empty():
        logger.info(
            "Applied SEO template %s/%s to %s",
            entity_type,
            category_key,
            obj._meta.label,
        )
    return seo


def fill_missing_seo(obj, entity_type: str, category_key: str | None) -> bool:
    """
    After an update that left ``obj`` without any SEO, stamp the template in
    and save the four fields. Rows that still carry SEO are left alone.
    """
    if not SeoData.from_instance(obj).is_empty():
        return False
    seo = stamp_seo(obj, entity_type, category_key)
    if seo.is_empty():
        return False
    obj.save(update_fields=list(SEO_FIELDS))
    return True
