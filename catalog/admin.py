from django import forms
from django.contrib import admin, messages

from . import bulk_seo, registry
from .exceptions import CatalogError
from .models import (
    Accessory,
    ArtisticMonument,
    CheapMonument,
    ComplexMonument,
    CompositeMonument,
    CrossMonument,
    DoubleMonument,
    Epitaph,
    EuropeMonument,
    Fence,
    HeartMonument,
    LandscapeItem,
    PageDescription,
    PageSEO,
    Product,
    SeoTemplate,
    SingleMonument,
    TreeMonument,
    Work,
)
from .seo_templates import fill_missing_seo, stamp_seo


class HasSeoFilter(admin.SimpleListFilter):
    title = "SEO"
    parameter_name = "has_seo"

    def lookups(self, request, model_admin):
        return (("yes", "Заполнено"), ("no", "Не заполнено"))

    def queryset(self, request, queryset):
        if self.value() == "yes":
            return queryset.with_seo()
        if self.value() == "no":
            return queryset.without_seo()
        return queryset


class CatalogEntityAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "availability", "hit", "popular", "has_seo")
    list_filter = ("category", "availability", "hit", "popular", HasSeoFilter)
    search_fields = ("name", "slug", "description")
    readonly_fields = ("created_at",)
    fieldsets = (
        (None, {"fields": ("name", "slug", "category", "image", "description")}),
        ("Цена", {"fields": (("price", "old_price", "discount"), "text_price", "availability")}),
        ("Характеристики", {"fields": ("height", "specifications", "options", "colors")}),
        ("Метки", {"fields": (("hit", "popular", "is_new"),)}),
        ("SEO", {"fields": ("seo_title", "seo_description", "seo_keywords", "og_image")}),
        (None, {"fields": ("created_at",)}),
    )

    @admin.display(boolean=True, description="SEO")
    def has_seo(self, obj):
        return obj.has_seo_title()

    def formfield_for_dbfield(self, db_field, request, **kwargs):
        if db_field.name == "category":
            entries = registry.categories_for_model(self.model)
            return forms.ChoiceField(
                label=db_field.verbose_name,
                choices=[("", "---------")] + [(entry.label, entry.label) for entry in entries],
                help_text=db_field.help_text,
            )
        return super().formfield_for_dbfield(db_field, request, **kwargs)

    def save_model(self, request, obj, form, change):
        entries = registry.categories_for_model(self.model)
        entity_type = entries[0].entity_type
        category_key = registry.key_for_label(entity_type, obj.category)
        if change:
            super().save_model(request, obj, form, change)
            fill_missing_seo(obj, entity_type, category_key)
        else:
            stamp_seo(obj, entity_type, category_key)
            super().save_model(request, obj, form, change)


for model in (
    Product,
    SingleMonument,
    DoubleMonument,
    CheapMonument,
    CrossMonument,
    HeartMonument,
    CompositeMonument,
    EuropeMonument,
    ArtisticMonument,
    TreeMonument,
    ComplexMonument,
    Fence,
    Accessory,
    LandscapeItem,
):
    admin.site.register(model, CatalogEntityAdmin)


@admin.register(SeoTemplate)
class SeoTemplateAdmin(admin.ModelAdmin):
    list_display = ("category_name", "entity_type", "category_key", "seo_title", "updated_at")
    list_filter = ("entity_type",)
    search_fields = ("category_name", "category_key", "seo_title")
    readonly_fields = ("created_at", "updated_at")
    actions = ("apply_to_rows_without_seo", "apply_to_all_rows")

    def _apply(self, request, queryset, force_update: bool):
        for template in queryset:
            try:
                result = bulk_seo.apply(template.entity_type, template.category_key, force_update)
            except CatalogError as exc:
                self.message_user(request, f"{template}: {exc.message}", messages.ERROR)
                continue
            level = messages.WARNING if result.errors else messages.SUCCESS
            self.message_user(
                request,
                f"{template.category_name}: обновлено {result.updated}, пропущено {result.skipped}, "
                f"ошибок {result.errors}",
                level,
            )

    @admin.action(description="Применить к записям без SEO")
    def apply_to_rows_without_seo(self, request, queryset):
        self._apply(request, queryset, force_update=False)

    @admin.action(description="Применить ко всем записям категории (перезаписать)")
    def apply_to_all_rows(self, request, queryset):
        self._apply(request, queryset, force_update=True)


@admin.register(PageSEO)
class PageSEOAdmin(admin.ModelAdmin):
    list_display = ("page_slug", "page_title", "seo_title", "is_indexed", "updated_at")
    list_filter = ("is_indexed",)
    search_fields = ("page_slug", "page_title", "seo_title")
    readonly_fields = ("created_at", "updated_at")


@admin.register(PageDescription)
class PageDescriptionAdmin(admin.ModelAdmin):
    list_display = ("page_slug", "page_title", "updated_at")
    search_fields = ("page_slug", "page_title")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Work)
class WorkAdmin(admin.ModelAdmin):
    list_display = ("title", "product_type", "category", "is_active", "created_at")
    list_filter = ("product_type", "is_active")
    search_fields = ("title", "description", "category")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Epitaph)
class EpitaphAdmin(admin.ModelAdmin):
    list_display = ("__str__", "created_at")
    search_fields = ("text",)
