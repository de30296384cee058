from django.contrib import admin

from catalog.admin import HasSeoFilter

from .models import BlogPost, Campaign


class PublicationAdmin(admin.ModelAdmin):
    prepopulated_fields = {"slug": ("title",)}
    list_display = ("title", "slug", "created_at", "updated_at")
    list_filter = (HasSeoFilter,)
    search_fields = ("title", "slug")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at")
    fieldsets = (
        (None, {"fields": ("title", "slug", "description", "content", "featured_image")}),
        ("Контент", {"fields": ("images", "blocks", "tags")}),
        ("SEO", {"fields": ("meta_title", "meta_description", "seo_title", "seo_description", "seo_keywords", "og_image")}),
        (None, {"fields": ("created_at", "updated_at")}),
    )


@admin.register(BlogPost)
class BlogPostAdmin(PublicationAdmin):
    pass


@admin.register(Campaign)
class CampaignAdmin(PublicationAdmin):
    fieldsets = PublicationAdmin.fieldsets[:2] + (("Товары", {"fields": ("products",)}),) + PublicationAdmin.fieldsets[2:]
