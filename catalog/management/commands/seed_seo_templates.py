"""
Create a starter SEO template for every category that has none.

Existing templates are never overwritten.

Usage:
  python manage.py seed_seo_templates --dry-run
  python manage.py seed_seo_templates
"""
from django.core.management.base import BaseCommand

from catalog import registry
from catalog.models import SeoTemplate

SITE_NAME = "Памятники и благоустройство"

UNCATEGORIZED_NAMES = {
    registry.EntityType.BLOGS: "Блог",
    registry.EntityType.CAMPAIGNS: "Акции",
}


def _starter_templates():
    for entity_type in registry.EntityType:
        entries = registry.categories_for(entity_type)
        if entries:
            for entry in entries:
                yield entity_type.value, entry.key, entry.label
        else:
            yield entity_type.value, entity_type.value, UNCATEGORIZED_NAMES[entity_type]


class Command(BaseCommand):
    help = "Seed placeholder SEO templates for categories without one."

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only print what would be created, do not save.",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        if dry_run:
            self.stdout.write("DRY-RUN: no changes will be saved.")

        created = 0
        for entity_type, category_key, name in _starter_templates():
            if SeoTemplate.objects.filter(entity_type=entity_type, category_key=category_key).exists():
                continue
            created += 1
            self.stdout.write("  Create template: %s/%s (%s)" % (entity_type, category_key, name))
            if not dry_run:
                SeoTemplate.objects.create(
                    entity_type=entity_type,
                    category_key=category_key,
                    category_name=name,
                    seo_title=f"{name} | {SITE_NAME}",
                    seo_description=f"{name}: каталог, цены и изготовление на заказ. {SITE_NAME}.",
                )

        self.stdout.write("Done. Created: %s" % created)
