"""
Apply the SEO template of one category to its rows.

Usage:
  python manage.py bulk_seo fences granite --dry-run   # preview counts only
  python manage.py bulk_seo fences granite             # fill rows without SEO
  python manage.py bulk_seo fences granite --force     # overwrite every row
"""
from django.core.management.base import BaseCommand, CommandError

from catalog import bulk_seo
from catalog.exceptions import CatalogError


class Command(BaseCommand):
    help = "Apply an SEO template to the rows of one (entity type, category key)."

    def add_arguments(self, parser):
        parser.add_argument("entity_type")
        parser.add_argument("category_key")
        parser.add_argument(
            "--force",
            action="store_true",
            help="Overwrite rows that already have SEO.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only print how many rows would be updated, do not save.",
        )

    def handle(self, *args, **options):
        entity_type = options["entity_type"]
        category_key = options["category_key"]
        force = options["force"]

        try:
            if options["dry_run"]:
                preview = bulk_seo.preview(entity_type, category_key, force_update=force)
            else:
                result = bulk_seo.apply(entity_type, category_key, force_update=force)
        except CatalogError as exc:
            raise CommandError(exc.message) from exc

        if options["dry_run"]:
            self.stdout.write("DRY-RUN: no changes will be saved.")
            self.stdout.write(
                "Template: %s. Rows: %s, without SEO: %s, will be updated: %s"
                % (
                    preview.template_name,
                    preview.total_in_category,
                    preview.without_seo,
                    preview.will_be_updated,
                )
            )
            return

        for detail in result.error_details:
            self.stderr.write(self.style.ERROR("  id=%s: %s" % (detail["id"], detail["error"])))
        summary = "Done. Total: %s, updated: %s, skipped: %s, errors: %s" % (
            result.total,
            result.updated,
            result.skipped,
            result.errors,
        )
        if result.errors:
            self.stdout.write(self.style.WARNING(summary))
        else:
            self.stdout.write(self.style.SUCCESS(summary))
