import json

from django.core.management.base import BaseCommand, CommandError

from memorial_site.health import run_health_checks


class Command(BaseCommand):
    help = "Run application health checks."

    def add_arguments(self, parser):
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the report as JSON.",
        )

    def handle(self, *args, **options):
        report = run_health_checks()

        if options["json"]:
            self.stdout.write(json.dumps(report, ensure_ascii=False, indent=2))
        else:
            for name, check in report["checks"].items():
                line = f"{name}: {check['status']}"
                if check.get("detail"):
                    line = f"{line} - {check['detail']}"
                if check["status"] == "error":
                    self.stderr.write(self.style.ERROR(line))
                elif check["status"] == "warning":
                    self.stdout.write(self.style.WARNING(line))
                else:
                    self.stdout.write(line)

        if report["status"] == "error":
            raise CommandError("Health checks failed: " + "; ".join(report["errors"]))
        if not options["json"]:
            self.stdout.write(self.style.SUCCESS(f"Health status: {report['status']}"))
