"""
PATH: media_storage/management/commands/write_cors_config.py

Write the CORS policy built from settings to a JSON file, for applying by
hand with `gsutil cors set cors.json gs://<bucket>`.
"""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from media_storage.services.cors_policy import write_cors_config
from media_storage.services.exceptions import CorsConfigurationError


class Command(BaseCommand):
    help = "Write the STORAGE_CORS_* policy to a cors.json file."

    def add_arguments(self, parser):
        parser.add_argument("--output", default="cors.json", help="Target file (default: cors.json).")

    def handle(self, *args, **options):
        try:
            path = write_cors_config(options["output"])
        except CorsConfigurationError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(self.style.SUCCESS(f"CORS configuration saved to {path}"))
        self.stdout.write(f"Apply with: gsutil cors set {path} gs://<bucket>")
