"""
PATH: media_storage/management/commands/get_bucket_cors.py

Print the bucket's current CORS policy as JSON.
"""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from media_storage.services.cors_policy import get_cors_policy, policy_json
from media_storage.services.exceptions import CorsConfigurationError


class Command(BaseCommand):
    help = "Show the storage bucket's CORS policy."

    def add_arguments(self, parser):
        parser.add_argument("--bucket", help="Bucket name (defaults to GCS_BUCKET_NAME).")

    def handle(self, *args, **options):
        try:
            policy = get_cors_policy(options.get("bucket"))
        except CorsConfigurationError as exc:
            raise CommandError(str(exc)) from exc

        if not policy:
            self.stdout.write(self.style.WARNING("Bucket has no CORS policy."))
            return
        self.stdout.write(policy_json(policy))
