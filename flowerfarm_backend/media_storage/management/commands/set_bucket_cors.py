"""
PATH: media_storage/management/commands/set_bucket_cors.py

Replace the storage bucket's CORS policy with the one built from settings.

Usage:
    python manage.py set_bucket_cors
    python manage.py set_bucket_cors --bucket my-bucket.appspot.com
    python manage.py set_bucket_cors --dry-run
"""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from media_storage.services.cors_policy import apply_cors_policy, build_cors_policy, policy_json
from media_storage.services.exceptions import CorsConfigurationError


class Command(BaseCommand):
    help = "Apply STORAGE_CORS_* settings to the storage bucket."

    def add_arguments(self, parser):
        parser.add_argument("--bucket", help="Bucket name (defaults to GCS_BUCKET_NAME).")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the policy without touching the bucket.",
        )

    def handle(self, *args, **options):
        try:
            policy = build_cors_policy()
            if options["dry_run"]:
                self.stdout.write(policy_json(policy))
                self.stdout.write(self.style.WARNING("Dry run: bucket not changed."))
                return

            apply_cors_policy(options.get("bucket"), policy)
        except CorsConfigurationError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(self.style.SUCCESS("CORS settings updated."))
