"""
PATH: users/management/commands/ensure_superuser.py

Shop admin bootstrap.

- Reads AUTO_ADMIN_USERNAME + AUTO_ADMIN_PASSWORD (+ optional AUTO_ADMIN_EMAIL) from env.
- Idempotent: creates the admin if missing; resets the password if it exists.
- Does NOT print the password.
"""

from __future__ import annotations

import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction


class Command(BaseCommand):
    help = "Create/update the shop admin account from env vars (idempotent)."

    def handle(self, *args, **options):
        username = (os.environ.get("AUTO_ADMIN_USERNAME") or "").strip()
        password = (os.environ.get("AUTO_ADMIN_PASSWORD") or "").strip()
        email = (os.environ.get("AUTO_ADMIN_EMAIL") or "").strip()

        if not username or not password:
            self.stdout.write(self.style.WARNING("AUTO_ADMIN_* env vars not set. Skipping."))
            return

        User = get_user_model()

        with transaction.atomic():
            user, created = User.objects.get_or_create(username=username)
            user.is_active = True
            user.is_staff = True
            user.is_superuser = True
            if email:
                user.email = email
            user.set_password(password)
            user.save()

        state = "created" if created else "updated"
        self.stdout.write(self.style.SUCCESS(f"Admin ensured: {username} ({state})"))
