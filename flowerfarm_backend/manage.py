"""
PATH: manage.py

Django management entrypoint.

Key safeguard:
- If DJANGO_SETTINGS_MODULE is unset OR incorrectly set to the settings *package*
  ("backend.settings"), we force it to a concrete module ("backend.settings.dev").

Production:
- Production must set DJANGO_SETTINGS_MODULE=backend.settings.prod explicitly.
  We respect that.

Admin bootstrap hook:
- If RUN_CREATE_SUPERUSER=True is set, `ensure_superuser` runs before the
  requested command (reads AUTO_ADMIN_* env vars, idempotent).
"""

from __future__ import annotations

import os
import sys


def _ensure_settings_module() -> None:
    current = (os.environ.get("DJANGO_SETTINGS_MODULE") or "").strip()

    # The settings package itself loads nothing.
    if not current or current == "backend.settings":
        os.environ["DJANGO_SETTINGS_MODULE"] = "backend.settings.dev"


def _ensure_superuser_if_requested() -> None:
    if os.environ.get("RUN_CREATE_SUPERUSER") != "True":
        return

    import django
    from django.core.management import call_command

    django.setup()
    call_command("ensure_superuser")


def main() -> None:
    _ensure_settings_module()

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    _ensure_superuser_if_requested()

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
