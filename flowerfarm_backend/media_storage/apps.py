# media_storage/apps.py

"""
MEDIA STORAGE APP CONFIG

Out-of-band tooling for the storage bucket that serves product photos.
No models, no URLs: everything runs through management commands.
"""

from django.apps import AppConfig


class MediaStorageConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "media_storage"
    verbose_name = "Media Storage"
