# persistence/apps.py

from django.apps import AppConfig


class PersistenceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "persistence"
    verbose_name = "Visitor & Shared Storage"
