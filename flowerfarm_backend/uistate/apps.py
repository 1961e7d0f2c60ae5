# uistate/apps.py

from django.apps import AppConfig


class UiStateConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "uistate"
    verbose_name = "Scoped UI State"
