# notifications/apps.py

"""
NOTIFICATIONS APP CONFIG

Order / invoice / contact email relay for the storefront, plus the
admin-facing queue of order emails that still need sending by hand.
"""

from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Email Relay"
