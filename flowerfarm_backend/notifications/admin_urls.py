# notifications/admin_urls.py

"""
Mounted under /api/admin/, so every route here sits behind the session gate.
"""

from django.urls import path

from notifications.views import (
    PendingEmailDetailView,
    PendingEmailListView,
    PendingEmailSentView,
)

app_name = "notifications-admin"

urlpatterns = [
    path("pending-emails/", PendingEmailListView.as_view(), name="pending-email-list"),
    path(
        "pending-emails/<str:order_id>/",
        PendingEmailDetailView.as_view(),
        name="pending-email-detail",
    ),
    path(
        "pending-emails/<str:order_id>/sent/",
        PendingEmailSentView.as_view(),
        name="pending-email-sent",
    ),
]
