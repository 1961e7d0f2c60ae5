# notifications/urls.py

from django.urls import path

from notifications.views import ContactEmailView, OrderEmailView, PendingEmailCreateView

app_name = "notifications"

urlpatterns = [
    path("order-email/", OrderEmailView.as_view(), name="order-email"),
    path("contact-email/", ContactEmailView.as_view(), name="contact-email"),
    path("pending-emails/", PendingEmailCreateView.as_view(), name="pending-email-create"),
]
