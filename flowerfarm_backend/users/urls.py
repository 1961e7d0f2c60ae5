# users/urls.py

from django.urls import path

from .views import LoginView, LogoutView, MeView

app_name = "users"

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    # ---------------- SESSION STATE ----------------
    path("me/", MeView.as_view(), name="me"),
]
