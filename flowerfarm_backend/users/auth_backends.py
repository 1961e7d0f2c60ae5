"""
PATH: users/auth_backends.py

AUTH BACKEND: Username OR Email login

The shop has a handful of admin accounts on Django's stock User model.
The login form has a single identifier box:
- identifier containing "@" -> matched against email (case-insensitive)
- anything else             -> matched against username (case-insensitive)

Inactive accounts never authenticate.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

User = get_user_model()


class EmailOrUsernameBackend(ModelBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        identifier = (username or kwargs.get("email") or "").strip()
        if not identifier or password is None:
            return None

        field = "email__iexact" if "@" in identifier else "username__iexact"
        # Emails are not unique on the stock model; first active match wins.
        user = User.objects.filter(**{field: identifier}, is_active=True).order_by("pk").first()
        if user is None:
            # Run the hasher anyway so timing does not reveal unknown accounts.
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
