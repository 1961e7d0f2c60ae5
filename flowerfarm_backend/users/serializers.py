# users/serializers.py

from rest_framework import serializers


# ---------------- LOGIN ----------------
class LoginSerializer(serializers.Serializer):
    """Username or email, the backend decides which."""

    username = serializers.CharField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})
    next = serializers.CharField(required=False, allow_blank=True, default="")


class LoginResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    username = serializers.CharField()
    redirect_to = serializers.CharField()


# ---------------- SESSION ----------------
class MeSerializer(serializers.Serializer):
    is_authenticated = serializers.BooleanField()
    username = serializers.CharField(allow_null=True)
    is_staff = serializers.BooleanField()
    dev_bypass = serializers.BooleanField()
