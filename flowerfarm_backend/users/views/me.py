from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from persistence.stores import visitor_store
from users.serializers import MeSerializer
from users.services.session_gate import GateConfig, bypass_active

# ---------------------------
# VIEW
# ---------------------------


class MeView(APIView):
    permission_classes = [AllowAny]
    serializer_class = MeSerializer

    @extend_schema(
        responses={200: MeSerializer},
        description="Report the current session's auth state",
    )
    def get(self, request):
        user = request.user
        authenticated = bool(user and user.is_authenticated)

        return Response(
            {
                "is_authenticated": authenticated,
                "username": user.get_username() if authenticated else None,
                "is_staff": bool(authenticated and user.is_staff),
                "dev_bypass": bypass_active(visitor_store(request), GateConfig.from_settings()),
            }
        )
