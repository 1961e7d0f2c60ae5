# persistence/views/customer.py

"""
CUSTOMER DATA (VISITOR STORE)

- GET    /api/customer/   -> {"customer": {...} | null}
- POST   /api/customer/   -> merge JSON object into the stored record
- DELETE /api/customer/   -> forget the stored record

The record lives in the visitor's session, so checkout forms can be
pre-filled on the next visit without an account.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from persistence.services.customer_data import CustomerDataStore
from persistence.stores import visitor_store


class PublicWriteThrottle(AnonRateThrottle):
    scope = "public_write"


class CustomerDataView(APIView):
    permission_classes = [AllowAny]
    # Form bodies would arrive as lists per key.
    parser_classes = [JSONParser]

    def get_throttles(self):
        if self.request.method == "POST":
            return [PublicWriteThrottle()]
        return super().get_throttles()

    def _adapter(self, request) -> CustomerDataStore:
        return CustomerDataStore(visitor_store(request))

    @extend_schema(responses={200: dict}, description="Read the visitor's saved customer record")
    def get(self, request):
        return Response({"customer": self._adapter(request).load()})

    @extend_schema(request=dict, responses={200: dict, 400: dict, 507: dict})
    def post(self, request):
        if not isinstance(request.data, dict):
            return Response(
                {"detail": "Customer data must be a JSON object."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        adapter = self._adapter(request)
        if not adapter.save(dict(request.data)):
            return Response(
                {"detail": "Customer data could not be saved."},
                status=status.HTTP_507_INSUFFICIENT_STORAGE,
            )
        return Response({"customer": adapter.load()})

    @extend_schema(responses={204: None, 500: dict})
    def delete(self, request):
        if not self._adapter(request).clear():
            return Response(
                {"detail": "Customer data could not be cleared."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
