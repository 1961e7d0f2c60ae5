# uistate/views.py

"""
UI STATE API

Scopes:
- POST   /api/ui-state/scopes/                      -> mount, returns scope_id
- DELETE /api/ui-state/scopes/<scope_id>/           -> unmount (values are gone)

Per-scope stores:
- GET|PUT /api/ui-state/scopes/<scope_id>/scroll/<key>/
- GET|PUT /api/ui-state/scopes/<scope_id>/pagination/<key>/
- POST    /api/ui-state/scopes/<scope_id>/pagination/<key>/step/

Reads of unknown keys return 0. Unknown scopes are 404.
"""

from __future__ import annotations

from django.http import Http404
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from uistate.serializers import (
    PaginationIndexSerializer,
    PaginationStepSerializer,
    ScrollPositionSerializer,
)
from uistate.services.scoped_store import ViewScope, ViewScopeRegistry


class ScopedView(APIView):
    permission_classes = [AllowAny]
    registry: ViewScopeRegistry | None = None

    def get_scope(self, scope_id: str) -> ViewScope:
        scope = self.registry.get(scope_id) if self.registry is not None else None
        if scope is None:
            raise Http404("Unknown UI state scope.")
        return scope


def _pagination_payload(scope: ViewScope, key: str, total: int | None) -> dict:
    pages = scope.pagination
    payload = {"key": key, "index": pages.get(key)}
    if total:
        payload.update(
            {
                "total": total,
                "label": pages.label(key, total),
                "has_prev": pages.has_prev(key),
                "has_next": pages.has_next(key, total),
            }
        )
    return payload


class ScopeCollectionView(ScopedView):
    @extend_schema(request=None, responses={201: dict})
    def post(self, request):
        scope = self.registry.mount()
        return Response({"scope_id": scope.id}, status=status.HTTP_201_CREATED)


class ScopeDetailView(ScopedView):
    @extend_schema(responses={204: None, 404: dict})
    def delete(self, request, scope_id):
        if not self.registry.unmount(scope_id):
            raise Http404("Unknown UI state scope.")
        return Response(status=status.HTTP_204_NO_CONTENT)


class ScrollPositionView(ScopedView):
    @extend_schema(responses={200: dict})
    def get(self, request, scope_id, key):
        scope = self.get_scope(scope_id)
        return Response({"key": key, "position": scope.scroll.get_scroll_position(key)})

    @extend_schema(request=ScrollPositionSerializer, responses={200: dict})
    def put(self, request, scope_id, key):
        scope = self.get_scope(scope_id)
        serializer = ScrollPositionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        scope.scroll.save_scroll_position(key, serializer.validated_data["position"])
        self.registry.save(scope)
        return Response({"key": key, "position": scope.scroll.get_scroll_position(key)})


class PaginationView(ScopedView):
    @extend_schema(responses={200: dict})
    def get(self, request, scope_id, key):
        scope = self.get_scope(scope_id)
        total = request.query_params.get("total")
        total = int(total) if total and total.isdigit() else None
        return Response(_pagination_payload(scope, key, total))

    @extend_schema(request=PaginationIndexSerializer, responses={200: dict})
    def put(self, request, scope_id, key):
        scope = self.get_scope(scope_id)
        serializer = PaginationIndexSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        scope.pagination.set_index(key, data["index"], data.get("total"))
        self.registry.save(scope)
        return Response(_pagination_payload(scope, key, data.get("total")))


class PaginationStepView(ScopedView):
    @extend_schema(request=PaginationStepSerializer, responses={200: dict})
    def post(self, request, scope_id, key):
        scope = self.get_scope(scope_id)
        serializer = PaginationStepSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        scope.pagination.step(key, data["delta"], data["total"])
        self.registry.save(scope)
        return Response(_pagination_payload(scope, key, data["total"]))
