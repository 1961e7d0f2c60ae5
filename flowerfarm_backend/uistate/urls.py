# uistate/urls.py

from django.urls import path

from uistate.registry import view_scopes
from uistate.views import (
    PaginationStepView,
    PaginationView,
    ScopeCollectionView,
    ScopeDetailView,
    ScrollPositionView,
)

app_name = "uistate"

urlpatterns = [
    path("scopes/", ScopeCollectionView.as_view(registry=view_scopes), name="scope-list"),
    path(
        "scopes/<str:scope_id>/",
        ScopeDetailView.as_view(registry=view_scopes),
        name="scope-detail",
    ),
    path(
        "scopes/<str:scope_id>/scroll/<str:key>/",
        ScrollPositionView.as_view(registry=view_scopes),
        name="scroll-position",
    ),
    path(
        "scopes/<str:scope_id>/pagination/<str:key>/",
        PaginationView.as_view(registry=view_scopes),
        name="pagination",
    ),
    path(
        "scopes/<str:scope_id>/pagination/<str:key>/step/",
        PaginationStepView.as_view(registry=view_scopes),
        name="pagination-step",
    ),
]
