"""URL routing for the add-on catalog."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AddOnViewSet

router = DefaultRouter()
router.register(r"", AddOnViewSet, basename="addon")

urlpatterns = [
    path("", include(router.urls)),
]
