"""URL routing for the rooms domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import RoomBlockViewSet, RoomViewSet, SeasonalRateViewSet

router = DefaultRouter()
router.register(r"", RoomViewSet, basename="room")

seasonal_list = SeasonalRateViewSet.as_view({"get": "list", "post": "create"})
seasonal_detail = SeasonalRateViewSet.as_view(
    {"patch": "partial_update", "put": "update", "delete": "destroy", "get": "retrieve"}
)

block_list = RoomBlockViewSet.as_view({"get": "list", "post": "create"})
block_detail = RoomBlockViewSet.as_view(
    {"patch": "partial_update", "put": "update", "delete": "destroy", "get": "retrieve"}
)

urlpatterns = [
    # Seasonal rates
    path("<int:room_id>/seasonal-rates/", seasonal_list, name="room-seasonal-rate-list"),
    path("<int:room_id>/seasonal-rates/<int:pk>/", seasonal_detail, name="room-seasonal-rate-detail"),
    # Blocks
    path("<int:room_id>/blocks/", block_list, name="room-block-list"),
    path("<int:room_id>/blocks/<int:pk>/", block_detail, name="room-block-detail"),
    path("", include(router.urls)),
]
