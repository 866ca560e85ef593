from django.urls import path

from .views import (
    HikePlanDetailView,
    HikePlanFavoriteView,
    HikePlanListView,
    HikeSuggestionsView,
)

# Mounted under /api/hikes/
urlpatterns = [
    path("", HikePlanListView.as_view(), name="api-hikes"),
    path("suggestions/", HikeSuggestionsView.as_view(), name="api-hikes-suggestions"),
    path("<int:plan_id>/", HikePlanDetailView.as_view(), name="api-hikes-detail"),
    path(
        "<int:plan_id>/favorite/",
        HikePlanFavoriteView.as_view(),
        name="api-hikes-favorite",
    ),
]
