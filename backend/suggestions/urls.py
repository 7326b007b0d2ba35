"""
Suggestions app URL configuration.

Route Hierarchy
---------------
  /api/suggestions/                      → list / create
  /api/suggestions/{id}/                 → retrieve
  POST /api/suggestions/{id}/transition/ → admin decision
"""

from rest_framework.routers import DefaultRouter

from .views import SuggestionViewSet

router = DefaultRouter()
router.register(
    prefix=r"suggestions",
    viewset=SuggestionViewSet,
    basename="suggestion",
)

urlpatterns = router.urls
