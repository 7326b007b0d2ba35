"""
Reports app URL configuration.

All routes are registered under the ``/api/`` prefix
(included from ``backend.urls``).

Route Hierarchy
---------------
  /api/reports/                      → list / create
  /api/reports/{id}/                 → retrieve

  ── Workflow @actions ───────────────────────────────────────────
  POST /api/reports/{id}/transition/ → officer / admin status change
"""

from rest_framework.routers import DefaultRouter

from .views import ReportViewSet

router = DefaultRouter()
router.register(
    prefix=r"reports",
    viewset=ReportViewSet,
    basename="report",
)

urlpatterns = router.urls
