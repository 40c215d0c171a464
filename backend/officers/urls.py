"""
Officers app URL configuration.

All routes are registered under the ``/api/officers/`` prefix.

  GET /api/officers/available/        → eligible officers
  GET /api/officers/suggested/        → least-loaded eligible officer
  GET /api/officers/{id}/workload/    → workload summary
"""

from rest_framework.routers import DefaultRouter

from .views import OfficerViewSet

router = DefaultRouter()
router.register(
    prefix=r"officers",
    viewset=OfficerViewSet,
    basename="officer",
)

urlpatterns = router.urls
