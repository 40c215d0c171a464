"""
Cases app URL configuration.

All routes are registered under the ``/api/complaints/`` prefix.

Route Hierarchy
---------------
  ── Assignment @actions ─────────────────────────────────────────
  POST /api/complaints/{id}/assign/        → bind an officer
  POST /api/complaints/{id}/reassign/      → move to another officer
  POST /api/complaints/batch-assign/       → sequential batch of assigns

  ── Read @actions ───────────────────────────────────────────────
  GET  /api/complaints/{id}/assignments/   → assignment history
  GET  /api/complaints/unassigned/         → unassigned queue
"""

from rest_framework.routers import DefaultRouter

from .views import ComplaintViewSet

router = DefaultRouter()
router.register(
    prefix=r"complaints",
    viewset=ComplaintViewSet,
    basename="complaint",
)

urlpatterns = router.urls
