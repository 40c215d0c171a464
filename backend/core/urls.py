"""
Core app URL configuration.

URL prefix (registered in ``backend/urls.py``)::

    path('api/core/', include('core.urls'))

Endpoint summary
----------------
GET  /api/core/crime-types/            — Taxonomy rows (search / category filters).
GET  /api/core/crime-types/resolve/    — Translate one crime-type value.
"""

from django.urls import path

from . import views

app_name = "core"

urlpatterns = [
    path(
        "crime-types/",
        views.CrimeTypeListView.as_view(),
        name="crime-type-list",
    ),
    path(
        "crime-types/resolve/",
        views.CrimeTypeResolveView.as_view(),
        name="crime-type-resolve",
    ),
]
