"""
Officers app ViewSets — **Thin Views**.

Every action parses its query parameters, delegates to a service class
and serializes the result.  Domain errors (``DirectoryUnavailable``,
``NotFound``, ``PermissionDenied``) are mapped to HTTP by the global
exception handler.

ViewSets
--------
- ``OfficerViewSet`` — eligible-officer listing, suggestion and
  per-officer workload.
"""

from __future__ import annotations

from dataclasses import asdict

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from core.domain.access import require_permission
from core.permissions_constants import OfficersPerms

from .serializers import (
    AvailableOfficerSerializer,
    EligibleOfficerQuerySerializer,
    OfficerWorkloadSerializer,
)
from .services import (
    OfficerDirectoryService,
    OfficerSuggestionService,
)

_ELIGIBLE_QUERY_PARAMS = [
    OpenApiParameter(name="unit_id", type=int, location=OpenApiParameter.QUERY, description="Restrict to one unit."),
    OpenApiParameter(name="crime_type", type=str, location=OpenApiParameter.QUERY, description="Client key or display name."),
]


class OfficerViewSet(viewsets.ViewSet):
    """
    Read-only officer endpoints used when assigning complaints.

    All actions require authentication plus the
    ``can_view_available_officers`` permission (administrators always pass).
    """

    permission_classes = [IsAuthenticated]

    def _require_view_permission(self, request: Request) -> None:
        require_permission(
            request.user,
            f"officers.{OfficersPerms.CAN_VIEW_AVAILABLE_OFFICERS}",
        )

    def _eligible_query(self, request: Request) -> dict:
        query = EligibleOfficerQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return {
            "unit_id": query.validated_data.get("unit_id"),
            "crime_type": query.validated_data.get("crime_type"),
        }

    @action(detail=False, methods=["get"], url_path="available")
    @extend_schema(
        summary="List eligible officers",
        description=(
            "Active officers who can take a case of the given crime type, "
            "optionally restricted to one unit.  Ordered by active cases."
        ),
        parameters=_ELIGIBLE_QUERY_PARAMS,
        responses={
            200: OpenApiResponse(response=AvailableOfficerSerializer(many=True), description="Eligible officers (possibly empty)."),
            403: OpenApiResponse(description="Permission denied."),
            503: OpenApiResponse(description="Officer directory unavailable."),
        },
        tags=["Officers"],
    )
    def available(self, request: Request) -> Response:
        """GET /api/officers/available/?unit_id=&crime_type="""
        self._require_view_permission(request)
        officers = OfficerDirectoryService().find_eligible_officers(**self._eligible_query(request))
        serializer = AvailableOfficerSerializer([asdict(o) for o in officers], many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="suggested")
    @extend_schema(
        summary="Suggest an officer",
        description=(
            "The least-loaded eligible officer.  Returns ``null`` when no "
            "officer is eligible."
        ),
        parameters=_ELIGIBLE_QUERY_PARAMS,
        responses={
            200: OpenApiResponse(response=AvailableOfficerSerializer, description="Suggested officer or null."),
            403: OpenApiResponse(description="Permission denied."),
            503: OpenApiResponse(description="Officer directory unavailable."),
        },
        tags=["Officers"],
    )
    def suggested(self, request: Request) -> Response:
        """GET /api/officers/suggested/?unit_id=&crime_type="""
        self._require_view_permission(request)
        officer = OfficerSuggestionService().suggest(**self._eligible_query(request))
        data = AvailableOfficerSerializer(asdict(officer)).data if officer else None
        return Response(data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get"], url_path="workload")
    @extend_schema(
        summary="Officer workload",
        description="Counters, success rate and workload level of one officer.",
        responses={
            200: OpenApiResponse(response=OfficerWorkloadSerializer, description="Workload summary."),
            403: OpenApiResponse(description="Permission denied."),
            404: OpenApiResponse(description="Officer not found."),
        },
        tags=["Officers"],
    )
    def workload(self, request: Request, pk: str = None) -> Response:
        """GET /api/officers/{id}/workload/ — ``id`` may also be a badge number or identity id."""
        self._require_view_permission(request)
        summary = OfficerDirectoryService.get_officer_workload(pk)
        return Response(OfficerWorkloadSerializer(summary).data, status=status.HTTP_200_OK)
