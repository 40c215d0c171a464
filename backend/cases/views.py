"""
Cases app ViewSets.

Architecture: Views are intentionally thin.
Every view follows the strict three-step pattern:

    1. Parse / validate input via a serializer.
    2. Delegate all business logic to the appropriate service class.
    3. Serialize the result and return a DRF ``Response``.

The authenticated user is handed to the service as the explicit
``assigner_id``; whether that user is an administrator is decided by the
service, not here.

ViewSets
--------
- ``ComplaintViewSet`` — assignment @actions on complaints.
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
from core.permissions_constants import CasesPerms

from .serializers import (
    AssignmentResultSerializer,
    AssignOfficerSerializer,
    BatchAssignmentResultSerializer,
    BatchAssignSerializer,
    CaseAssignmentSerializer,
    ComplaintListSerializer,
    ReassignOfficerSerializer,
    UnassignedQuerySerializer,
)
from .services import BatchAssignmentService, BatchItem, CaseAssignmentService


class ComplaintViewSet(viewsets.ViewSet):
    """
    Assignment endpoints for complaints.

    Uses ``viewsets.ViewSet`` (not ``ModelViewSet``) so only the explicit
    @actions below are exposed; complaint intake lives elsewhere.
    """

    permission_classes = [IsAuthenticated]

    # ── Assignment @actions ─────────────────────────────────────────

    @action(detail=True, methods=["post"], url_path="assign")
    @extend_schema(
        summary="Assign officer",
        description=(
            "Bind an officer to an unassigned complaint.  The authenticated "
            "user must be an administrator."
        ),
        request=AssignOfficerSerializer,
        responses={
            200: OpenApiResponse(response=AssignmentResultSerializer, description="Officer assigned."),
            403: OpenApiResponse(description="Permission denied."),
            404: OpenApiResponse(description="Complaint, officer or administrator not found."),
            409: OpenApiResponse(description="Complaint already assigned."),
            503: OpenApiResponse(description="Assignment could not be stored."),
        },
        tags=["Complaints – Assignment"],
    )
    def assign(self, request: Request, pk: str = None) -> Response:
        """POST /api/complaints/{id}/assign/"""
        require_permission(request.user, f"cases.{CasesPerms.CAN_ASSIGN_OFFICER}")
        serializer = AssignOfficerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = CaseAssignmentService().assign(
            complaint_id=pk,
            officer_id=serializer.validated_data["officer_id"],
            assigner_id=request.user.pk,
            notes=serializer.validated_data["notes"] or None,
        )
        return Response(AssignmentResultSerializer(asdict(result)).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="reassign")
    @extend_schema(
        summary="Reassign officer",
        description="Move an assigned complaint to a different officer.",
        request=ReassignOfficerSerializer,
        responses={
            200: OpenApiResponse(response=AssignmentResultSerializer, description="Complaint reassigned."),
            403: OpenApiResponse(description="Permission denied."),
            404: OpenApiResponse(description="Complaint, officer or administrator not found."),
            409: OpenApiResponse(description="No active assignment, or same officer."),
            503: OpenApiResponse(description="Reassignment could not be stored."),
        },
        tags=["Complaints – Assignment"],
    )
    def reassign(self, request: Request, pk: str = None) -> Response:
        """POST /api/complaints/{id}/reassign/"""
        require_permission(request.user, f"cases.{CasesPerms.CAN_REASSIGN_CASE}")
        serializer = ReassignOfficerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = CaseAssignmentService().reassign(
            complaint_id=pk,
            new_officer_id=serializer.validated_data["new_officer_id"],
            assigner_id=request.user.pk,
            reason=serializer.validated_data["reason"] or None,
        )
        return Response(AssignmentResultSerializer(asdict(result)).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="batch-assign")
    @extend_schema(
        summary="Batch assign officers",
        description=(
            "Assign several complaints in one call.  Items run in order; a "
            "failing item is reported in its result and does not stop the batch."
        ),
        request=BatchAssignSerializer,
        responses={
            200: OpenApiResponse(response=BatchAssignmentResultSerializer, description="Per-item results."),
            400: OpenApiResponse(description="Validation error."),
            403: OpenApiResponse(description="Permission denied."),
        },
        tags=["Complaints – Assignment"],
    )
    def batch_assign(self, request: Request) -> Response:
        """POST /api/complaints/batch-assign/"""
        require_permission(request.user, f"cases.{CasesPerms.CAN_ASSIGN_OFFICER}")
        serializer = BatchAssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        items = [
            BatchItem(complaint_id=row["complaint_id"], officer_id=row["officer_id"])
            for row in serializer.validated_data["assignments"]
        ]
        result = BatchAssignmentService().batch_assign(
            items,
            assigner_id=request.user.pk,
            notes=serializer.validated_data["notes"] or None,
        )
        return Response(BatchAssignmentResultSerializer(asdict(result)).data, status=status.HTTP_200_OK)

    # ── Read @actions ───────────────────────────────────────────────

    @action(detail=True, methods=["get"], url_path="assignments")
    @extend_schema(
        summary="Assignment history",
        description="All assignment rows of the complaint, newest first.",
        responses={
            200: OpenApiResponse(response=CaseAssignmentSerializer(many=True), description="Assignment history."),
            403: OpenApiResponse(description="Permission denied."),
            404: OpenApiResponse(description="Complaint not found."),
        },
        tags=["Complaints – Assignment"],
    )
    def assignments(self, request: Request, pk: str = None) -> Response:
        """GET /api/complaints/{id}/assignments/"""
        require_permission(
            request.user,
            f"cases.{CasesPerms.CAN_VIEW_ASSIGNMENT_HISTORY}",
            f"cases.{CasesPerms.CAN_ASSIGN_OFFICER}",
        )
        history = CaseAssignmentService.get_assignment_history(pk)
        return Response(CaseAssignmentSerializer(history, many=True).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="unassigned")
    @extend_schema(
        summary="Unassigned queue",
        description="Total count and the newest unassigned complaints.",
        parameters=[
            OpenApiParameter(name="limit", type=int, location=OpenApiParameter.QUERY, description="1–100, default 10."),
        ],
        responses={
            200: OpenApiResponse(description="``{count, results}``."),
            403: OpenApiResponse(description="Permission denied."),
        },
        tags=["Complaints – Assignment"],
    )
    def unassigned(self, request: Request) -> Response:
        """GET /api/complaints/unassigned/?limit="""
        require_permission(request.user, f"cases.{CasesPerms.CAN_ASSIGN_OFFICER}")
        query = UnassignedQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        complaints = CaseAssignmentService.list_unassigned(query.validated_data["limit"])
        return Response(
            {
                "count": CaseAssignmentService.count_unassigned(),
                "results": ComplaintListSerializer(complaints, many=True).data,
            },
            status=status.HTTP_200_OK,
        )
