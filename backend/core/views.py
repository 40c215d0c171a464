"""
Core app views — **Thin Views**.

Expose the static crime-type taxonomy so clients can build dropdowns and
so operators can diagnose crime-type values that fail to translate.

**Authentication**: Not required (``AllowAny``).  The taxonomy is public
configuration data.
"""

from __future__ import annotations

from dataclasses import asdict

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from core.domain.exceptions import DomainError

from .serializers import (
    CrimeTypeMappingSerializer,
    CrimeTypeQuerySerializer,
    CrimeTypeResolveSerializer,
)
from .taxonomy import CrimeTypeMapper


class CrimeTypeListView(APIView):
    """
    **GET /api/core/crime-types/**

    List taxonomy rows, optionally narrowed by ``search`` (substring over
    both representations) and/or ``category``.
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="List crime types",
        parameters=[
            OpenApiParameter(name="search", type=str, location=OpenApiParameter.QUERY, description="Substring filter."),
            OpenApiParameter(name="category", type=str, location=OpenApiParameter.QUERY, description="Category filter."),
        ],
        responses={200: OpenApiResponse(response=CrimeTypeMappingSerializer(many=True), description="Taxonomy rows.")},
        tags=["Taxonomy"],
    )
    def get(self, request: Request) -> Response:
        query = CrimeTypeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        search = query.validated_data.get("search")
        category = query.validated_data.get("category")

        if search:
            mappings = CrimeTypeMapper.find_candidates(search)
        else:
            mappings = CrimeTypeMapper.all_mappings()
        if category:
            mappings = [m for m in mappings if m.category.lower() == category.lower()]

        serializer = CrimeTypeMappingSerializer([asdict(m) for m in mappings], many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)


class CrimeTypeResolveView(APIView):
    """
    **GET /api/core/crime-types/resolve/?value=...**

    Translate one crime-type value and show the fragment matches that
    would be used if it does not translate.
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Resolve a crime-type value",
        parameters=[
            OpenApiParameter(name="value", type=str, location=OpenApiParameter.QUERY, required=True),
        ],
        responses={
            200: OpenApiResponse(response=CrimeTypeResolveSerializer, description="Resolution result."),
            400: OpenApiResponse(description="Missing value."),
        },
        tags=["Taxonomy"],
    )
    def get(self, request: Request) -> Response:
        value = (request.query_params.get("value") or "").strip()
        if not value:
            raise DomainError("Query parameter 'value' is required.")

        mapping = CrimeTypeMapper.mapping_for(value)
        data = {
            "value": value,
            "display_name": mapping.display_name if mapping else None,
            "client_key": mapping.client_key if mapping else None,
            "category": mapping.category if mapping else None,
            "unit": mapping.unit if mapping else None,
            "candidates": [asdict(m) for m in CrimeTypeMapper.find_candidates(value)],
        }
        return Response(CrimeTypeResolveSerializer(data).data, status=status.HTTP_200_OK)
