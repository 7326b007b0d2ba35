"""
Reports app ViewSets.

Architecture: Views are intentionally thin.
Every view follows the strict three-step pattern:

    1. Parse / validate input via a serializer.
    2. Delegate all business logic to the appropriate service class.
    3. Serialize the result and return a DRF ``Response``.

Role checks (who may create, who may transition, who sees what) are
enforced inside the service layer, never here.
"""

from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)

from .models import Report
from .serializers import (
    ReportCreateSerializer,
    ReportDetailSerializer,
    ReportFilterSerializer,
    ReportListSerializer,
    ReportTransitionSerializer,
)
from .services import (
    ReportCreationService,
    ReportQueryService,
    ReportWorkflowService,
)


class ReportViewSet(viewsets.ViewSet):
    """
    List, submit, inspect and triage citizen reports.

    Uses ``viewsets.ViewSet`` so every action is explicitly defined;
    there is no update or delete endpoint.
    """

    permission_classes = [IsAuthenticated]
    queryset = Report.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        summary="List reports",
        description=(
            "Citizens see their own reports; officers and admins see all. "
            "Filters are applied in the order status → category → search, "
            "then sorted by creation time."
        ),
        parameters=[
            OpenApiParameter(name="status", type=str, required=False, description="Report status or 'all'."),
            OpenApiParameter(name="category", type=str, required=False, description="Report category or 'all'."),
            OpenApiParameter(name="search", type=str, required=False, description="Case-insensitive search on title, description, category."),
            OpenApiParameter(name="ordering", type=str, required=False, description="'newest' (default) or 'oldest'."),
        ],
        responses={200: OpenApiResponse(response=ReportListSerializer(many=True), description="Report list.")},
        tags=["Reports"],
    )
    def list(self, request: Request) -> Response:
        """GET /api/reports/ — List reports visible to the user."""
        filter_serializer = ReportFilterSerializer(data=request.query_params)
        if not filter_serializer.is_valid():
            return Response(filter_serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        reports = ReportQueryService.get_filtered_list(
            request.user, filter_serializer.validated_data,
        )
        serializer = ReportListSerializer(reports, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Submit a report",
        description="Citizens only.  The report starts as 'pending'.",
        request=ReportCreateSerializer,
        responses={
            201: OpenApiResponse(response=ReportDetailSerializer, description="Report created."),
            400: OpenApiResponse(description="Validation error."),
            403: OpenApiResponse(description="Only citizens can submit reports."),
        },
        tags=["Reports"],
    )
    def create(self, request: Request) -> Response:
        """POST /api/reports/ — Submit a new report."""
        serializer = ReportCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        report = ReportCreationService.create_report(
            serializer.validated_data, request.user,
        )
        return Response(
            ReportDetailSerializer(report, context={"request": request}).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="Retrieve a report",
        responses={
            200: OpenApiResponse(response=ReportDetailSerializer, description="Report detail."),
            404: OpenApiResponse(description="Not found or not visible to the user."),
        },
        tags=["Reports"],
    )
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/reports/{id}/ — Report detail with allowed transitions."""
        report = ReportQueryService.get_report_detail(int(pk), request.user)
        serializer = ReportDetailSerializer(report, context={"request": request})
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Change report status",
        description=(
            "Officers and admins only.  pending → in_progress | rejected, "
            "in_progress → resolved | rejected.  A response of at least 10 "
            "characters is required when leaving 'pending' and when closing."
        ),
        request=ReportTransitionSerializer,
        responses={
            200: OpenApiResponse(response=ReportDetailSerializer, description="Status changed."),
            400: OpenApiResponse(description="Validation error or response required."),
            403: OpenApiResponse(description="Role may not change report status."),
            404: OpenApiResponse(description="Report not found."),
            409: OpenApiResponse(description="Invalid transition or final status."),
        },
        tags=["Reports"],
    )
    @action(detail=True, methods=["post"], url_path="transition")
    def transition(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/reports/{id}/transition/ — Move the report to a new status."""
        serializer = ReportTransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        report = ReportWorkflowService.transition(
            report_id=int(pk),
            target_status=serializer.validated_data["status"],
            requesting_user=request.user,
            response_text=serializer.validated_data.get("response"),
        )
        return Response(
            ReportDetailSerializer(report, context={"request": request}).data,
            status=status.HTTP_200_OK,
        )
