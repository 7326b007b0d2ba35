"""
Suggestions app ViewSets.

Thin views: validate with a serializer, call the service, serialize the
result.  Role checks live in ``suggestions.services``.
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

from .models import Suggestion
from .serializers import (
    SuggestionCreateSerializer,
    SuggestionDetailSerializer,
    SuggestionFilterSerializer,
    SuggestionListSerializer,
    SuggestionTransitionSerializer,
)
from .services import (
    SuggestionCreationService,
    SuggestionQueryService,
    SuggestionWorkflowService,
)


class SuggestionViewSet(viewsets.ViewSet):
    """List, submit, inspect and decide on citizen suggestions."""

    permission_classes = [IsAuthenticated]
    queryset = Suggestion.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        summary="List suggestions",
        description="Citizens see their own suggestions; officers and admins see all.",
        parameters=[
            OpenApiParameter(name="status", type=str, required=False, description="Suggestion status or 'all'."),
            OpenApiParameter(name="search", type=str, required=False, description="Case-insensitive search on title, description, category."),
            OpenApiParameter(name="ordering", type=str, required=False, description="'newest' (default) or 'oldest'."),
        ],
        responses={200: OpenApiResponse(response=SuggestionListSerializer(many=True), description="Suggestion list.")},
        tags=["Suggestions"],
    )
    def list(self, request: Request) -> Response:
        """GET /api/suggestions/"""
        filter_serializer = SuggestionFilterSerializer(data=request.query_params)
        if not filter_serializer.is_valid():
            return Response(filter_serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        suggestions = SuggestionQueryService.get_filtered_list(
            request.user, filter_serializer.validated_data,
        )
        serializer = SuggestionListSerializer(suggestions, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Submit a suggestion",
        description="Citizens only.  The description must be at least 10 characters.",
        request=SuggestionCreateSerializer,
        responses={
            201: OpenApiResponse(response=SuggestionDetailSerializer, description="Suggestion created."),
            400: OpenApiResponse(description="Validation error."),
            403: OpenApiResponse(description="Only citizens can submit suggestions."),
        },
        tags=["Suggestions"],
    )
    def create(self, request: Request) -> Response:
        """POST /api/suggestions/"""
        serializer = SuggestionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        suggestion = SuggestionCreationService.create_suggestion(
            serializer.validated_data, request.user,
        )
        return Response(
            SuggestionDetailSerializer(suggestion, context={"request": request}).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="Retrieve a suggestion",
        responses={
            200: OpenApiResponse(response=SuggestionDetailSerializer, description="Suggestion detail."),
            404: OpenApiResponse(description="Not found or not visible to the user."),
        },
        tags=["Suggestions"],
    )
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/suggestions/{id}/"""
        suggestion = SuggestionQueryService.get_suggestion_detail(int(pk), request.user)
        serializer = SuggestionDetailSerializer(suggestion, context={"request": request})
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Approve or reject a suggestion",
        description="Admins only.  A non-empty response is required.",
        request=SuggestionTransitionSerializer,
        responses={
            200: OpenApiResponse(response=SuggestionDetailSerializer, description="Status changed."),
            400: OpenApiResponse(description="Validation error or response required."),
            403: OpenApiResponse(description="Only admins can decide on suggestions."),
            404: OpenApiResponse(description="Suggestion not found."),
            409: OpenApiResponse(description="Invalid transition or final status."),
        },
        tags=["Suggestions"],
    )
    @action(detail=True, methods=["post"], url_path="transition")
    def transition(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/suggestions/{id}/transition/"""
        serializer = SuggestionTransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        suggestion = SuggestionWorkflowService.transition(
            suggestion_id=int(pk),
            target_status=serializer.validated_data["status"],
            requesting_user=request.user,
            response_text=serializer.validated_data.get("response"),
        )
        return Response(
            SuggestionDetailSerializer(suggestion, context={"request": request}).data,
            status=status.HTTP_200_OK,
        )
