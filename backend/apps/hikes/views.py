from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.access import owner_id
from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger

from .commands import parse_difficulty
from .container import build_hike_service
from .serializers import (
    HikePlanReadSerializer,
    HikePlanWriteSerializer,
    SuggestedItemsSerializer,
)

logger = get_logger(__name__).bind(component="hikes", layer="view")

DIFFICULTY_PARAM = OpenApiParameter(
    name="difficulty",
    description="Easy, Moderate or Hard (case-insensitive)",
    required=False,
    type=str,
)
PLAN_ID_PARAM = OpenApiParameter("plan_id", int, OpenApiParameter.PATH)


@extend_schema(tags=["Hikes"])
class HikePlanListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_hike_service()
    log = logger.bind(view="HikePlanListView")

    @extend_schema(
        summary="List hike plans",
        parameters=[DIFFICULTY_PARAM],
        responses={
            200: HikePlanReadSerializer(many=True),
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        plans = self.service.list_plans(
            owner_id(request), difficulty=request.query_params.get("difficulty")
        )
        return Response(HikePlanReadSerializer(plans, many=True).data)

    @extend_schema(
        summary="Create hike plan",
        request=HikePlanWriteSerializer,
        responses={
            201: HikePlanReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = HikePlanWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        plan = self.service.create_plan(owner_id(request), serializer.validated_data)
        return Response(HikePlanReadSerializer(plan).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Clear all hike plans",
        request=None,
        responses={204: None},
    )
    def delete(self, request):
        actor = owner_id(request)
        removed = self.service.clear_plans(actor)
        self.log.info("Hike plans cleared via API", owner_id=actor, removed=removed)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Hikes"])
class HikePlanDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_hike_service()
    log = logger.bind(view="HikePlanDetailView")

    @extend_schema(
        summary="Replace hike plan",
        parameters=[PLAN_ID_PARAM],
        request=HikePlanWriteSerializer,
        responses={
            200: HikePlanReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request, plan_id: int):
        serializer = HikePlanWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        plan = self.service.update_plan(owner_id(request), plan_id, serializer.validated_data)
        return Response(HikePlanReadSerializer(plan).data)

    @extend_schema(
        summary="Delete hike plan",
        parameters=[PLAN_ID_PARAM],
        responses={
            204: None,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, plan_id: int):
        self.service.delete_plan(owner_id(request), plan_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Hikes"])
class HikePlanFavoriteView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_hike_service()
    log = logger.bind(view="HikePlanFavoriteView")

    @extend_schema(
        summary="Toggle favorite",
        parameters=[PLAN_ID_PARAM],
        request=None,
        responses={
            200: HikePlanReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request, plan_id: int):
        plan = self.service.toggle_favorite(owner_id(request), plan_id)
        return Response(HikePlanReadSerializer(plan).data)


@extend_schema(tags=["Hikes"])
class HikeSuggestionsView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_hike_service()

    @extend_schema(
        summary="Suggested gear for a difficulty",
        parameters=[DIFFICULTY_PARAM],
        responses={
            200: SuggestedItemsSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        level = parse_difficulty(request.query_params.get("difficulty"))
        payload = {"difficulty": level, "items": self.service.suggested_items(level)}
        return Response(SuggestedItemsSerializer(payload).data)
