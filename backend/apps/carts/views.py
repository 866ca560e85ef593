from decimal import Decimal

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.access import owner_id
from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import domain_error_response
from apps.common import get_logger
from apps.common.errors import PersistenceError

from .container import build_cart_service
from .dtos import CartDTO
from .serializers import (
    CartItemAddSerializer,
    CartQuantityChangeSerializer,
    CartReadSerializer,
    CheckoutResponseSerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")

CART_ERROR_RESPONSES = {
    401: OpenApiResponse(response=ErrorResponseSerializer),
    503: OpenApiResponse(response=ErrorResponseSerializer),
}


def _unsaved_cart_response(exc: PersistenceError):
    """503 that still carries the cart as it was before the failed save."""
    extra = None
    if isinstance(exc.pending, CartDTO):
        extra = {"pendingCart": CartReadSerializer(exc.pending).data}
    return domain_error_response(exc, extra=extra)


@extend_schema(tags=["Cart"])
class CartView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        summary="Get cart",
        responses={200: CartReadSerializer, **CART_ERROR_RESPONSES},
    )
    def get(self, request):
        dto = self.service.get_cart(owner_id(request))
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        summary="Empty cart",
        responses={200: CartReadSerializer, **CART_ERROR_RESPONSES},
    )
    def delete(self, request):
        actor = owner_id(request)
        try:
            dto = self.service.empty_cart(actor)
        except PersistenceError as exc:
            return _unsaved_cart_response(exc)
        self.log.info("Cart emptied via API", owner_id=actor)
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartItemListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemListView")

    @extend_schema(
        summary="Add product to cart",
        description=(
            "Adds one unit of the product, or increments its existing line. Only checks that the "
            "product is in stock right now; quantities are validated against stock at checkout."
        ),
        request=CartItemAddSerializer,
        responses={
            200: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
            **CART_ERROR_RESPONSES,
        },
    )
    def post(self, request):
        serializer = CartItemAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        actor = owner_id(request)
        product_id = serializer.validated_data["productId"]
        try:
            dto = self.service.add_item(actor, product_id)
        except PersistenceError as exc:
            return _unsaved_cart_response(exc)
        self.log.info("Cart item added via API", owner_id=actor, product_id=product_id)
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartItemDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemDetailView")

    @extend_schema(
        summary="Change line quantity",
        description=(
            "Adds delta to the line at index; a line reaching zero is removed. "
            "An index that no longer exists is ignored and the current cart is returned."
        ),
        parameters=[OpenApiParameter("index", int, OpenApiParameter.PATH)],
        request=CartQuantityChangeSerializer,
        responses={
            200: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            **CART_ERROR_RESPONSES,
        },
    )
    def patch(self, request, index: int):
        serializer = CartQuantityChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            dto = self.service.change_quantity(
                owner_id(request), index, serializer.validated_data["delta"]
            )
        except PersistenceError as exc:
            return _unsaved_cart_response(exc)
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        summary="Remove line",
        parameters=[OpenApiParameter("index", int, OpenApiParameter.PATH)],
        responses={200: CartReadSerializer, **CART_ERROR_RESPONSES},
    )
    def delete(self, request, index: int):
        try:
            dto = self.service.remove_line(owner_id(request), index)
        except PersistenceError as exc:
            return _unsaved_cart_response(exc)
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CheckoutView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CheckoutView")

    @extend_schema(
        summary="Checkout",
        description=(
            "Re-reads current stock, and if every line is covered deducts it and clears the cart in "
            "one transaction. Otherwise nothing changes and INSUFFICIENT_STOCK names the product."
        ),
        request=None,
        responses={
            200: CheckoutResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
            **CART_ERROR_RESPONSES,
        },
    )
    def post(self, request):
        actor = owner_id(request)
        result = self.service.checkout(actor)
        self.log.info("Checkout completed via API", owner_id=actor, total=result.total)
        payload = {
            "updatedCatalog": list(result.catalog.values()),
            "clearedCart": CartDTO(lines=list(result.cart), total=Decimal("0.00"), count=0),
            "purchased": result.purchased,
            "total": result.total,
        }
        return Response(CheckoutResponseSerializer(payload).data, status=status.HTTP_200_OK)
