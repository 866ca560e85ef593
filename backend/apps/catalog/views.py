from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.access import admin_check
from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger

from .container import build_catalog_service
from .serializers import ProductReadSerializer, ProductUpsertSerializer

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    service = build_catalog_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Case-insensitive title search via ?search. Cached listings may be served.",
        parameters=[
            OpenApiParameter(
                name="search",
                description="Substring of the product title",
                required=False,
                type=str,
            )
        ],
        responses={200: ProductReadSerializer(many=True)},
    )
    def get(self, request):
        search = request.query_params.get("search")
        self.log.debug("Handling product list request", search=search)
        products = self.service.list_products(search=search)
        return Response(ProductReadSerializer(products, many=True).data)


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_catalog_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", str, OpenApiParameter.PATH)],
        responses={
            200: ProductReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id: str):
        dto = self.service.get_product(product_id)
        if not dto:
            return error_response(
                "NOT_FOUND", "Product not found", {"id": str(product_id)}
            )
        return Response(ProductReadSerializer(dto).data)


@extend_schema(tags=["Admin"])
class AdminProductUpsertView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_catalog_service()
    log = logger.bind(view="AdminProductUpsertView")

    @extend_schema(
        summary="Add or update product",
        description=(
            "Upserts by title: a product whose title matches case-insensitively is updated in place "
            "(price, qty, and img when non-empty), otherwise a new product is created. Renaming a "
            "product to an existing title therefore merges into that product. Admins only."
        ),
        request=ProductUpsertSerializer,
        responses={
            200: ProductReadSerializer,
            201: ProductReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            403: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request):
        serializer = ProductUpsertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto, created = self.service.upsert_product(
            serializer.validated_data, is_authorized=admin_check(request)
        )
        self.log.info(
            "Product upserted via API",
            product_id=dto.id,
            created=created,
            actor_id=getattr(request.user, "id", None),
        )
        return Response(
            ProductReadSerializer(dto).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


@extend_schema(tags=["Admin"])
class AdminProductDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_catalog_service()
    log = logger.bind(view="AdminProductDetailView")

    @extend_schema(
        summary="Delete product",
        description="Cart lines that reference the product are kept and fail checkout.",
        parameters=[OpenApiParameter("product_id", str, OpenApiParameter.PATH)],
        responses={
            204: None,
            403: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, product_id: str):
        self.service.delete_product(product_id, is_authorized=admin_check(request))
        self.log.info(
            "Product deleted via API",
            product_id=product_id,
            actor_id=getattr(request.user, "id", None),
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Admin"])
class AdminCatalogResetView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_catalog_service()
    log = logger.bind(view="AdminCatalogResetView")

    @extend_schema(
        summary="Reset catalog",
        description="Replaces the whole catalog with the default products. Admins only.",
        request=None,
        responses={
            200: ProductReadSerializer(many=True),
            403: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        products = self.service.reset_catalog(is_authorized=admin_check(request))
        self.log.info("Catalog reset via API", actor_id=getattr(request.user, "id", None))
        return Response(ProductReadSerializer(products, many=True).data)
