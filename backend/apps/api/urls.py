from django.urls import include, path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from apps.carts.views import CheckoutView
from apps.catalog.views import ProductDetailView, ProductListView

urlpatterns = [
    path("products/", ProductListView.as_view(), name="api-products-list"),
    path(
        "products/<str:product_id>/",
        ProductDetailView.as_view(),
        name="api-products-detail",
    ),
    path("checkout/", CheckoutView.as_view(), name="api-checkout"),
    path("cart/", include("apps.carts.urls")),
    path("admin/products/", include("apps.catalog.urls")),
    path("hikes/", include("apps.hikes.urls")),
    path("auth/token/", TokenObtainPairView.as_view(), name="auth-token"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="auth-token-refresh"),
]
