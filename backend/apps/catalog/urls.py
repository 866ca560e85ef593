from django.urls import path

from .views import AdminCatalogResetView, AdminProductDetailView, AdminProductUpsertView

# Mounted under /api/admin/products/
urlpatterns = [
    path("", AdminProductUpsertView.as_view(), name="api-admin-products"),
    path("reset/", AdminCatalogResetView.as_view(), name="api-admin-products-reset"),
    path(
        "<str:product_id>/",
        AdminProductDetailView.as_view(),
        name="api-admin-products-detail",
    ),
]
