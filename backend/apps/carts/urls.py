from django.urls import path

from .views import CartItemDetailView, CartItemListView, CartView

# Mounted under /api/cart/
urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    path("items/", CartItemListView.as_view(), name="api-cart-items"),
    path("items/<int:index>/", CartItemDetailView.as_view(), name="api-cart-item"),
]
