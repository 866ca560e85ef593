from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.catalog.models import Product
from apps.catalog.views import AdminCatalogResetView

User = get_user_model()


class TestCatalogApi(APITestCase):
    def setUp(self):
        cache.clear()
        AdminCatalogResetView.service.reset_catalog(is_authorized=lambda: True)
        User.objects.create_user(username="admin", password="AdminPass123", is_staff=True)
        User.objects.create_user(username="hiker", password="TrailPass123")
        self.list_url = reverse("api-products-list")
        self.admin_url = reverse("api-admin-products")

    def _auth(self, username, password):
        login = self.client.post(
            reverse("auth-token"), {"username": username, "password": password}, format="json"
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")

    def test_anonymous_listing_and_search(self):
        res = self.client.get(self.list_url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([p["id"] for p in res.data], ["p1", "p2", "p3"])
        res = self.client.get(self.list_url, {"search": "bottle"})
        self.assertEqual([p["title"] for p in res.data], ["Water Bottle"])

    def test_product_detail(self):
        res = self.client.get(reverse("api-products-detail", args=["p3"]))
        self.assertEqual(res.data["price"], "29.99")
        res = self.client.get(reverse("api-products-detail", args=["p404"]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_upsert_merges_by_title(self):
        self._auth("admin", "AdminPass123")
        res = self.client.put(
            self.admin_url, {"title": "water bottle", "price": "12", "qty": 40}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["id"], "p2")
        self.assertEqual(Product.objects.count(), 3)
        product = Product.objects.get(id="p2")
        self.assertEqual((product.price, product.qty), (Decimal("12.00"), 40))
        self.assertEqual(product.img, "images/product2.png")

    def test_admin_upsert_creates_product(self):
        self._auth("admin", "AdminPass123")
        self.client.get(self.list_url)
        res = self.client.put(
            self.admin_url, {"title": "Headlamp", "price": "abc", "qty": "-2"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertRegex(res.data["id"], r"^p[0-9a-f]{10}$")
        self.assertEqual(res.data["price"], "0.00")
        self.assertEqual(res.data["qty"], 0)
        listing = self.client.get(self.list_url)
        self.assertEqual(listing.data[-1]["title"], "Headlamp")

    def test_admin_upsert_rejects_out_of_range_numbers(self):
        self._auth("admin", "AdminPass123")
        res = self.client.put(
            self.admin_url, {"title": "Tent", "price": "1e12", "qty": 1}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")
        self.assertEqual(res.data["error"]["details"]["price"], "1e12")
        res = self.client.put(
            self.admin_url,
            {"title": "water bottle", "price": "5", "qty": "2147483648"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["details"]["max"], "2147483647")
        self.assertFalse(Product.objects.filter(title="Tent").exists())
        self.assertEqual(Product.objects.get(id="p2").qty, 25)
        listing = self.client.get(self.list_url)
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual(len(listing.data), 3)

    def test_admin_upsert_accepts_largest_storable_numbers(self):
        self._auth("admin", "AdminPass123")
        res = self.client.put(
            self.admin_url,
            {"title": "Tent", "price": "99999999.99", "qty": "2147483647"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["price"], "99999999.99")
        listing = self.client.get(self.list_url)
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual(listing.data[-1]["qty"], 2147483647)

    def test_non_admin_rejected(self):
        self._auth("hiker", "TrailPass123")
        res = self.client.put(self.admin_url, {"title": "Tent", "qty": 1}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(res.data["error"]["message"], "Admins only")
        res = self.client.post(reverse("api-admin-products-reset"))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Product.objects.filter(title="Tent").exists())

    def test_delete_and_reset(self):
        self._auth("admin", "AdminPass123")
        res = self.client.delete(reverse("api-admin-products-detail", args=["p1"]))
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual([p["id"] for p in self.client.get(self.list_url).data], ["p2", "p3"])
        res = self.client.delete(reverse("api-admin-products-detail", args=["p1"]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

        first = self.client.post(reverse("api-admin-products-reset"))
        second = self.client.post(reverse("api-admin-products-reset"))
        self.assertEqual(first.data, second.data)
        self.assertEqual([p["id"] for p in second.data], ["p1", "p2", "p3"])
