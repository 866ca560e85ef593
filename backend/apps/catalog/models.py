from django.db import models


class Product(models.Model):
    # Opaque identifiers ("p1", "p3f09a1c2d4"), never reassigned
    id = models.CharField(primary_key=True, max_length=64)
    title = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    qty = models.PositiveIntegerField(default=0)
    img = models.TextField(blank=True, null=True)
    color = models.CharField(max_length=16, blank=True, null=True)
    position = models.PositiveIntegerField(default=0)

    def __str__(self):
        return self.title

    class Meta:
        ordering = ["position", "id"]
        indexes = [
            models.Index(fields=["title"], name="product_title_idx"),
            models.Index(fields=["position"], name="product_position_idx"),
        ]
