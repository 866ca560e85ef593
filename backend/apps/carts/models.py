from django.conf import settings
from django.db import models


class CartLine(models.Model):
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cart_lines"
    )
    # Plain id, not a FK: deleting a product must leave the line in place
    product_id = models.CharField(max_length=64)
    title = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    qty = models.PositiveIntegerField()
    position = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"{self.qty} x {self.title} for {self.owner_id}"

    class Meta:
        db_table = "cart_lines"
        ordering = ["owner", "position"]
        unique_together = ("owner", "product_id")
        indexes = [
            models.Index(fields=["owner", "position"], name="cart_line_owner_pos_idx"),
        ]
