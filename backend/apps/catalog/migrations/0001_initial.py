from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.CharField(max_length=64, primary_key=True, serialize=False),
                ),
                ("title", models.CharField(max_length=255)),
                (
                    "price",
                    models.DecimalField(decimal_places=2, default=0, max_digits=10),
                ),
                ("qty", models.PositiveIntegerField(default=0)),
                ("img", models.TextField(blank=True, null=True)),
                ("color", models.CharField(blank=True, max_length=16, null=True)),
                ("position", models.PositiveIntegerField(default=0)),
            ],
            options={
                "ordering": ["position", "id"],
                "indexes": [
                    models.Index(fields=["title"], name="product_title_idx"),
                    models.Index(fields=["position"], name="product_position_idx"),
                ],
            },
        ),
    ]
