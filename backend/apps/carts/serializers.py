from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from apps.catalog.constants import MAX_QTY
from apps.catalog.serializers import ProductReadSerializer


class CartLineSerializer(serializers.Serializer):
    index = serializers.IntegerField(required=False)
    id = serializers.CharField()
    title = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    qty = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=None, decimal_places=2)


class CartReadSerializer(serializers.Serializer):
    lines = serializers.SerializerMethodField()
    total = serializers.DecimalField(max_digits=None, decimal_places=2)
    count = serializers.IntegerField()

    @extend_schema_field(CartLineSerializer(many=True))
    def get_lines(self, cart):
        # Index is what the quantity/remove endpoints address lines by
        return [
            {"index": index, **CartLineSerializer(line).data}
            for index, line in enumerate(cart.lines)
        ]


class CartItemAddSerializer(serializers.Serializer):
    productId = serializers.CharField(max_length=64)


class CartQuantityChangeSerializer(serializers.Serializer):
    delta = serializers.IntegerField(min_value=-MAX_QTY, max_value=MAX_QTY)


class CheckoutResponseSerializer(serializers.Serializer):
    updatedCatalog = ProductReadSerializer(many=True)
    clearedCart = CartReadSerializer()
    purchased = CartLineSerializer(many=True)
    total = serializers.DecimalField(max_digits=None, decimal_places=2)
