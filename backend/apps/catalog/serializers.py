from rest_framework import serializers


class ProductReadSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    qty = serializers.IntegerField()
    img = serializers.CharField(allow_null=True)
    color = serializers.CharField(allow_null=True)


class ProductUpsertSerializer(serializers.Serializer):
    """Admin form payload.

    ``price`` and ``qty`` are accepted as loose text or numbers; the upsert
    command coerces anything unparsable to 0.
    """

    title = serializers.CharField(max_length=255)
    price = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    qty = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    img = serializers.CharField(required=False, allow_blank=True, allow_null=True)
