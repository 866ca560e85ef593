from rest_framework import serializers


class ErrorDetailSerializer(serializers.Serializer):
    code = serializers.CharField()
    message = serializers.CharField()
    status = serializers.IntegerField()
    details = serializers.JSONField(required=False)
    hint = serializers.CharField(required=False, allow_blank=True)
    extra = serializers.JSONField(required=False)


class ErrorResponseSerializer(serializers.Serializer):
    error = ErrorDetailSerializer()


class ShortageSerializer(serializers.Serializer):
    """One entry of ``details.shortages`` on an INSUFFICIENT_STOCK error."""

    id = serializers.CharField()
    title = serializers.CharField()
    requested = serializers.IntegerField()
    available = serializers.IntegerField()
