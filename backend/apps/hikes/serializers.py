from rest_framework import serializers

from .constants import DEFAULT_DIFFICULTY


class HikePlanReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    location = serializers.CharField(allow_blank=True)
    difficulty = serializers.CharField()
    notes = serializers.CharField(allow_blank=True)
    isFavorite = serializers.BooleanField(source="is_favorite")
    createdAt = serializers.DateTimeField(source="created_at", allow_null=True)


class HikePlanWriteSerializer(serializers.Serializer):
    # Trimming, the required name and difficulty matching happen in HikePlanCommand
    name = serializers.CharField(allow_blank=True, trim_whitespace=False)
    location = serializers.CharField(required=False, allow_blank=True, default="")
    difficulty = serializers.CharField(
        required=False, allow_blank=True, default=DEFAULT_DIFFICULTY
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class SuggestedItemsSerializer(serializers.Serializer):
    difficulty = serializers.CharField()
    items = serializers.ListField(child=serializers.CharField())
