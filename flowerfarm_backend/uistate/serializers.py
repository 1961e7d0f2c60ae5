# uistate/serializers.py

from rest_framework import serializers


class ScrollPositionSerializer(serializers.Serializer):
    position = serializers.IntegerField(min_value=0)


class PaginationIndexSerializer(serializers.Serializer):
    index = serializers.IntegerField(min_value=0)
    total = serializers.IntegerField(min_value=1, required=False)


class PaginationStepSerializer(serializers.Serializer):
    delta = serializers.IntegerField()
    total = serializers.IntegerField(min_value=1)
