from rest_framework import serializers

from .common import CleanCharField


class ClinicSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    department = CleanCharField(max_length=255)
    description = CleanCharField(required=False, allow_blank=True)
    active = serializers.BooleanField(required=False)
