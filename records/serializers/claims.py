from rest_framework import serializers

from .common import CleanCharField


class ClaimStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    rejectionReason = CleanCharField(required=False, allow_blank=True, allow_null=True)
    notes = CleanCharField(required=False, allow_blank=True, allow_null=True)


class ClaimFilterSerializer(serializers.Serializer):
    hmo = serializers.IntegerField(required=False)
    status = serializers.CharField(required=False)
    startDate = serializers.DateField(required=False)
    endDate = serializers.DateField(required=False)
