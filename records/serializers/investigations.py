from rest_framework import serializers

from .common import CleanCharField


class LabOrderCreateSerializer(serializers.Serializer):
    patientId = serializers.IntegerField()
    encounterId = serializers.IntegerField(required=False, allow_null=True)
    chargeId = serializers.IntegerField(required=False, allow_null=True)
    testName = CleanCharField(max_length=255)
    notes = CleanCharField(required=False, allow_blank=True, default='')


class LabResultSerializer(serializers.Serializer):
    # results are filled from the charge's result template, markup included
    result = serializers.CharField()


class RadiologyOrderCreateSerializer(serializers.Serializer):
    patientId = serializers.IntegerField()
    encounterId = serializers.IntegerField(required=False, allow_null=True)
    chargeId = serializers.IntegerField(required=False, allow_null=True)
    scanType = CleanCharField(max_length=255)


class RadiologyReportSerializer(serializers.Serializer):
    report = serializers.CharField()
    resultImage = serializers.CharField(required=False, allow_blank=True)
