from rest_framework import serializers

from records.models import Encounter

from .common import CleanCharField


class EncounterCreateSerializer(serializers.Serializer):
    patientId = serializers.IntegerField()
    doctorId = serializers.IntegerField(required=False, allow_null=True)
    clinicId = serializers.IntegerField(required=False, allow_null=True)
    type = serializers.ChoiceField(choices=Encounter.TYPE_CHOICES, required=False)
    reasonForVisit = CleanCharField(source='reason_for_visit', required=False, allow_blank=True)


class EncounterChargeCreateSerializer(serializers.Serializer):
    encounterId = serializers.IntegerField()
    chargeId = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)
    notes = CleanCharField(required=False, allow_blank=True, default='')


class EncounterChargeUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1, required=False)
    notes = CleanCharField(required=False, allow_blank=True)
