from decimal import Decimal

from rest_framework import serializers

from records.models import Patient

from .common import CleanCharField, MoneyField


class PatientSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    age = serializers.IntegerField(min_value=0, max_value=150)
    gender = CleanCharField(max_length=20)
    contact = CleanCharField(max_length=50)
    address = CleanCharField(max_length=500, required=False, allow_blank=True)
    medicalHistory = serializers.ListField(source='medical_history', child=CleanCharField(), required=False)
    allergies = serializers.ListField(child=CleanCharField(), required=False)
    provider = serializers.ChoiceField(choices=Patient.PROVIDER_CHOICES, required=False)
    hmoId = serializers.IntegerField(required=False, allow_null=True)
    insuranceNumber = CleanCharField(source='insurance_number', max_length=100, required=False, allow_blank=True)
    lowDepositThreshold = MoneyField(source='low_deposit_threshold', required=False)
    emergencyContactName = CleanCharField(source='emergency_contact_name', max_length=255,
                                          required=False, allow_blank=True)
    emergencyContactPhone = CleanCharField(source='emergency_contact_phone', max_length=50,
                                           required=False, allow_blank=True)


class DepositSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
