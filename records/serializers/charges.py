from rest_framework import serializers

from records.models import CHARGE_TYPE_CHOICES

from .common import CleanCharField, MoneyField


class ChargeSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    type = serializers.ChoiceField(choices=CHARGE_TYPE_CHOICES)
    department = CleanCharField(max_length=255)
    basePrice = MoneyField(source='base_price')
    standardFee = MoneyField(source='standard_fee', required=False)
    retainershipFee = MoneyField(source='retainership_fee', required=False)
    nhiaFee = MoneyField(source='nhia_fee', required=False)
    kschmaFee = MoneyField(source='kschma_fee', required=False)
    description = CleanCharField(required=False, allow_blank=True)
    code = CleanCharField(max_length=50, required=False, allow_null=True, allow_blank=True)
    resultTemplate = serializers.CharField(source='result_template', required=False, allow_blank=True)
    active = serializers.BooleanField(required=False)

    def validate_code(self, v):
        return v or None
