from rest_framework import serializers

from records.models import Receipt

from .common import CleanCharField


class PayChargesSerializer(serializers.Serializer):
    encounterId = serializers.IntegerField()
    chargeIds = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
    paymentMethod = serializers.ChoiceField(choices=Receipt.METHOD_CHOICES, required=False, default='cash')


class ValidateReceiptSerializer(serializers.Serializer):
    receiptNumber = serializers.CharField(max_length=32)
    department = CleanCharField(max_length=100)
