from decimal import Decimal

from rest_framework import serializers

from .common import CleanCharField


class HMODepositSerializer(serializers.Serializer):
    hmoId = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    description = CleanCharField(max_length=255, required=False, allow_blank=True)
    reference = CleanCharField(max_length=100, required=False, allow_blank=True)
    date = serializers.DateTimeField(required=False)
