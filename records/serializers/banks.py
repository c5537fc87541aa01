from rest_framework import serializers

from .common import CleanCharField


class BankSerializer(serializers.Serializer):
    bankName = CleanCharField(source='bank_name', max_length=255)
    accountName = CleanCharField(source='account_name', max_length=255)
    accountNumber = CleanCharField(source='account_number', max_length=50)
    branchName = CleanCharField(source='branch_name', max_length=255, required=False, allow_blank=True)
    swiftCode = CleanCharField(source='swift_code', max_length=20, required=False, allow_blank=True)
    isActive = serializers.BooleanField(source='is_active', required=False)
    isDefault = serializers.BooleanField(source='is_default', required=False)
