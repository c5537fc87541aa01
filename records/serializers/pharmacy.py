from rest_framework import serializers

from records.models import DrugDisposal, InventoryItem

from .common import CleanCharField, MoneyField


class PharmacySerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    location = CleanCharField(max_length=255, required=False, allow_blank=True)
    description = CleanCharField(required=False, allow_blank=True)
    isMainPharmacy = serializers.BooleanField(source='is_main_pharmacy', required=False)
    isActive = serializers.BooleanField(source='is_active', required=False)


class InventoryItemSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    pharmacyId = serializers.IntegerField(required=False)
    quantity = serializers.IntegerField(min_value=0)
    price = MoneyField()
    expiryDate = serializers.DateField(source='expiry_date')
    supplier = CleanCharField(max_length=255, required=False, allow_blank=True)
    batchNumber = CleanCharField(source='batch_number', max_length=100, required=False, allow_blank=True)
    barcode = CleanCharField(max_length=100, required=False, allow_blank=True)
    reorderLevel = serializers.IntegerField(source='reorder_level', min_value=0, required=False)
    route = CleanCharField(max_length=50, required=False, allow_blank=True)
    form = CleanCharField(max_length=50, required=False, allow_blank=True)
    dosage = CleanCharField(max_length=50, required=False, allow_blank=True)
    frequency = CleanCharField(max_length=50, required=False, allow_blank=True)
    drugUnit = serializers.ChoiceField(source='drug_unit', choices=InventoryItem.UNIT_CHOICES, required=False)


class TransferCreateSerializer(serializers.Serializer):
    drugName = CleanCharField(max_length=255)
    toPharmacyId = serializers.IntegerField()
    requestedQuantity = serializers.IntegerField(min_value=1)
    notes = CleanCharField(required=False, allow_blank=True, default='')


class TransferApproveSerializer(serializers.Serializer):
    approvedQuantity = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class TransferRejectSerializer(serializers.Serializer):
    rejectionReason = CleanCharField(required=False, allow_blank=True, default='')


class DisposalCreateSerializer(serializers.Serializer):
    drugId = serializers.IntegerField()
    pharmacyId = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)
    disposalType = serializers.ChoiceField(choices=DrugDisposal.TYPE_CHOICES)
    reason = CleanCharField()
    supplierReturnDetails = serializers.DictField(required=False, allow_null=True)
    notes = CleanCharField(required=False, allow_blank=True, default='')
