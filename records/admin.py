"""
Django admin registrations for the records models.

Gives superusers a quick way to inspect and correct data at ``/admin/``.
"""

from django.contrib import admin

from .models import (
    HMO,
    Bank,
    Charge,
    Claim,
    ClaimItem,
    Clinic,
    DrugDisposal,
    DrugTransfer,
    Encounter,
    EncounterCharge,
    HMOTransaction,
    InventoryItem,
    LabOrder,
    OperationLog,
    Patient,
    Pharmacy,
    RadiologyOrder,
    Receipt,
    Setting,
    User,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'role', 'assigned_pharmacy', 'is_active', 'last_login')
    list_filter = ('role', 'is_active')
    search_fields = ('email', 'name', 'username')


@admin.register(Bank)
class BankAdmin(admin.ModelAdmin):
    list_display = ('bank_name', 'account_name', 'account_number', 'is_active', 'is_default')
    list_filter = ('is_active', 'is_default')


@admin.register(Setting)
class SettingAdmin(admin.ModelAdmin):
    list_display = ('hospital_name', 'system_version', 'currency_symbol', 'updated_at')


@admin.register(HMO)
class HMOAdmin(admin.ModelAdmin):
    list_display = ('name', 'code', 'category', 'active')
    list_filter = ('category', 'active')
    search_fields = ('name', 'code')


@admin.register(Charge)
class ChargeAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'department', 'standard_fee', 'base_price', 'active')
    list_filter = ('type', 'active')
    search_fields = ('name', 'code')


admin.site.register(Clinic)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('mrn', 'name', 'provider', 'hmo', 'deposit_balance')
    list_filter = ('provider',)
    search_fields = ('mrn', 'name', 'contact')


@admin.register(Encounter)
class EncounterAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'type', 'encounter_status', 'payment_validated', 'created_at')
    list_filter = ('encounter_status', 'type')


@admin.register(EncounterCharge)
class EncounterChargeAdmin(admin.ModelAdmin):
    list_display = ('encounter', 'item_name', 'quantity', 'total_amount', 'patient_portion', 'hmo_portion', 'status')
    list_filter = ('status',)


@admin.register(Receipt)
class ReceiptAdmin(admin.ModelAdmin):
    list_display = ('receipt_number', 'patient', 'amount_paid', 'payment_method', 'cashier', 'payment_date')
    list_filter = ('payment_method', 'validated')
    search_fields = ('receipt_number', 'patient__name')


class ClaimItemInline(admin.TabularInline):
    model = ClaimItem
    extra = 0


@admin.register(Claim)
class ClaimAdmin(admin.ModelAdmin):
    list_display = ('claim_number', 'patient', 'hmo', 'total_claim_amount', 'status', 'created_at')
    list_filter = ('status', 'hmo')
    search_fields = ('claim_number', 'patient__name')
    inlines = [ClaimItemInline]


@admin.register(HMOTransaction)
class HMOTransactionAdmin(admin.ModelAdmin):
    list_display = ('hmo', 'type', 'amount', 'reference', 'date')
    list_filter = ('type', 'hmo')


@admin.register(Pharmacy)
class PharmacyAdmin(admin.ModelAdmin):
    list_display = ('name', 'location', 'is_main_pharmacy', 'is_active')


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'pharmacy', 'quantity', 'reorder_level', 'batch_number', 'expiry_date')
    list_filter = ('pharmacy',)
    search_fields = ('name', 'batch_number', 'barcode')


@admin.register(LabOrder)
class LabOrderAdmin(admin.ModelAdmin):
    list_display = ('test_name', 'patient', 'status', 'signed_by', 'approved_by', 'created_at')
    list_filter = ('status',)
    search_fields = ('test_name', 'patient__name', 'patient__mrn')


admin.site.register(RadiologyOrder)


@admin.register(DrugTransfer)
class DrugTransferAdmin(admin.ModelAdmin):
    list_display = ('drug', 'from_pharmacy', 'to_pharmacy', 'requested_quantity', 'approved_quantity', 'status')
    list_filter = ('status',)


@admin.register(DrugDisposal)
class DrugDisposalAdmin(admin.ModelAdmin):
    list_display = ('drug', 'pharmacy', 'quantity', 'disposal_type', 'disposed_by', 'created_at')
    list_filter = ('disposal_type',)


@admin.register(OperationLog)
class OperationLogAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'user', 'action', 'object_type', 'object_id')
    list_filter = ('action',)
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')
