"""
Database models for the EMR administrative backend.

These models cover the billing and administration side of the hospital:
bank accounts and system settings used on printed documents, HMOs and
their ledgers, the price master, patients with deposit accounts,
encounters and the charges raised against them, receipts, HMO claims
and the pharmacy stock that moves between branches.  Field names on
the wire are camelCase; see the ``format_*`` helpers in
:mod:`records.services.formatting`.
"""
from __future__ import annotations

from decimal import Decimal

from django.contrib.auth.models import AbstractUser
from django.db import models, transaction
from django.db.models import Q


class SingleDefaultModel(models.Model):
    """Abstract base for tables where at most one row carries a flag.

    Subclasses name the boolean column in ``default_flag_field``.  Saving a
    row with the flag set clears it on every other row in the same
    transaction, and subclasses declare a partial unique constraint so the
    database refuses a second flagged row outright.
    """
    default_flag_field = 'is_default'

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        flag = self.default_flag_field
        with transaction.atomic():
            if getattr(self, flag):
                others = type(self)._default_manager.filter(**{flag: True})
                if self.pk is not None:
                    others = others.exclude(pk=self.pk)
                others.update(**{flag: False})
            super().save(*args, **kwargs)

    @classmethod
    def promote(cls, pk):
        """Make the row ``pk`` the only flagged row.

        Returns the updated instance, or ``None`` when ``pk`` matches no
        row.  The lookup happens before anything is cleared so an unknown
        id leaves the current flagged row untouched.
        """
        with transaction.atomic():
            target = cls._default_manager.select_for_update().filter(pk=pk).first()
            if target is None:
                return None
            setattr(target, cls.default_flag_field, True)
            target.save()
        return target

    @classmethod
    def current_default(cls):
        return cls._default_manager.filter(**{cls.default_flag_field: True}).first()


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


# ---------------------------------------------------------------------------
# Pharmacy (declared before User because staff are assigned to a pharmacy)
# ---------------------------------------------------------------------------

class Pharmacy(SingleDefaultModel, TimeStampedModel):
    """A dispensing point.  Exactly one may be the main pharmacy."""
    default_flag_field = 'is_main_pharmacy'

    name = models.CharField(max_length=255, unique=True)
    location = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    is_main_pharmacy = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['is_main_pharmacy'],
                condition=Q(is_main_pharmacy=True),
                name='unique_main_pharmacy',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name}{' (main)' if self.is_main_pharmacy else ''}"


class User(AbstractUser):
    """Hospital staff account.

    ``email`` is the login identifier used by the front-end; ``username``
    is kept for Django admin compatibility and is set to the email when
    accounts are created through the API.
    """
    ROLE_ADMIN = 'admin'
    ROLE_DOCTOR = 'doctor'
    ROLE_PHARMACIST = 'pharmacist'
    ROLE_CASHIER = 'cashier'
    ROLE_CHOICES = [
        ('admin', 'Administrator'),
        ('doctor', 'Doctor'),
        ('nurse', 'Nurse'),
        ('pharmacist', 'Pharmacist'),
        ('lab_technician', 'Lab technician'),
        ('lab_scientist', 'Lab scientist'),
        ('radiologist', 'Radiologist'),
        ('receptionist', 'Receptionist'),
        ('cashier', 'Cashier'),
    ]
    name = models.CharField(max_length=255, blank=True)
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='receptionist', db_index=True)
    assigned_pharmacy = models.ForeignKey(
        Pharmacy, null=True, blank=True, on_delete=models.SET_NULL, related_name='staff'
    )
    created_by = models.ForeignKey(
        'self', null=True, blank=True, on_delete=models.SET_NULL, related_name='users_created'
    )

    @property
    def display_name(self) -> str:
        return self.name or self.get_full_name() or self.username

    def __str__(self) -> str:
        return f"{self.display_name} ({self.role})"


# ---------------------------------------------------------------------------
# Banks & settings
# ---------------------------------------------------------------------------

class Bank(SingleDefaultModel, TimeStampedModel):
    """A hospital bank account printed on claims and payment instructions."""
    bank_name = models.CharField(max_length=255)
    account_name = models.CharField(max_length=255)
    account_number = models.CharField(max_length=50)
    branch_name = models.CharField(max_length=255, blank=True)
    swift_code = models.CharField(max_length=20, blank=True)
    is_active = models.BooleanField(default=True)
    is_default = models.BooleanField(default=False)

    class Meta:
        ordering = ['-is_default', '-created_at', '-id']
        constraints = [
            models.UniqueConstraint(
                fields=['is_default'],
                condition=Q(is_default=True),
                name='unique_default_bank',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.bank_name} - {self.account_number}"


class Setting(TimeStampedModel):
    """System-wide configuration.  There is only ever one row, ``pk=1``."""
    SINGLETON_PK = 1

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_PK, editable=False)
    hospital_name = models.CharField(max_length=255, default='SUD EMR System')
    hospital_logo = models.TextField(blank=True, help_text="Base64 data URI or URL")
    address = models.CharField(max_length=500, blank=True, default='')
    phone = models.CharField(max_length=50, blank=True, default='')
    email = models.CharField(max_length=255, blank=True, default='')
    website = models.CharField(max_length=255, blank=True, default='')
    system_version = models.CharField(max_length=50, default='1.0.0')
    report_header = models.TextField(blank=True, default='')
    report_footer = models.TextField(blank=True, default='')
    currency_symbol = models.CharField(max_length=10, default='₦')
    last_updated_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='settings_updates'
    )

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_PK
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"Settings ({self.hospital_name})"


# ---------------------------------------------------------------------------
# Master data: HMOs, charges, clinics
# ---------------------------------------------------------------------------

class HMO(TimeStampedModel):
    CATEGORY_CHOICES = [
        ('Private', 'Private'),
        ('NHIA', 'NHIA'),
        ('State Scheme', 'State Scheme'),
        ('Retainership', 'Retainership'),
        ('Other', 'Other'),
    ]
    name = models.CharField(max_length=255, unique=True)
    code = models.CharField(max_length=50, blank=True)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default='Private')
    description = models.TextField(blank=True)
    active = models.BooleanField(default=True, db_index=True)
    contact_person = models.CharField(max_length=255, blank=True)
    contact_phone = models.CharField(max_length=50, blank=True)
    contact_email = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'HMO'
        verbose_name_plural = 'HMOs'

    def __str__(self) -> str:
        return self.name


CHARGE_TYPE_CHOICES = [
    ('consultation', 'Consultation'),
    ('lab', 'Laboratory'),
    ('radiology', 'Radiology'),
    ('drugs', 'Drugs'),
    ('nursing', 'Nursing'),
    ('other', 'Other'),
]


class Charge(TimeStampedModel):
    """Price master entry with one fee per payer tier."""
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=20, choices=CHARGE_TYPE_CHOICES, db_index=True)
    standard_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    retainership_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    nhia_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    kschma_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    # Single price used before tiered fees existed; still the fallback.
    base_price = models.DecimalField(max_digits=12, decimal_places=2)
    active = models.BooleanField(default=True, db_index=True)
    department = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    code = models.CharField(max_length=50, unique=True, null=True, blank=True)
    result_template = models.TextField(blank=True)

    class Meta:
        ordering = ['type', 'name']

    def __str__(self) -> str:
        return f"{self.name} ({self.type})"


class Clinic(TimeStampedModel):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    department = models.CharField(max_length=255)
    active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


# ---------------------------------------------------------------------------
# Patients & encounters
# ---------------------------------------------------------------------------

class Patient(TimeStampedModel):
    PROVIDER_STANDARD = 'Standard'
    PROVIDER_RETAINERSHIP = 'Retainership'
    PROVIDER_NHIA = 'NHIA'
    PROVIDER_KSCHMA = 'KSCHMA'
    PROVIDER_CHOICES = [
        (PROVIDER_STANDARD, 'Standard'),
        (PROVIDER_RETAINERSHIP, 'Retainership'),
        (PROVIDER_NHIA, 'NHIA'),
        (PROVIDER_KSCHMA, 'KSCHMA'),
    ]
    INSURED_PROVIDERS = (PROVIDER_RETAINERSHIP, PROVIDER_NHIA, PROVIDER_KSCHMA)

    mrn = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=255)
    age = models.PositiveIntegerField()
    gender = models.CharField(max_length=20)
    contact = models.CharField(max_length=50)
    address = models.CharField(max_length=500, blank=True)
    medical_history = models.JSONField(default=list, blank=True)
    allergies = models.JSONField(default=list, blank=True)
    provider = models.CharField(max_length=20, choices=PROVIDER_CHOICES, default=PROVIDER_STANDARD)
    hmo = models.ForeignKey(HMO, null=True, blank=True, on_delete=models.SET_NULL, related_name='patients')
    insurance_number = models.CharField(max_length=100, blank=True)
    deposit_balance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    low_deposit_threshold = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('5000'))
    emergency_contact_name = models.CharField(max_length=255, blank=True)
    emergency_contact_phone = models.CharField(max_length=50, blank=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.mrn})"


class Encounter(TimeStampedModel):
    TYPE_CHOICES = [
        ('Outpatient', 'Outpatient'),
        ('Inpatient', 'Inpatient'),
        ('Emergency', 'Emergency'),
        ('External Investigation', 'External Investigation'),
    ]
    STATUS_CHOICES = [
        ('registered', 'Registered'),
        ('payment_pending', 'Payment pending'),
        ('in_nursing', 'In nursing'),
        ('with_doctor', 'With doctor'),
        ('awaiting_services', 'Awaiting services'),
        ('in_pharmacy', 'In pharmacy'),
        ('checkout', 'Checkout'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='encounters')
    doctor = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='encounters')
    clinic = models.ForeignKey(Clinic, null=True, blank=True, on_delete=models.SET_NULL, related_name='encounters')
    type = models.CharField(max_length=30, choices=TYPE_CHOICES, default='Outpatient')
    encounter_status = models.CharField(max_length=30, choices=STATUS_CHOICES, default='registered')
    reason_for_visit = models.TextField(blank=True)
    payment_validated = models.BooleanField(default=False)
    receipt_number = models.CharField(max_length=32, blank=True)

    def __str__(self) -> str:
        return f"Encounter #{self.pk} ({self.patient_id})"


class EncounterCharge(TimeStampedModel):
    STATUS_PENDING = 'pending'
    STATUS_PAID = 'paid'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PAID, 'Paid'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]
    encounter = models.ForeignKey(Encounter, on_delete=models.CASCADE, related_name='charges')
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='charges')
    charge = models.ForeignKey(Charge, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    patient_portion = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    hmo_portion = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    # Snapshots so claims still read correctly if the price master changes.
    item_type = models.CharField(max_length=50, blank=True)
    item_name = models.CharField(max_length=255, blank=True)
    receipt = models.ForeignKey(
        'Receipt', null=True, blank=True, on_delete=models.SET_NULL, related_name='charges'
    )
    added_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    notes = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"{self.item_name or 'charge'} x{self.quantity} ({self.status})"


# ---------------------------------------------------------------------------
# Receipts
# ---------------------------------------------------------------------------

class Receipt(TimeStampedModel):
    METHOD_CHOICES = [
        ('cash', 'Cash'),
        ('card', 'Card'),
        ('insurance', 'Insurance'),
        ('deposit', 'Deposit'),
        ('retainership', 'Retainership'),
    ]
    receipt_number = models.CharField(max_length=32, unique=True)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='receipts')
    encounter = models.ForeignKey(Encounter, null=True, blank=True, on_delete=models.SET_NULL, related_name='receipts')
    amount_paid = models.DecimalField(max_digits=12, decimal_places=2)
    payment_method = models.CharField(max_length=20, choices=METHOD_CHOICES, default='cash')
    cashier = models.ForeignKey(User, on_delete=models.PROTECT, related_name='receipts_issued')
    payment_date = models.DateTimeField(auto_now_add=True)
    validated = models.BooleanField(default=False)

    def __str__(self) -> str:
        return self.receipt_number


class ReceiptValidation(models.Model):
    """A department confirming it has seen a receipt before rendering service."""
    receipt = models.ForeignKey(Receipt, on_delete=models.CASCADE, related_name='validations')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='+')
    department = models.CharField(max_length=100)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = [('receipt', 'user', 'department')]

    def __str__(self) -> str:
        return f"{self.receipt_id} @ {self.department}"


# ---------------------------------------------------------------------------
# HMO claims & ledger
# ---------------------------------------------------------------------------

class Claim(TimeStampedModel):
    STATUS_PENDING = 'pending'
    STATUS_SUBMITTED = 'submitted'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_PAID = 'paid'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_SUBMITTED, 'Submitted'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
        (STATUS_PAID, 'Paid'),
    ]
    claim_number = models.CharField(max_length=32, unique=True)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='claims')
    hmo = models.ForeignKey(HMO, on_delete=models.PROTECT, related_name='claims')
    encounter = models.OneToOneField(Encounter, on_delete=models.CASCADE, related_name='claim')
    total_claim_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0'))
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    submitted_date = models.DateTimeField(null=True, blank=True)
    approved_date = models.DateTimeField(null=True, blank=True)
    paid_date = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    last_status_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')

    def __str__(self) -> str:
        return f"{self.claim_number} ({self.status})"


class ClaimItem(models.Model):
    claim = models.ForeignKey(Claim, on_delete=models.CASCADE, related_name='items')
    charge = models.ForeignKey(Charge, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    encounter_charge = models.ForeignKey(
        EncounterCharge, null=True, blank=True, on_delete=models.SET_NULL, related_name='claim_items'
    )
    charge_type = models.CharField(max_length=50)
    description = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    patient_portion = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    hmo_portion = models.DecimalField(max_digits=12, decimal_places=2)

    def __str__(self) -> str:
        return f"{self.description} ({self.claim_id})"


class HMOTransaction(TimeStampedModel):
    TYPE_DEPOSIT = 'deposit'
    TYPE_CHARGE = 'charge'
    TYPE_REFUND = 'refund'
    TYPE_CHOICES = [
        (TYPE_DEPOSIT, 'Deposit'),
        (TYPE_CHARGE, 'Charge'),
        (TYPE_REFUND, 'Refund'),
    ]
    hmo = models.ForeignKey(HMO, on_delete=models.CASCADE, related_name='transactions')
    type = models.CharField(max_length=10, choices=TYPE_CHOICES)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    description = models.CharField(max_length=255)
    reference = models.CharField(max_length=100, blank=True)
    recorded_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    date = models.DateTimeField()

    def __str__(self) -> str:
        return f"{self.type} {self.amount} ({self.hmo_id})"


# ---------------------------------------------------------------------------
# Investigations
# ---------------------------------------------------------------------------

class InvestigationOrder(TimeStampedModel):
    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_COMPLETED, 'Completed'),
    ]
    # whoever placed the order; a technician for external investigations
    doctor = models.ForeignKey(User, on_delete=models.PROTECT, related_name='+')
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='+')
    encounter = models.ForeignKey(Encounter, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    charge = models.ForeignKey(EncounterCharge, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    signed_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')

    class Meta:
        abstract = True
        ordering = ['-created_at', '-id']


class LabOrder(InvestigationOrder):
    test_name = models.CharField(max_length=255)
    result = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    signed_at = models.DateTimeField(null=True, blank=True)
    last_modified_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    last_modified_at = models.DateTimeField(null=True, blank=True)
    approved_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    approved_at = models.DateTimeField(null=True, blank=True)

    def __str__(self) -> str:
        return f"Lab #{self.pk} {self.test_name} ({self.status})"


class RadiologyOrder(InvestigationOrder):
    scan_type = models.CharField(max_length=255)
    result_image = models.TextField(blank=True, help_text="URL of the scan image")
    report = models.TextField(blank=True)
    report_date = models.DateTimeField(null=True, blank=True)

    def __str__(self) -> str:
        return f"Radiology #{self.pk} {self.scan_type} ({self.status})"


# ---------------------------------------------------------------------------
# Pharmacy stock
# ---------------------------------------------------------------------------

class InventoryItem(TimeStampedModel):
    UNIT_CHOICES = [
        ('unit', 'Unit'),
        ('sachet', 'Sachet'),
        ('packet', 'Packet'),
    ]
    name = models.CharField(max_length=255, db_index=True)
    pharmacy = models.ForeignKey(Pharmacy, on_delete=models.PROTECT, related_name='inventory')
    quantity = models.IntegerField(default=0)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    expiry_date = models.DateField()
    supplier = models.CharField(max_length=255, blank=True)
    batch_number = models.CharField(max_length=100, blank=True)
    barcode = models.CharField(max_length=100, blank=True)
    reorder_level = models.PositiveIntegerField(default=10)
    route = models.CharField(max_length=50, blank=True)
    form = models.CharField(max_length=50, blank=True)
    dosage = models.CharField(max_length=50, blank=True)
    frequency = models.CharField(max_length=50, blank=True)
    drug_unit = models.CharField(max_length=10, choices=UNIT_CHOICES, default='unit')

    class Meta:
        ordering = ['name']
        indexes = [
            models.Index(fields=['pharmacy', 'name'], name='records_inv_pharmac_5a1c2e_idx'),
        ]

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.reorder_level

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity} @ {self.pharmacy_id}"


class DrugTransfer(TimeStampedModel):
    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_COMPLETED = 'completed'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
        (STATUS_COMPLETED, 'Completed'),
    ]
    drug = models.ForeignKey(InventoryItem, on_delete=models.CASCADE, related_name='transfers')
    from_pharmacy = models.ForeignKey(Pharmacy, on_delete=models.CASCADE, related_name='transfers_out')
    to_pharmacy = models.ForeignKey(Pharmacy, on_delete=models.CASCADE, related_name='transfers_in')
    requested_quantity = models.PositiveIntegerField()
    approved_quantity = models.PositiveIntegerField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    requested_by = models.ForeignKey(User, on_delete=models.PROTECT, related_name='transfers_requested')
    reviewed_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    reviewed_at = models.DateTimeField(null=True, blank=True)
    completed_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    completed_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)
    notes = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"Transfer #{self.pk} {self.drug_id} ({self.status})"


class DrugDisposal(TimeStampedModel):
    TYPE_DESTRUCTION = 'destruction'
    TYPE_RETURN = 'return_to_supplier'
    TYPE_CHOICES = [
        (TYPE_DESTRUCTION, 'Destruction'),
        (TYPE_RETURN, 'Return to supplier'),
    ]
    drug = models.ForeignKey(InventoryItem, on_delete=models.CASCADE, related_name='disposals')
    pharmacy = models.ForeignKey(Pharmacy, on_delete=models.CASCADE, related_name='disposals')
    quantity = models.PositiveIntegerField()
    disposal_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    reason = models.TextField()
    disposed_by = models.ForeignKey(User, on_delete=models.PROTECT, related_name='disposals')
    supplier_return_details = models.JSONField(null=True, blank=True)
    batch_number = models.CharField(max_length=100, blank=True)
    expiry_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"Disposal #{self.pk} {self.drug_id} x{self.quantity}"


# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------

class OperationLog(models.Model):
    ACTION_CHOICES = (
        ("login", "login"),
        ("settings_update", "settings_update"),
        ("bank_set_default", "bank_set_default"),
        ("bank_delete", "bank_delete"),
        ("claim_generate", "claim_generate"),
        ("claim_status", "claim_status"),
        ("receipt_create", "receipt_create"),
        ("receipt_reverse", "receipt_reverse"),
        ("transfer_approve", "transfer_approve"),
        ("transfer_reject", "transfer_reject"),
        ("drug_dispose", "drug_dispose"),
        ("user_toggle_active", "user_toggle_active"),
        ("lab_result", "lab_result"),
        ("lab_approve", "lab_approve"),
        ("radiology_report", "radiology_report"),
    )
    user = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL)
    action = models.CharField(max_length=64, choices=ACTION_CHOICES)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["action", "created_at"], name="records_ope_action_7b3f9d_idx"),
        ]

    def __str__(self):
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
