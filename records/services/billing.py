"""
Encounter billing.

A charge added to an encounter is priced by the patient's payer tier and
split into the part the patient pays at the till and the part billed to
the HMO:

* Standard: the patient pays everything.
* Retainership: the HMO pays everything.
* NHIA / KSCHMA: drugs carry a patient co-pay (10% by default), every
  other service is fully covered by the HMO.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from records.models import Charge, Encounter, EncounterCharge, Patient, User

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
ZERO = Decimal('0')

TIER_FEE_FIELDS = {
    Patient.PROVIDER_STANDARD: 'standard_fee',
    Patient.PROVIDER_RETAINERSHIP: 'retainership_fee',
    Patient.PROVIDER_NHIA: 'nhia_fee',
    Patient.PROVIDER_KSCHMA: 'kschma_fee',
}
DRUG_TYPES = {'drugs', 'drug'}


def quantize(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def drug_copay_rate() -> Decimal:
    return Decimal(str(settings.NHIA_DRUG_COPAY_RATE))


def unit_fee(charge: Charge, provider: str) -> Decimal:
    """Tier fee for ``provider``; falls back to the base price when it is zero."""
    fee = getattr(charge, TIER_FEE_FIELDS.get(provider, 'standard_fee'))
    if not fee and charge.base_price:
        return charge.base_price
    return fee or ZERO


def split_portions(total: Decimal, item_type: str, provider: str) -> Tuple[Decimal, Decimal]:
    """Return ``(patient_portion, hmo_portion)`` for a charge total."""
    total = quantize(total)
    if provider == Patient.PROVIDER_RETAINERSHIP:
        return ZERO, total
    if provider in (Patient.PROVIDER_NHIA, Patient.PROVIDER_KSCHMA):
        if item_type in DRUG_TYPES:
            patient_portion = quantize(total * drug_copay_rate())
            return patient_portion, total - patient_portion
        return ZERO, total
    return total, ZERO


def add_charge(*, encounter: Encounter, charge: Charge, quantity: int = 1,
               notes: str = '', user: Optional[User] = None) -> EncounterCharge:
    patient = encounter.patient
    fee = unit_fee(charge, patient.provider)
    total = quantize(fee * quantity)
    patient_portion, hmo_portion = split_portions(total, charge.type, patient.provider)
    item = EncounterCharge.objects.create(
        encounter=encounter,
        patient=patient,
        charge=charge,
        quantity=quantity,
        unit_price=fee,
        total_amount=total,
        patient_portion=patient_portion,
        hmo_portion=hmo_portion,
        item_type=charge.type,
        item_name=charge.name,
        added_by=user,
        notes=notes or '',
    )
    logger.info('Charge %s (%s x%s = %s) added to encounter %s',
                charge.pk, charge.name, quantity, total, encounter.pk)
    return item


def _ensure_pending(item: EncounterCharge, verb: str) -> None:
    if item.status != EncounterCharge.STATUS_PENDING:
        raise ValidationError(f'Cannot {verb} a processed charge')


def update_charge(item: EncounterCharge, data: dict) -> EncounterCharge:
    _ensure_pending(item, 'update')
    if 'quantity' in data:
        item.quantity = data['quantity']
        item.total_amount = quantize(item.unit_price * item.quantity)
        item.patient_portion, item.hmo_portion = split_portions(
            item.total_amount, item.item_type, item.patient.provider
        )
    if 'notes' in data:
        item.notes = data['notes']
    item.save()
    return item


def delete_charge(item: EncounterCharge) -> None:
    _ensure_pending(item, 'delete')
    item.delete()


def create_encounter(*, patient: Patient, user: Optional[User], data: dict) -> Encounter:
    """Open an encounter; a patient gets at most one per calendar day."""
    today = timezone.localdate()
    with transaction.atomic():
        Patient.objects.select_for_update().filter(pk=patient.pk).first()
        if Encounter.objects.filter(patient=patient, created_at__date=today).exists():
            raise ValidationError('An encounter already exists for this patient today.')
        data.setdefault('doctor', user)
        encounter = Encounter.objects.create(patient=patient, **data)
    logger.info('Encounter %s opened for patient %s', encounter.pk, patient.pk)
    return encounter
