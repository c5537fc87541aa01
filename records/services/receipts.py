"""
Cashier payments.

Paying a set of pending encounter charges issues one receipt, marks the
charges paid and releases the encounter to nursing.  Deposit and
retainership payments draw on the patient's deposit and the HMO ledger
respectively, and insured patients get their claim updated.
"""
import logging
from decimal import Decimal
from typing import Iterable, Optional

from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from records.models import Claim, Encounter, EncounterCharge, Patient, Receipt, ReceiptValidation, User
from records.services import claims as claim_service
from records.services import hmo_ledger
from records.services.audit import log_action
from records.services.formatting import money
from records.services.numbering import generate_receipt_number

logger = logging.getLogger(__name__)

ZERO = Decimal('0')


def _unique_receipt_number() -> str:
    number = generate_receipt_number()
    while Receipt.objects.filter(receipt_number=number).exists():
        number = generate_receipt_number()
    return number


def _deposit_debit(patient: Patient, total: Decimal) -> None:
    if patient.deposit_balance < total:
        raise ValidationError(
            f'Insufficient deposit balance. Balance: {money(patient.deposit_balance):,.2f}, '
            f'Required: {money(total):,.2f}'
        )
    patient.deposit_balance -= total
    patient.save(update_fields=['deposit_balance', 'updated_at'])


def _retainership_debit(patient: Patient, charges: list, total: Decimal) -> None:
    if patient.provider != Patient.PROVIDER_RETAINERSHIP:
        raise ValidationError('Patient is not a Retainership patient')
    if patient.hmo_id is None:
        raise ValidationError('Patient does not have an HMO assigned')
    # These charges may already carry an HMO portion; don't count them twice.
    already_counted = sum((c.hmo_portion for c in charges), ZERO)
    available = hmo_ledger.balance(patient.hmo) + already_counted
    if available < total:
        raise ValidationError(
            f'Insufficient HMO Retainership balance. Balance: {money(available):,.2f}, '
            f'Required: {money(total):,.2f}'
        )
    for charge in charges:
        charge.hmo_portion = charge.total_amount
        charge.patient_portion = ZERO


def pay_encounter_charges(*, encounter: Encounter, charge_ids: Iterable[int],
                          payment_method: str, user: User) -> Receipt:
    charge_ids = set(charge_ids)
    with transaction.atomic():
        charges = list(EncounterCharge.objects.select_for_update()
                       .select_related('charge')
                       .filter(pk__in=charge_ids, encounter=encounter)
                       .order_by('id'))
        if not charges:
            raise NotFound('No charges found')
        if len(charges) != len(charge_ids):
            raise ValidationError('Some charges do not belong to this encounter')
        if any(c.status != EncounterCharge.STATUS_PENDING for c in charges):
            raise ValidationError('Some charges have already been paid or cancelled')

        total = sum((c.total_amount for c in charges), ZERO)
        patient = Patient.objects.select_for_update().select_related('hmo').get(pk=encounter.patient_id)
        if payment_method == 'deposit':
            _deposit_debit(patient, total)
        elif payment_method == 'retainership':
            _retainership_debit(patient, charges, total)

        amount_paid = total
        if payment_method == 'insurance':
            amount_paid = sum((c.patient_portion for c in charges), ZERO)

        receipt = Receipt.objects.create(
            receipt_number=_unique_receipt_number(),
            patient=patient,
            encounter=encounter,
            amount_paid=amount_paid,
            payment_method=payment_method,
            cashier=user,
        )
        for charge in charges:
            charge.status = EncounterCharge.STATUS_PAID
            charge.receipt = receipt
            charge.save(update_fields=['status', 'receipt', 'hmo_portion', 'patient_portion', 'updated_at'])

        encounter.payment_validated = True
        encounter.receipt_number = receipt.receipt_number
        encounter.encounter_status = 'in_nursing'
        encounter.save(update_fields=['payment_validated', 'receipt_number', 'encounter_status', 'updated_at'])

    logger.info('Receipt %s issued for encounter %s: %s via %s',
                receipt.receipt_number, encounter.pk, amount_paid, payment_method)
    log_action(user=user, action='receipt_create', object_type='receipt', object_id=receipt.pk,
               detail={'amount': money(amount_paid), 'method': payment_method})

    encounter.patient = patient
    try:
        claim_service.record_paid_charges(encounter, charges)
    except Exception:
        logger.exception('Automatic claim update failed for encounter %s', encounter.pk)
    return receipt


def validate_receipt(*, receipt_number: str, department: str, user: User) -> Receipt:
    receipt = Receipt.objects.filter(receipt_number=receipt_number).first()
    if receipt is None:
        raise NotFound('Receipt not found')
    _, created = ReceiptValidation.objects.get_or_create(receipt=receipt, user=user, department=department)
    if created and not receipt.validated:
        receipt.validated = True
        receipt.save(update_fields=['validated', 'updated_at'])
    return receipt


def reverse_receipt(receipt: Receipt, *, user: Optional[User]) -> dict:
    """Undo a payment and delete its receipt.

    Deposit payments go back to the patient's deposit balance; the charges
    return to pending so they can be paid again.
    """
    deposit_restored = receipt.payment_method == 'deposit'
    amount = receipt.amount_paid
    number = receipt.receipt_number
    with transaction.atomic():
        if deposit_restored:
            patient = Patient.objects.select_for_update().get(pk=receipt.patient_id)
            patient.deposit_balance += amount
            patient.save(update_fields=['deposit_balance', 'updated_at'])
        receipt.charges.update(status=EncounterCharge.STATUS_PENDING, receipt=None)
        if receipt.encounter_id:
            Encounter.objects.filter(pk=receipt.encounter_id, receipt_number=number).update(
                payment_validated=False, receipt_number=''
            )
        receipt.delete()
    logger.info('Receipt %s reversed (%s, deposit restored: %s)', number, amount, deposit_restored)
    log_action(user=user, action='receipt_reverse', object_type='receipt', object_id=number,
               detail={'amount': money(amount), 'depositRestored': deposit_restored})
    return {
        'message': 'Payment reversed successfully',
        'amountReversed': money(amount),
        'depositRestored': deposit_restored,
    }


def claim_status_for(receipt: Receipt):
    if not receipt.encounter_id:
        return None
    claim = Claim.objects.filter(encounter_id=receipt.encounter_id).first()
    if claim is None:
        return None
    return {
        'claimNumber': claim.claim_number,
        'status': claim.status,
        'totalClaimAmount': money(claim.total_claim_amount),
    }
