"""
HMO claims.

A claim bundles the HMO-payable portions of one encounter's charges.  It
can be generated on demand for any insured patient, and is generated or
extended automatically when an NHIA / KSCHMA patient pays at the till.
"""
import logging
from decimal import Decimal
from typing import Iterable, Optional

from django.db import transaction
from django.db.models import Count, Sum
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from records.models import HMO, Claim, ClaimItem, Encounter, EncounterCharge, Patient, User
from records.services.audit import log_action
from records.services.formatting import money
from records.services.numbering import generate_claim_number

logger = logging.getLogger(__name__)

STATUS_VALUES = [value for value, _ in Claim.STATUS_CHOICES]
STATUS_DATE_FIELDS = {
    Claim.STATUS_SUBMITTED: 'submitted_date',
    Claim.STATUS_APPROVED: 'approved_date',
    Claim.STATUS_PAID: 'paid_date',
}
AUTO_CLAIM_PROVIDERS = (Patient.PROVIDER_NHIA, Patient.PROVIDER_KSCHMA)


def _claim_item(ec: EncounterCharge) -> ClaimItem:
    charge = ec.charge
    return ClaimItem(
        charge=charge,
        encounter_charge=ec,
        charge_type=(charge.type if charge else ec.item_type) or 'service',
        description=(charge.name if charge else ec.item_name) or 'Service',
        quantity=ec.quantity or 1,
        unit_price=ec.unit_price or ec.total_amount,
        total_amount=ec.total_amount,
        patient_portion=ec.patient_portion,
        hmo_portion=ec.hmo_portion,
    )


def _create_claim(encounter: Encounter, hmo: HMO, items: list) -> Claim:
    claim = Claim.objects.create(
        claim_number=generate_claim_number(),
        patient=encounter.patient,
        hmo=hmo,
        encounter=encounter,
        total_claim_amount=sum((i.hmo_portion for i in items), Decimal('0')),
        status=Claim.STATUS_PENDING,
    )
    for item in items:
        item.claim = claim
    ClaimItem.objects.bulk_create(items)
    return claim


def generate_for_encounter(encounter: Encounter, user: Optional[User] = None) -> Claim:
    patient = encounter.patient
    if patient.provider not in Patient.INSURED_PROVIDERS:
        raise ValidationError('Claims can only be generated for Retainership, NHIA or KSCHMA patients')
    if patient.hmo_id is None:
        raise ValidationError('Patient does not have an HMO assigned')
    with transaction.atomic():
        if Claim.objects.select_for_update().filter(encounter=encounter).exists():
            raise ValidationError('Claim already exists for this encounter')
        charges = (EncounterCharge.objects.select_related('charge')
                   .filter(encounter=encounter)
                   .exclude(status=EncounterCharge.STATUS_CANCELLED)
                   .order_by('id'))
        claim = _create_claim(encounter, patient.hmo, [_claim_item(ec) for ec in charges])
    logger.info('Claim %s generated for encounter %s (%s)',
                claim.claim_number, encounter.pk, claim.total_claim_amount)
    log_action(user=user, action='claim_generate', object_type='claim', object_id=claim.pk,
               detail={'encounter': encounter.pk, 'amount': money(claim.total_claim_amount)})
    return claim


def record_paid_charges(encounter: Encounter, charges: Iterable[EncounterCharge]) -> Optional[Claim]:
    """Add the HMO-payable part of just-paid charges to the encounter's claim.

    Only NHIA and KSCHMA patients with an HMO are claimed automatically.
    Returns the created or extended claim, or ``None`` when nothing was
    claimable.
    """
    patient = encounter.patient
    if patient.provider not in AUTO_CLAIM_PROVIDERS or patient.hmo_id is None:
        return None
    items = [_claim_item(ec) for ec in charges if ec.hmo_portion > 0]
    if not items:
        logger.info('No HMO portion on paid charges for encounter %s; no claim', encounter.pk)
        return None
    with transaction.atomic():
        claim = Claim.objects.select_for_update().filter(encounter=encounter).first()
        if claim is None:
            claim = _create_claim(encounter, patient.hmo, items)
            logger.info('Claim %s auto-generated for encounter %s', claim.claim_number, encounter.pk)
            return claim
        for item in items:
            item.claim = claim
        ClaimItem.objects.bulk_create(items)
        claim.total_claim_amount += sum((i.hmo_portion for i in items), Decimal('0'))
        claim.save(update_fields=['total_claim_amount', 'updated_at'])
    logger.info('Claim %s extended with %d items, total %s',
                claim.claim_number, len(items), claim.total_claim_amount)
    return claim


def filter_claims(params):
    qs = Claim.objects.select_related('patient', 'hmo', 'last_status_by').prefetch_related('items')
    if params.get('hmo'):
        qs = qs.filter(hmo_id=params['hmo'])
    if params.get('status'):
        qs = qs.filter(status=params['status'])
    if params.get('startDate'):
        qs = qs.filter(created_at__date__gte=params['startDate'])
    if params.get('endDate'):
        qs = qs.filter(created_at__date__lte=params['endDate'])
    return qs.order_by('-created_at', '-id')


def summarize(qs) -> dict:
    totals = qs.aggregate(count=Count('id'), amount=Sum('total_claim_amount'))
    by_status = {status: 0 for status in STATUS_VALUES}
    for row in qs.order_by().values('status').annotate(count=Count('id')):
        by_status[row['status']] = row['count']
    by_hmo = {}
    for row in qs.order_by().values('hmo__name').annotate(count=Count('id'), amount=Sum('total_claim_amount')):
        by_hmo[row['hmo__name']] = {'count': row['count'], 'totalAmount': money(row['amount'])}
    return {
        'totalClaims': totals['count'],
        'totalClaimAmount': money(totals['amount'] or Decimal('0')),
        'byStatus': by_status,
        'byHMO': by_hmo,
    }


def update_status(claim: Claim, *, status: str, user: Optional[User],
                  rejection_reason: Optional[str] = None, notes: Optional[str] = None) -> Claim:
    if status not in STATUS_VALUES:
        raise ValidationError('Invalid status')
    if status == Claim.STATUS_REJECTED and not (rejection_reason or '').strip():
        raise ValidationError('Rejection reason is required when rejecting a claim')
    previous = claim.status
    claim.status = status
    date_field = STATUS_DATE_FIELDS.get(status)
    if date_field and getattr(claim, date_field) is None:
        setattr(claim, date_field, timezone.now())
    if status == Claim.STATUS_REJECTED:
        claim.rejection_reason = rejection_reason.strip()
    if notes is not None:
        claim.notes = notes
    claim.last_status_by = user
    claim.save()
    logger.info('Claim %s: %s -> %s', claim.claim_number, previous, status)
    log_action(user=user, action='claim_status', object_type='claim', object_id=claim.pk,
               detail={'from': previous, 'to': status})
    return claim


def claims_for_hmo(hmo_id):
    return filter_claims({'hmo': hmo_id})
