"""
HMO account ledger.

HMOs pre-fund the hospital with deposits.  Every HMO-payable portion of
an encounter charge for one of the HMO's patients is a debit against
that money, as is any manual charge or refund entry.
"""
import logging
from decimal import Decimal
from typing import Optional

from django.db.models import Sum
from django.utils import timezone

from records.models import HMO, EncounterCharge, HMOTransaction, User
from records.services.formatting import iso, money

logger = logging.getLogger(__name__)

ZERO = Decimal('0')


def record_deposit(*, hmo: HMO, amount: Decimal, user: Optional[User],
                   description: str = '', reference: str = '', date=None) -> HMOTransaction:
    tx = HMOTransaction.objects.create(
        hmo=hmo,
        type=HMOTransaction.TYPE_DEPOSIT,
        amount=amount,
        description=description or 'Deposit',
        reference=reference or '',
        recorded_by=user,
        date=date or timezone.now(),
    )
    logger.info('HMO %s deposit of %s recorded', hmo.pk, amount)
    return tx


def _service_debits(hmo: HMO):
    return (EncounterCharge.objects
            .select_related('patient', 'encounter')
            .filter(patient__hmo=hmo, hmo_portion__gt=0))


def totals(hmo: HMO) -> dict:
    deposits = (HMOTransaction.objects.filter(hmo=hmo, type=HMOTransaction.TYPE_DEPOSIT)
                .aggregate(total=Sum('amount'))['total'] or ZERO)
    other_debits = (HMOTransaction.objects.filter(hmo=hmo).exclude(type=HMOTransaction.TYPE_DEPOSIT)
                    .aggregate(total=Sum('amount'))['total'] or ZERO)
    services = _service_debits(hmo).aggregate(total=Sum('hmo_portion'))['total'] or ZERO
    charges = services + other_debits
    return {'totalDeposits': deposits, 'totalCharges': charges, 'balance': deposits - charges}


def balance(hmo: HMO) -> Decimal:
    return totals(hmo)['balance']


def statement(hmo: HMO) -> dict:
    entries = []
    for tx in HMOTransaction.objects.filter(hmo=hmo):
        is_credit = tx.type == HMOTransaction.TYPE_DEPOSIT
        entries.append({
            'id': f'tx-{tx.id}',
            'date': tx.date,
            'type': tx.get_type_display(),
            'description': tx.description,
            'reference': tx.reference,
            'amount': money(tx.amount),
            'isCredit': is_credit,
            'patientName': '-',
        })
    for charge in _service_debits(hmo):
        entries.append({
            'id': f'charge-{charge.id}',
            'date': charge.created_at,
            'type': 'Service',
            'description': charge.item_name or charge.item_type,
            'reference': charge.encounter.type if charge.encounter_id else 'Encounter',
            'amount': money(charge.hmo_portion),
            'isCredit': False,
            'patientName': charge.patient.name,
        })
    entries.sort(key=lambda e: e['date'], reverse=True)
    for entry in entries:
        entry['date'] = iso(entry['date'])
    summary = totals(hmo)
    return {
        'hmo': {
            'id': hmo.id,
            'name': hmo.name,
            'category': hmo.category,
            'contactPerson': hmo.contact_person,
        },
        'summary': {key: money(value) for key, value in summary.items()},
        'transactions': entries,
    }
