import logging
from decimal import Decimal
from typing import Any, Dict

from django.conf import settings
from django.db import transaction
from django.db.models import F

from records.models import Patient
from records.services.formatting import money
from records.services.numbering import generate_mrn

logger = logging.getLogger(__name__)


def register_patient(data: Dict[str, Any]) -> Patient:
    mrn = generate_mrn()
    while Patient.objects.filter(mrn=mrn).exists():
        mrn = generate_mrn()
    patient = Patient.objects.create(mrn=mrn, **data)
    logger.info('Patient %s registered (%s)', patient.pk, mrn)
    return patient


def add_deposit(patient: Patient, amount: Decimal) -> Patient:
    with transaction.atomic():
        Patient.objects.filter(pk=patient.pk).update(deposit_balance=F('deposit_balance') + amount)
        patient.refresh_from_db()
    logger.info('Deposit of %s added for patient %s; balance %s', amount, patient.pk, patient.deposit_balance)
    return patient


def deposit_status(patient: Patient) -> dict:
    balance = patient.deposit_balance
    threshold = patient.low_deposit_threshold
    return {
        'balance': money(balance),
        'threshold': money(threshold),
        'isLow': balance < threshold,
    }


def recent_patients():
    return Patient.objects.select_related('hmo').order_by('-updated_at', '-id')[:settings.RECENT_PATIENTS_LIMIT]
