from decimal import Decimal

import pytest
from django.urls import reverse

from records.models import EncounterCharge, Patient
from records.services import billing

pytestmark = pytest.mark.django_db


def test_split_portions_by_provider():
    total = Decimal('2000')
    assert billing.split_portions(total, 'consultation', Patient.PROVIDER_STANDARD) == (total, Decimal('0'))
    assert billing.split_portions(total, 'drugs', Patient.PROVIDER_RETAINERSHIP) == (Decimal('0'), total)
    assert billing.split_portions(total, 'lab', Patient.PROVIDER_NHIA) == (Decimal('0'), total)
    assert billing.split_portions(total, 'drugs', Patient.PROVIDER_KSCHMA) == (Decimal('200.00'), Decimal('1800.00'))


def test_unit_fee_falls_back_to_base_price(paracetamol, consultation):
    assert billing.unit_fee(paracetamol, Patient.PROVIDER_STANDARD) == Decimal('1200')
    assert billing.unit_fee(paracetamol, Patient.PROVIDER_NHIA) == Decimal('1000')
    assert billing.unit_fee(consultation, Patient.PROVIDER_RETAINERSHIP) == Decimal('4500')


def test_add_charge_prices_by_tier(cashier_client, make_patient, hmo, encounter_for, paracetamol):
    patient = make_patient(provider=Patient.PROVIDER_NHIA, hmo=hmo)
    encounter = encounter_for(patient)
    resp = cashier_client.post(reverse('encounter-charges'),
                               {'encounterId': encounter.id, 'chargeId': paracetamol.id, 'quantity': 2},
                               format='json')
    assert resp.status_code == 201
    item = EncounterCharge.objects.get(pk=resp.data['id'])
    assert item.unit_price == Decimal('1000')
    assert item.total_amount == Decimal('2000')
    assert item.patient_portion == Decimal('200.00')
    assert item.hmo_portion == Decimal('1800.00')
    assert item.status == EncounterCharge.STATUS_PENDING


def test_update_recomputes_portions_and_locks_paid_charges(cashier_client, make_patient, encounter_for,
                                                           consultation):
    encounter = encounter_for(make_patient())
    item = billing.add_charge(encounter=encounter, charge=consultation)
    resp = cashier_client.put(reverse('encounter-charge-detail', args=[item.id]), {'quantity': 3}, format='json')
    assert resp.status_code == 200
    item.refresh_from_db()
    assert item.total_amount == Decimal('15000')
    assert item.patient_portion == Decimal('15000')

    EncounterCharge.objects.filter(pk=item.pk).update(status=EncounterCharge.STATUS_PAID)
    resp = cashier_client.delete(reverse('encounter-charge-detail', args=[item.id]))
    assert resp.status_code == 400
    assert resp.data['message'] == 'Cannot delete a processed charge'


def test_one_encounter_per_patient_per_day(cashier_client, make_patient):
    patient = make_patient()
    first = cashier_client.post(reverse('encounters'), {'patientId': patient.id}, format='json')
    assert first.status_code == 201
    assert first.data['encounterStatus'] == 'registered'
    second = cashier_client.post(reverse('encounters'), {'patientId': patient.id}, format='json')
    assert second.status_code == 400
    assert 'already exists' in second.data['message']


def test_patient_registration_and_deposit(cashier_client, hmo):
    resp = cashier_client.post(reverse('patients'), {
        'name': 'Musa Bello', 'age': 41, 'gender': 'M', 'contact': '08031111111',
        'provider': 'NHIA', 'hmoId': hmo.id,
    }, format='json')
    assert resp.status_code == 201
    assert resp.data['mrn'].startswith('PAT-')
    assert resp.data['hmo']['name'] == 'Hygeia'
    pid = resp.data['id']

    resp = cashier_client.post(reverse('patient-deposit', args=[pid]), {'amount': '7500'}, format='json')
    assert resp.status_code == 200
    assert resp.data['balance'] == 7500.0
    status = cashier_client.get(reverse('patient-deposit', args=[pid])).data
    assert status == {'balance': 7500.0, 'threshold': 5000.0, 'isLow': False}

    resp = cashier_client.post(reverse('patient-deposit', args=[pid]), {'amount': '0'}, format='json')
    assert resp.status_code == 400


def test_zero_deposit_threshold_is_respected(cashier_client, make_patient):
    patient = make_patient(deposit='100')
    resp = cashier_client.put(reverse('patient-detail', args=[patient.id]),
                              {'lowDepositThreshold': '0'}, format='json')
    assert resp.status_code == 200
    patient.refresh_from_db()
    assert patient.low_deposit_threshold == Decimal('0')

    status = cashier_client.get(reverse('patient-deposit', args=[patient.id])).data
    assert status['threshold'] == 0
    assert status['isLow'] is False


def test_patient_with_unknown_hmo_is_404(cashier_client):
    resp = cashier_client.post(reverse('patients'), {
        'name': 'Musa Bello', 'age': 41, 'gender': 'M', 'contact': '08031111111', 'hmoId': 999,
    }, format='json')
    assert resp.status_code == 404
    assert resp.data['message'] == 'HMO not found'
    assert not Patient.objects.exists()
