from decimal import Decimal

import pytest
from django.urls import reverse

from records.models import Claim, Encounter, EncounterCharge, OperationLog, Patient, Receipt
from records.services import billing, hmo_ledger

pytestmark = pytest.mark.django_db


def pay(client, encounter, charges, method):
    return client.post(reverse('receipts-pay-encounter'), {
        'encounterId': encounter.id,
        'chargeIds': [c.id for c in charges],
        'paymentMethod': method,
    }, format='json')


def test_deposit_payment_and_reversal(cashier_client, admin_user, make_patient, encounter_for, consultation):
    patient = make_patient(deposit='8000')
    encounter = encounter_for(patient)
    item = billing.add_charge(encounter=encounter, charge=consultation)

    resp = pay(cashier_client, encounter, [item], 'deposit')
    assert resp.status_code == 201
    assert resp.data['receiptNumber'].startswith('RCP-')
    assert resp.data['amountPaid'] == 5000.0
    assert [c['id'] for c in resp.data['charges']] == [item.id]
    patient.refresh_from_db()
    assert patient.deposit_balance == Decimal('3000')
    encounter.refresh_from_db()
    assert encounter.payment_validated
    assert encounter.encounter_status == 'in_nursing'

    # already paid
    assert pay(cashier_client, encounter, [item], 'cash').status_code == 400

    resp = cashier_client.post(reverse('receipt-reverse', args=[resp.data['id']]))
    assert resp.status_code == 200
    assert resp.data == {'message': 'Payment reversed successfully', 'amountReversed': 5000.0,
                         'depositRestored': True}
    patient.refresh_from_db()
    assert patient.deposit_balance == Decimal('8000')
    item.refresh_from_db()
    assert item.status == EncounterCharge.STATUS_PENDING
    assert item.receipt is None
    assert not Receipt.objects.exists()
    assert not Encounter.objects.get(pk=encounter.pk).payment_validated
    assert OperationLog.objects.filter(action='receipt_reverse').count() == 1


def test_deposit_payment_needs_enough_balance(cashier_client, make_patient, encounter_for, consultation):
    patient = make_patient(deposit='1000')
    encounter = encounter_for(patient)
    item = billing.add_charge(encounter=encounter, charge=consultation)
    resp = pay(cashier_client, encounter, [item], 'deposit')
    assert resp.status_code == 400
    assert resp.data['message'].startswith('Insufficient deposit balance')
    item.refresh_from_db()
    assert item.status == EncounterCharge.STATUS_PENDING
    assert not Receipt.objects.exists()


def test_charges_from_another_encounter_are_rejected(cashier_client, make_patient, encounter_for, consultation):
    first = encounter_for(make_patient())
    other = encounter_for(make_patient())
    mine = billing.add_charge(encounter=first, charge=consultation)
    theirs = billing.add_charge(encounter=other, charge=consultation)
    resp = pay(cashier_client, first, [mine, theirs], 'cash')
    assert resp.status_code == 400
    assert resp.data['message'] == 'Some charges do not belong to this encounter'


def test_insurance_payment_auto_generates_claim(cashier_client, make_patient, hmo, encounter_for,
                                               consultation, paracetamol):
    patient = make_patient(provider=Patient.PROVIDER_NHIA, hmo=hmo)
    encounter = encounter_for(patient)
    visit = billing.add_charge(encounter=encounter, charge=consultation)
    drug = billing.add_charge(encounter=encounter, charge=paracetamol, quantity=2)

    resp = pay(cashier_client, encounter, [visit, drug], 'insurance')
    assert resp.status_code == 201
    assert resp.data['amountPaid'] == 200.0

    claim = Claim.objects.get(encounter=encounter)
    assert claim.total_claim_amount == Decimal('5800')
    assert claim.items.count() == 2
    assert claim.claim_number.startswith('CLM-')

    listing = cashier_client.get(reverse('receipts-claim-status')).data
    assert listing[0]['claimStatus']['claimNumber'] == claim.claim_number


def test_validate_receipt_records_each_department_once(cashier_client, make_patient, encounter_for, consultation):
    encounter = encounter_for(make_patient())
    item = billing.add_charge(encounter=encounter, charge=consultation)
    number = pay(cashier_client, encounter, [item], 'cash').data['receiptNumber']

    for _ in range(2):
        resp = cashier_client.post(reverse('receipts-validate'),
                                   {'receiptNumber': number, 'department': 'Laboratory'}, format='json')
        assert resp.status_code == 200
        assert resp.data['valid'] is True
    assert len(resp.data['receipt']['validatedBy']) == 1

    resp = cashier_client.post(reverse('receipts-validate'),
                               {'receiptNumber': 'RCP-000000-0000', 'department': 'Laboratory'}, format='json')
    assert resp.status_code == 404


def test_retainership_payment_draws_on_hmo_balance(cashier_client, admin_user, make_patient, hmo,
                                                   encounter_for, consultation):
    hmo_ledger.record_deposit(hmo=hmo, amount=Decimal('10000'), user=admin_user)
    patient = make_patient(provider=Patient.PROVIDER_RETAINERSHIP, hmo=hmo)
    encounter = encounter_for(patient)
    item = billing.add_charge(encounter=encounter, charge=consultation)
    assert item.hmo_portion == Decimal('4500')

    resp = pay(cashier_client, encounter, [item], 'retainership')
    assert resp.status_code == 201
    assert hmo_ledger.balance(hmo) == Decimal('5500')

    big = billing.add_charge(encounter=encounter, charge=consultation, quantity=2)
    resp = pay(cashier_client, encounter, [big], 'retainership')
    assert resp.status_code == 400
    assert 'Insufficient HMO Retainership balance' in resp.data['message']


def test_hmo_statement(admin_client, admin_user, make_patient, hmo, encounter_for, consultation):
    resp = admin_client.post(reverse('hmo-deposit'),
                             {'hmoId': hmo.id, 'amount': '20000', 'reference': 'TRF-1'}, format='json')
    assert resp.status_code == 201
    patient = make_patient(provider=Patient.PROVIDER_NHIA, hmo=hmo, name='Amina')
    billing.add_charge(encounter=encounter_for(patient), charge=consultation)

    data = admin_client.get(reverse('hmo-statement', args=[hmo.id])).data
    assert data['summary'] == {'totalDeposits': 20000.0, 'totalCharges': 4000.0, 'balance': 16000.0}
    assert len(data['transactions']) == 2
    service = [t for t in data['transactions'] if not t['isCredit']][0]
    assert service['patientName'] == 'Amina'
    assert service['amount'] == 4000.0


def test_generate_claim_once_per_encounter(cashier_client, make_patient, hmo, encounter_for, consultation):
    patient = make_patient(provider=Patient.PROVIDER_NHIA, hmo=hmo)
    encounter = encounter_for(patient)
    billing.add_charge(encounter=encounter, charge=consultation)

    resp = cashier_client.post(reverse('claims-generate', args=[encounter.id]))
    assert resp.status_code == 201
    assert resp.data['status'] == 'pending'
    assert resp.data['totalClaimAmount'] == 4000.0
    assert len(resp.data['claimItems']) == 1

    resp = cashier_client.post(reverse('claims-generate', args=[encounter.id]))
    assert resp.status_code == 400
    assert resp.data['message'] == 'Claim already exists for this encounter'


def test_generate_claim_requires_insured_patient(cashier_client, make_patient, encounter_for):
    encounter = encounter_for(make_patient())
    resp = cashier_client.post(reverse('claims-generate', args=[encounter.id]))
    assert resp.status_code == 400
    assert not Claim.objects.exists()


def test_claim_status_transitions(cashier_client, cashier, make_patient, hmo, encounter_for, consultation):
    encounter = encounter_for(make_patient(provider=Patient.PROVIDER_NHIA, hmo=hmo))
    billing.add_charge(encounter=encounter, charge=consultation)
    claim_id = cashier_client.post(reverse('claims-generate', args=[encounter.id])).data['id']
    url = reverse('claim-status', args=[claim_id])

    resp = cashier_client.put(url, {'status': 'lost'}, format='json')
    assert resp.status_code == 400
    assert resp.data['message'] == 'Invalid status'

    resp = cashier_client.put(url, {'status': 'rejected'}, format='json')
    assert resp.status_code == 400
    assert Claim.objects.get(pk=claim_id).status == 'pending'

    resp = cashier_client.put(url, {'status': 'submitted', 'notes': 'Batch 4'}, format='json')
    assert resp.status_code == 200
    assert resp.data['submittedDate'] is not None
    assert resp.data['notes'] == 'Batch 4'
    assert resp.data['lastStatusBy']['id'] == cashier.id

    resp = cashier_client.put(url, {'status': 'rejected', 'rejectionReason': 'No referral'}, format='json')
    assert resp.status_code == 200
    assert resp.data['rejectionReason'] == 'No referral'
    assert resp.data['notes'] == 'Batch 4'

    summary = cashier_client.get(reverse('claims-summary')).data
    assert summary['totalClaims'] == 1
    assert summary['byStatus']['rejected'] == 1
    assert summary['byStatus']['paid'] == 0
    assert summary['byHMO']['Hygeia'] == {'count': 1, 'totalAmount': 4000.0}
