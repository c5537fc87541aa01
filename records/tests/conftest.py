from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.core.cache import cache

from records.models import HMO, Charge, Encounter, InventoryItem, Patient, Pharmacy, User

from .helpers import client_for, make_user


@pytest.fixture(autouse=True)
def _reset_throttles():
    # throttle counters live in the cache
    cache.clear()
    yield


@pytest.fixture
def admin_user(db):
    return make_user('admin@example.com', User.ROLE_ADMIN)


@pytest.fixture
def cashier(db):
    return make_user('cashier@example.com', User.ROLE_CASHIER)


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user)


@pytest.fixture
def cashier_client(cashier):
    return client_for(cashier)


@pytest.fixture
def hmo(db):
    return HMO.objects.create(name='Hygeia', category='NHIA', contact_person='Ada')


@pytest.fixture
def make_patient(db):
    def _make(provider=Patient.PROVIDER_STANDARD, hmo=None, deposit='0', **extra):
        n = Patient.objects.count() + 1
        return Patient.objects.create(
            mrn=f'PAT-000000-{1000 + n}', name=extra.pop('name', f'Patient {n}'), age=30,
            gender='F', contact='08030000000', provider=provider, hmo=hmo,
            deposit_balance=Decimal(deposit), **extra,
        )
    return _make


@pytest.fixture
def consultation(db):
    return Charge.objects.create(name='GP Consultation', type='consultation', department='OPD',
                                 standard_fee=Decimal('5000'), nhia_fee=Decimal('4000'),
                                 retainership_fee=Decimal('4500'), base_price=Decimal('5000'))


@pytest.fixture
def paracetamol(db):
    return Charge.objects.create(name='Paracetamol', type='drugs', department='Pharmacy',
                                 nhia_fee=Decimal('1000'), base_price=Decimal('1200'))


@pytest.fixture
def encounter_for(db):
    def _make(patient, user=None):
        return Encounter.objects.create(patient=patient, doctor=user)
    return _make


@pytest.fixture
def main_pharmacy(db):
    return Pharmacy.objects.create(name='Main Pharmacy', is_main_pharmacy=True)


@pytest.fixture
def branch_pharmacy(db):
    return Pharmacy.objects.create(name='OPD Pharmacy')


@pytest.fixture
def stock(main_pharmacy):
    return InventoryItem.objects.create(
        name='Amoxicillin 500mg', pharmacy=main_pharmacy, quantity=100, price=Decimal('50'),
        expiry_date=date.today() + timedelta(days=365), batch_number='B-001',
    )
