import pytest
from django.urls import reverse

from records.models import HMO, Charge, Clinic

pytestmark = pytest.mark.django_db


def test_hmo_names_are_unique_and_delete_is_soft(admin_client):
    r = admin_client.post(reverse('hmos'), {'name': 'AXA Mansard'}, format='json')
    assert r.status_code == 201
    assert r.data['category'] == 'Private'
    hmo_id = r.data['id']

    dup = admin_client.post(reverse('hmos'), {'name': 'axa mansard'}, format='json')
    assert dup.status_code == 400
    assert dup.data['message'] == 'HMO with this name already exists'

    assert admin_client.delete(reverse('hmo-detail', args=[hmo_id])).status_code == 200
    assert HMO.objects.get(pk=hmo_id).active is False
    assert admin_client.get(reverse('hmos'), {'active': 'true'}).data == []

    r = admin_client.patch(reverse('hmo-toggle-status', args=[hmo_id]))
    assert r.data['active'] is True


def test_charge_merge_keeps_explicit_zero(admin_client):
    r = admin_client.post(reverse('charges'), {
        'name': 'FBC', 'type': 'lab', 'department': 'Laboratory', 'basePrice': '3000', 'nhiaFee': '2500',
    }, format='json')
    assert r.status_code == 201
    charge_id = r.data['id']

    r = admin_client.put(reverse('charge-detail', args=[charge_id]), {'nhiaFee': 0}, format='json')
    assert r.status_code == 200
    assert r.data['nhiaFee'] == 0.0
    assert r.data['basePrice'] == 3000.0
    assert r.data['name'] == 'FBC'

    admin_client.delete(reverse('charge-detail', args=[charge_id]))
    assert Charge.objects.get(pk=charge_id).active is False
    assert [c['id'] for c in admin_client.get(reverse('charges'), {'type': 'lab', 'active': 'false'}).data] \
        == [charge_id]


def test_charge_requires_core_fields(admin_client):
    r = admin_client.post(reverse('charges'), {'name': 'FBC'}, format='json')
    assert r.status_code == 400
    assert set(r.data['errors']) >= {'type', 'department', 'basePrice'}


def test_clinic_writes_need_admin(admin_client, cashier_client):
    r = cashier_client.post(reverse('clinics'), {'name': 'ENT', 'department': 'Surgery'}, format='json')
    assert r.status_code == 403
    r = admin_client.post(reverse('clinics'), {'name': 'ENT', 'department': 'Surgery'}, format='json')
    assert r.status_code == 201
    assert len(cashier_client.get(reverse('clinics')).data) == 1

    admin_client.delete(reverse('clinic-detail', args=[r.data['id']]))
    assert Clinic.objects.get(pk=r.data['id']).active is False


def test_unknown_ids_are_404(admin_client):
    for name in ('hmo-detail', 'charge-detail', 'clinic-detail', 'patient-detail', 'claim-detail'):
        r = admin_client.get(reverse(name, args=[4242]))
        assert r.status_code == 404
        assert r.data['message'].endswith('not found')
