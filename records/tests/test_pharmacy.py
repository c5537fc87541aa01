from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.urls import reverse

from records.models import DrugDisposal, DrugTransfer, InventoryItem, OperationLog, Pharmacy, User

from .helpers import client_for, make_user

pytestmark = pytest.mark.django_db


@pytest.fixture
def branch_staff(branch_pharmacy):
    return make_user('branch@example.com', User.ROLE_PHARMACIST, assigned_pharmacy=branch_pharmacy)


@pytest.fixture
def main_staff(main_pharmacy):
    return make_user('main@example.com', User.ROLE_PHARMACIST, assigned_pharmacy=main_pharmacy)


def request_transfer(client, stock, pharmacy, quantity=30):
    return client.post(reverse('drug-transfers'), {
        'drugName': stock.name, 'toPharmacyId': pharmacy.id, 'requestedQuantity': quantity,
    }, format='json')


def test_only_one_main_pharmacy(admin_client, main_pharmacy, branch_pharmacy):
    resp = admin_client.put(reverse('pharmacy-detail', args=[branch_pharmacy.id]),
                            {'isMainPharmacy': True}, format='json')
    assert resp.status_code == 200
    assert list(Pharmacy.objects.filter(is_main_pharmacy=True)) == [branch_pharmacy]
    assert admin_client.get(reverse('pharmacy-main')).data['id'] == branch_pharmacy.id
    assert admin_client.get(reverse('pharmacies')).data[0]['id'] == branch_pharmacy.id


def test_main_pharmacy_cannot_be_deleted(admin_client, main_pharmacy, stock, branch_pharmacy):
    resp = admin_client.delete(reverse('pharmacy-detail', args=[main_pharmacy.id]))
    assert resp.status_code == 400
    assert resp.data['message'] == 'Cannot delete main pharmacy'
    assert admin_client.delete(reverse('pharmacy-detail', args=[branch_pharmacy.id])).status_code == 200


def test_branch_request_goes_to_its_own_pharmacy(branch_staff, main_pharmacy, branch_pharmacy, stock):
    resp = request_transfer(client_for(branch_staff), stock, main_pharmacy)
    assert resp.status_code == 201
    assert resp.data['fromPharmacy']['id'] == main_pharmacy.id
    assert resp.data['toPharmacy']['id'] == branch_pharmacy.id
    assert resp.data['status'] == 'pending'


def test_unassigned_user_cannot_request(cashier_client, main_pharmacy, stock):
    resp = request_transfer(cashier_client, stock, main_pharmacy)
    assert resp.status_code == 400
    assert resp.data['message'] == 'You are not assigned to any pharmacy'


def test_approve_moves_stock(branch_staff, main_staff, main_pharmacy, branch_pharmacy, stock):
    transfer_id = request_transfer(client_for(branch_staff), stock, main_pharmacy).data['id']
    url = reverse('drug-transfer-approve', args=[transfer_id])

    # branch staff are not reviewers
    assert client_for(branch_staff).put(url, {}, format='json').status_code == 403

    resp = client_for(main_staff).put(url, {'approvedQuantity': 25}, format='json')
    assert resp.status_code == 200
    assert resp.data['status'] == 'completed'
    assert resp.data['approvedQuantity'] == 25
    assert resp.data['reviewedBy']['id'] == main_staff.id

    stock.refresh_from_db()
    assert stock.quantity == 75
    received = InventoryItem.objects.get(pharmacy=branch_pharmacy, name=stock.name)
    assert received.quantity == 25
    assert received.batch_number == 'B-001'

    # a second transfer of the same batch tops up the existing line
    second = request_transfer(client_for(branch_staff), stock, main_pharmacy, quantity=5).data['id']
    client_for(main_staff).put(reverse('drug-transfer-approve', args=[second]), {}, format='json')
    received.refresh_from_db()
    assert received.quantity == 30
    assert InventoryItem.objects.filter(pharmacy=branch_pharmacy).count() == 1

    again = client_for(main_staff).put(url, {}, format='json')
    assert again.status_code == 400
    assert again.data['message'] == 'Can only approve pending requests'


def test_approve_with_insufficient_stock_changes_nothing(admin_client, branch_staff, main_pharmacy, stock):
    transfer_id = request_transfer(client_for(branch_staff), stock, main_pharmacy, quantity=500).data['id']
    resp = admin_client.put(reverse('drug-transfer-approve', args=[transfer_id]), {}, format='json')
    assert resp.status_code == 400
    assert resp.data['message'] == 'Insufficient stock in Main Pharmacy. Available: 100'
    stock.refresh_from_db()
    assert stock.quantity == 100
    assert DrugTransfer.objects.get(pk=transfer_id).status == 'pending'


def test_reject_requires_reason(admin_client, admin_user, branch_staff, main_pharmacy, stock):
    transfer_id = request_transfer(client_for(branch_staff), stock, main_pharmacy).data['id']
    url = reverse('drug-transfer-reject', args=[transfer_id])
    resp = admin_client.put(url, {}, format='json')
    assert resp.status_code == 400
    assert resp.data['message'] == 'Rejection reason is required'

    resp = admin_client.put(url, {'rejectionReason': 'Out of season'}, format='json')
    assert resp.status_code == 200
    assert resp.data['status'] == 'rejected'
    assert resp.data['reviewedBy']['id'] == admin_user.id
    assert OperationLog.objects.filter(action='transfer_reject', object_id=str(transfer_id)).exists()


def test_branch_sees_only_its_transfers(branch_staff, main_staff, main_pharmacy, branch_pharmacy, stock):
    other = Pharmacy.objects.create(name='Ward Pharmacy')
    other_staff = make_user('ward@example.com', User.ROLE_PHARMACIST, assigned_pharmacy=other)
    request_transfer(client_for(branch_staff), stock, main_pharmacy)
    request_transfer(client_for(other_staff), stock, main_pharmacy)

    assert len(client_for(branch_staff).get(reverse('drug-transfers')).data) == 1
    assert len(client_for(main_staff).get(reverse('drug-transfers')).data) == 2


def test_disposal_from_main_pharmacy(main_staff, main_pharmacy, stock):
    client = client_for(main_staff)
    resp = client.post(reverse('drug-disposals'), {
        'drugId': stock.id, 'pharmacyId': main_pharmacy.id, 'quantity': 10,
        'disposalType': 'return_to_supplier', 'reason': 'Recalled batch',
        'supplierReturnDetails': {'supplierName': 'Emzor', 'returnReference': 'RT-9'},
    }, format='json')
    assert resp.status_code == 201
    assert resp.data['batchNumber'] == 'B-001'
    assert resp.data['supplierReturnDetails']['supplierName'] == 'Emzor'
    stock.refresh_from_db()
    assert stock.quantity == 90

    resp = client.post(reverse('drug-disposals'), {
        'drugId': stock.id, 'pharmacyId': main_pharmacy.id, 'quantity': 5,
        'disposalType': 'destruction', 'reason': 'Expired',
        'supplierReturnDetails': {'supplierName': 'ignored'},
    }, format='json')
    assert resp.status_code == 201
    assert resp.data['supplierReturnDetails'] is None

    stats = client.get(reverse('drug-disposal-stats')).data
    assert stats['totalDisposals'] == 2
    by_type = {row['type']: row for row in stats['byType']}
    assert by_type['return_to_supplier']['totalQuantity'] == 10
    assert by_type['destruction']['count'] == 1


def test_disposal_checks_stock_and_pharmacy(main_staff, main_pharmacy, branch_pharmacy, stock):
    client = client_for(main_staff)
    resp = client.post(reverse('drug-disposals'), {
        'drugId': stock.id, 'pharmacyId': main_pharmacy.id, 'quantity': 101,
        'disposalType': 'destruction', 'reason': 'Expired',
    }, format='json')
    assert resp.status_code == 400
    assert resp.data['message'] == 'Insufficient stock. Available: 100'

    branch_item = InventoryItem.objects.create(
        name='ORS', pharmacy=branch_pharmacy, quantity=10, price=Decimal('20'),
        expiry_date=date.today() + timedelta(days=30),
    )
    resp = client.post(reverse('drug-disposals'), {
        'drugId': branch_item.id, 'pharmacyId': branch_pharmacy.id, 'quantity': 1,
        'disposalType': 'destruction', 'reason': 'Damaged',
    }, format='json')
    assert resp.status_code == 400
    assert not DrugDisposal.objects.exists()


def test_low_stock_filter(admin_client, main_pharmacy, stock):
    InventoryItem.objects.create(name='Zinc', pharmacy=main_pharmacy, quantity=3, price=Decimal('10'),
                                 expiry_date=date.today() + timedelta(days=90))
    names = [i['name'] for i in admin_client.get(reverse('inventory'), {'lowStock': 'true'}).data]
    assert names == ['Zinc']


def test_inventory_alerts_buckets(cashier_client, main_pharmacy, branch_pharmacy, stock):
    def line(name, pharmacy, quantity, days):
        return InventoryItem.objects.create(name=name, pharmacy=pharmacy, quantity=quantity, price=Decimal('10'),
                                            expiry_date=date.today() + timedelta(days=days))

    line('Zinc', main_pharmacy, 3, 200)
    line('ORS', main_pharmacy, 50, 10)
    line('Chloroquine', main_pharmacy, 50, -5)
    line('Vitamin C', branch_pharmacy, 1, -1)

    data = cashier_client.get(reverse('inventory-alerts')).data
    assert [i['name'] for i in data['lowStock']] == ['Vitamin C', 'Zinc']
    assert [i['name'] for i in data['expiringSoon']] == ['ORS']
    assert [i['name'] for i in data['expired']] == ['Chloroquine', 'Vitamin C']
    assert data['summary'] == {'lowStockCount': 2, 'expiringSoonCount': 1, 'expiredCount': 2}

    data = cashier_client.get(reverse('inventory-alerts'), {'pharmacy': main_pharmacy.id}).data
    assert data['summary'] == {'lowStockCount': 1, 'expiringSoonCount': 1, 'expiredCount': 1}
