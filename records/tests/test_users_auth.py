import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from records.models import OperationLog, User

from .helpers import PASSWORD, client_for, make_user

pytestmark = pytest.mark.django_db

STRONG = 'Tr1cky-Lantern-42'


def login(client, email, password):
    return client.post(reverse('login'), {'email': email, 'password': password}, format='json')


def test_login_returns_jwt_and_legacy_token():
    u = make_user('doc@example.com', User.ROLE_DOCTOR)
    client = APIClient()
    r = login(client, 'DOC@example.com', PASSWORD)
    assert r.status_code == 200
    assert r.data['token']
    assert r.data['jwt_access'] and r.data['jwt_refresh']
    assert r.data['role'] == 'doctor'
    assert r.data['user']['id'] == u.id
    u.refresh_from_db()
    assert u.last_login is not None

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['jwt_access']}")
    assert client.get(reverse('users-me')).data['email'] == 'doc@example.com'

    legacy = APIClient()
    legacy.credentials(HTTP_AUTHORIZATION=f"Token {r.data['token']}")
    assert legacy.get(reverse('users-me')).status_code == 200


def test_login_failures_are_401():
    make_user('doc@example.com', User.ROLE_DOCTOR)
    r = login(APIClient(), 'doc@example.com', 'wrong')
    assert r.status_code == 401
    assert r.data['message'] == 'Invalid email or password'
    assert OperationLog.objects.filter(action='login', user__isnull=True).count() == 1

    r = APIClient().post(reverse('login'), {'password': PASSWORD}, format='json')
    assert r.status_code == 400
    assert r.data['message'] == 'Email is required'


def test_inactive_user_cannot_login():
    make_user('gone@example.com', 'nurse', is_active=False)
    assert login(APIClient(), 'gone@example.com', PASSWORD).status_code == 401


def test_refresh_and_logout():
    make_user('doc@example.com', User.ROLE_DOCTOR)
    client = APIClient()
    tokens = login(client, 'doc@example.com', PASSWORD).data

    r = client.post(reverse('jwt-refresh'), {'refresh': tokens['jwt_refresh']}, format='json')
    assert r.status_code == 200
    assert 'jwt_access' in r.data
    refresh = r.data.get('jwt_refresh', tokens['jwt_refresh'])

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['jwt_access']}")
    r = client.post(reverse('jwt-logout'), {'refresh': refresh}, format='json')
    assert r.status_code == 200
    assert r.data['blacklisted'] == 1

    r = APIClient().post(reverse('jwt-refresh'), {'refresh': refresh}, format='json')
    assert r.status_code == 401


def test_admin_creates_and_manages_staff(admin_client, admin_user, main_pharmacy):
    r = admin_client.post(reverse('users'), {
        'name': 'Dr. Okafor', 'email': 'Okafor@example.com', 'password': STRONG,
        'role': 'doctor', 'assignedPharmacyId': main_pharmacy.id,
    }, format='json')
    assert r.status_code == 201
    assert r.data['email'] == 'okafor@example.com'
    assert r.data['createdBy'] == admin_user.id
    assert r.data['assignedPharmacy']['id'] == main_pharmacy.id
    uid = r.data['id']

    dup = admin_client.post(reverse('users'), {
        'name': 'Again', 'email': 'okafor@example.com', 'password': STRONG, 'role': 'nurse',
    }, format='json')
    assert dup.status_code == 400
    assert dup.data['message'] == 'User already exists'

    doctors = admin_client.get(reverse('users-doctors')).data
    assert [d['id'] for d in doctors] == [uid]

    r = admin_client.put(reverse('user-detail', args=[uid]), {'assignedPharmacyId': None}, format='json')
    assert r.status_code == 200
    assert r.data['assignedPharmacy'] is None
    assert r.data['name'] == 'Dr. Okafor'

    r = admin_client.patch(reverse('user-toggle-active', args=[uid]))
    assert r.status_code == 200
    assert r.data['user']['isActive'] is False
    assert login(APIClient(), 'okafor@example.com', STRONG).status_code == 401

    r = admin_client.patch(reverse('user-toggle-active', args=[uid]))
    assert r.data['user']['isActive'] is True
    assert OperationLog.objects.filter(action='user_toggle_active').count() == 2


def test_admin_cannot_deactivate_self(admin_client, admin_user):
    r = admin_client.patch(reverse('user-toggle-active', args=[admin_user.id]))
    assert r.status_code == 400
    assert r.data['message'] == 'You cannot deactivate your own account'
    admin_user.refresh_from_db()
    assert admin_user.is_active


def test_delete_deactivates(admin_client):
    nurse = make_user('nurse@example.com', 'nurse')
    r = admin_client.delete(reverse('user-detail', args=[nurse.id]))
    assert r.status_code == 200
    nurse.refresh_from_db()
    assert nurse.is_active is False
    assert User.objects.filter(pk=nurse.pk).exists()


def test_reset_password_validates_strength(admin_client):
    nurse = make_user('nurse@example.com', 'nurse')
    r = admin_client.post(reverse('user-reset-password', args=[nurse.id]), {'password': '123'}, format='json')
    assert r.status_code == 400
    assert 'password' in r.data['errors']

    r = admin_client.post(reverse('user-reset-password', args=[nurse.id]), {'password': STRONG}, format='json')
    assert r.status_code == 200
    assert login(APIClient(), 'nurse@example.com', STRONG).status_code == 200


def test_staff_endpoints_need_admin(cashier_client):
    assert cashier_client.get(reverse('users-all')).status_code == 403
    assert cashier_client.post(reverse('users'), {}, format='json').status_code == 403
    assert client_for().get(reverse('users-me')).status_code == 401
