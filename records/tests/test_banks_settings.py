"""
Bank accounts and the hospital settings record.

Banks may have at most one default at a time, whichever way the flag is
written; settings are a single lazily created record that is merged on
update.
"""

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from ..models import Bank, OperationLog, Setting, User


class BankAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(username='admin@example.com', email='admin@example.com',
                                              password='P@ssw0rd1', role='admin', name='Admin')
        self.nurse = User.objects.create_user(username='nurse@example.com', email='nurse@example.com',
                                              password='P@ssw0rd1', role='nurse', name='Nurse')
        self.client = APIClient()

    def authenticate(self, user: User) -> None:
        self.client.force_authenticate(user=user)

    def create_bank(self, name: str, **extra):
        payload = {'bankName': name, 'accountName': 'SUD Hospital', 'accountNumber': '0123456789'}
        payload.update(extra)
        return self.client.post(reverse('banks'), payload, format='json')

    def defaults(self):
        return list(Bank.objects.filter(is_default=True).values_list('bank_name', flat=True))

    def test_create_requires_account_fields(self) -> None:
        self.authenticate(self.admin)
        resp = self.client.post(reverse('banks'), {'bankName': 'Zenith'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('message', resp.data)
        self.assertIn('accountName', resp.data['errors'])
        self.assertEqual(Bank.objects.count(), 0)

    def test_creating_a_default_clears_the_previous_one(self) -> None:
        self.authenticate(self.admin)
        self.assertEqual(self.create_bank('A', isDefault=True).status_code, status.HTTP_201_CREATED)
        self.create_bank('B', isDefault=True)
        self.assertEqual(self.defaults(), ['B'])

    def test_set_default_switches_between_banks(self) -> None:
        self.authenticate(self.admin)
        a = self.create_bank('A', isDefault=True).data
        b = self.create_bank('B').data
        c = self.create_bank('C').data

        resp = self.client.put(reverse('bank-set-default', args=[b['id']]))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertTrue(resp.data['isDefault'])
        self.assertEqual(self.defaults(), ['B'])

        self.client.put(reverse('bank-set-default', args=[c['id']]))
        self.assertEqual(self.defaults(), ['C'])
        self.assertFalse(Bank.objects.get(pk=a['id']).is_default)

        # default first in listings
        listing = self.client.get(reverse('banks')).data
        self.assertEqual(listing[0]['bankName'], 'C')
        self.assertTrue(OperationLog.objects.filter(action='bank_set_default').exists())

    def test_update_with_default_flag_clears_others(self) -> None:
        self.authenticate(self.admin)
        self.create_bank('A', isDefault=True)
        b = self.create_bank('B').data
        resp = self.client.put(reverse('bank-detail', args=[b['id']]), {'isDefault': True}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['accountName'], 'SUD Hospital')
        self.assertEqual(self.defaults(), ['B'])

    def test_set_default_on_unknown_bank_changes_nothing(self) -> None:
        self.authenticate(self.admin)
        self.create_bank('A', isDefault=True)
        resp = self.client.put(reverse('bank-set-default', args=[9999]))
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data['message'], 'Bank not found')
        self.assertEqual(self.defaults(), ['A'])

    def test_delete_unknown_bank_is_404_and_keeps_rows(self) -> None:
        self.authenticate(self.admin)
        self.create_bank('A')
        resp = self.client.delete(reverse('bank-detail', args=[9999]))
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(Bank.objects.count(), 1)

    def test_deleting_the_default_leaves_no_default(self) -> None:
        self.authenticate(self.admin)
        a = self.create_bank('A', isDefault=True).data
        self.create_bank('B')
        self.assertEqual(self.client.delete(reverse('bank-detail', args=[a['id']])).status_code, 200)
        self.assertEqual(self.defaults(), [])
        self.assertEqual(self.client.get(reverse('bank-default')).status_code, status.HTTP_404_NOT_FOUND)

    def test_non_admin_can_read_but_not_write(self) -> None:
        self.authenticate(self.admin)
        self.create_bank('A', isDefault=True)
        self.authenticate(self.nurse)
        self.assertEqual(self.client.get(reverse('banks')).status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get(reverse('bank-default')).data['bankName'], 'A')
        self.assertEqual(self.create_bank('B').status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_is_rejected(self) -> None:
        self.assertEqual(self.client.get(reverse('banks')).status_code, status.HTTP_401_UNAUTHORIZED)


class SettingsAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(username='admin@example.com', email='admin@example.com',
                                              password='P@ssw0rd1', role='admin', name='Admin')
        self.client = APIClient()

    def test_get_creates_defaults_once(self) -> None:
        first = self.client.get(reverse('settings'))
        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual(first.data['hospitalName'], 'SUD EMR System')
        self.assertEqual(first.data['currencySymbol'], '₦')
        self.assertEqual(first.data['systemVersion'], '1.0.0')
        second = self.client.get(reverse('settings'))
        self.assertEqual(second.data, first.data)
        self.assertEqual(second.data['updatedAt'], first.data['updatedAt'])
        self.assertEqual(Setting.objects.count(), 1)

    def test_put_creates_when_missing(self) -> None:
        self.client.force_authenticate(user=self.admin)
        resp = self.client.put(reverse('settings'), {'hospitalName': 'City Hospital'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['hospitalName'], 'City Hospital')
        self.assertEqual(resp.data['lastUpdatedBy']['id'], self.admin.id)
        self.assertEqual(Setting.objects.count(), 1)

    def test_put_merges_supplied_fields(self) -> None:
        self.client.get(reverse('settings'))
        self.client.force_authenticate(user=self.admin)
        resp = self.client.put(reverse('settings'), {'hospitalName': 'City Hospital', 'website': ''},
                               format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        self.client.force_authenticate(user=None)
        data = self.client.get(reverse('settings')).data
        self.assertEqual(data['hospitalName'], 'City Hospital')
        self.assertEqual(data['website'], '')
        self.assertEqual(data['systemVersion'], '1.0.0')
        self.assertEqual(Setting.objects.count(), 1)
        self.assertTrue(OperationLog.objects.filter(action='settings_update').exists())

    def test_put_requires_admin(self) -> None:
        resp = self.client.put(reverse('settings'), {'hospitalName': 'X'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        doctor = User.objects.create_user(username='doc@example.com', email='doc@example.com',
                                          password='P@ssw0rd1', role='doctor', name='Doc')
        self.client.force_authenticate(user=doctor)
        resp = self.client.put(reverse('settings'), {'hospitalName': 'X'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Setting.objects.count(), 0)
