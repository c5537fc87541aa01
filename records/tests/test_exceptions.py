import pytest
from django.urls import reverse
from rest_framework.exceptions import NotFound, ValidationError

from records.exceptions import api_exception_handler

pytestmark = pytest.mark.django_db


def test_unhandled_errors_hide_details_unless_debug(settings):
    settings.DEBUG = False
    resp = api_exception_handler(RuntimeError('db exploded'), {'request': None})
    assert resp.status_code == 500
    assert resp.data == {'message': 'Internal server error'}

    settings.DEBUG = True
    resp = api_exception_handler(RuntimeError('db exploded'), {'request': None})
    assert resp.data == {'message': 'db exploded'}


def test_drf_errors_become_message_bodies():
    resp = api_exception_handler(NotFound('Claim not found'), {})
    assert resp.status_code == 404
    assert resp.data == {'message': 'Claim not found'}

    resp = api_exception_handler(ValidationError({'bankName': ['This field is required.']}), {})
    assert resp.status_code == 400
    assert resp.data['message'] == 'This field is required.'
    assert resp.data['errors'] == {'bankName': ['This field is required.']}


def test_healthz(client):
    resp = client.get(reverse('healthz'))
    assert resp.status_code == 200
    assert resp.json()['ok'] is True
