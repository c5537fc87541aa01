from rest_framework.test import APIClient

from records.models import User

PASSWORD = 'P@ssw0rd1'


def make_user(email, role, **extra):
    return User.objects.create_user(username=email, email=email, password=PASSWORD,
                                    name=extra.pop('name', email.split('@')[0]), role=role, **extra)


def client_for(user=None):
    client = APIClient()
    if user is not None:
        client.force_authenticate(user=user)
    return client
