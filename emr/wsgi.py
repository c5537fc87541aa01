"""
WSGI config for the EMR backend.

Exposes the WSGI callable as a module-level variable named ``application``
for gunicorn/uwsgi style servers.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'emr.settings')

application = get_wsgi_application()
