"""
ASGI config for the EMR backend.

The API is plain request/response, so only the Django HTTP application
is mounted; there are no WebSocket routes.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "emr.settings")

application = get_asgi_application()
