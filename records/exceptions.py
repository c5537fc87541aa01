import logging

from django.conf import settings
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def _first_message(data) -> str:
    if isinstance(data, list):
        return _first_message(data[0]) if data else ''
    if isinstance(data, dict):
        for value in data.values():
            return _first_message(value)
        return ''
    return str(data)


def api_exception_handler(exc, context):
    """Render every API error as ``{"message": ...}``.

    Field validation errors also carry the full ``errors`` mapping.  Errors
    DRF does not know about become a 500; their text is only exposed while
    ``DEBUG`` is on.
    """
    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.exception("Unhandled error on %s %s",
                         getattr(request, 'method', '?'), getattr(request, 'path', '?'))
        message = str(exc) if settings.DEBUG else 'Internal server error'
        return Response({'message': message}, status=500)
    # normalize response
    data = resp.data
    if isinstance(data, dict) and 'detail' in data:
        body = {'message': str(data['detail'])}
    elif isinstance(exc, ValidationError):
        body = {'message': _first_message(data), 'errors': data}
    else:
        body = {'message': _first_message(data)}
    resp.data = body
    return resp
