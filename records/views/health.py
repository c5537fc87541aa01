"""Liveness probe for load balancers. A plain Django view, so no API auth applies."""
import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def healthz(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
            db_ok = cursor.fetchone() == (1,)
    except DatabaseError:
        logger.exception('Health check could not reach the database')
        return JsonResponse({'ok': False, 'database': connection.vendor}, status=503)
    return JsonResponse({'ok': db_ok, 'database': connection.vendor})
