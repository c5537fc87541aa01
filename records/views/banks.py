"""
Hospital bank account endpoints.

Any authenticated user may read the accounts; only administrators may
change them.  Exactly one account at a time can be the default, the
one printed on claims and payment instructions.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Bank
from ..permissions import IsAdminOrReadOnly, IsAdminRole
from ..serializers.banks import BankSerializer
from ..services.audit import log_action
from ..services.defaults import promote_or_404
from ..services.formatting import format_bank
from .common import apply_fields, get_or_404

logger = logging.getLogger(__name__)


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def banks(request):
    """``GET`` lists every account, default first; ``POST`` creates one."""
    if request.method == 'GET':
        return Response([format_bank(b) for b in Bank.objects.all()])

    s = BankSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    bank = Bank(**s.validated_data)
    bank.save()
    logger.info('Bank %s created (default=%s)', bank.pk, bank.is_default)
    return Response(format_bank(bank), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def default_bank(request):
    bank = Bank.objects.filter(is_default=True, is_active=True).first()
    if bank is None:
        raise NotFound('No default bank set')
    return Response(format_bank(bank))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def bank_detail(request, pk):
    bank = get_or_404(Bank, pk, 'Bank')
    if request.method == 'GET':
        return Response(format_bank(bank))

    if request.method == 'PUT':
        s = BankSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        apply_fields(bank, s.validated_data)
        return Response(format_bank(bank))

    bank_id = bank.pk
    bank.delete()
    logger.info('Bank %s removed', bank_id)
    log_action(user=request.user, action='bank_delete', object_type='bank', object_id=bank_id)
    return Response({'message': 'Bank removed'})


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsAdminRole])
def set_default_bank(request, pk):
    bank = promote_or_404(Bank, pk, user=request.user, label='Bank', action='bank_set_default')
    return Response(format_bank(bank))
