"""
HMO deposits and account statements.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import HMO
from ..permissions import IsAdminRole
from ..serializers.hmo_ledger import HMODepositSerializer
from ..services import hmo_ledger
from ..services.formatting import format_hmo_transaction
from .common import get_or_404


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def hmo_deposit(request):
    s = HMODepositSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    hmo = get_or_404(HMO, v['hmoId'], 'HMO')
    tx = hmo_ledger.record_deposit(
        hmo=hmo,
        amount=v['amount'],
        user=request.user,
        description=v.get('description', ''),
        reference=v.get('reference', ''),
        date=v.get('date'),
    )
    return Response(format_hmo_transaction(tx), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def hmo_statement(request, hmo_id):
    hmo = get_or_404(HMO, hmo_id, 'HMO')
    return Response(hmo_ledger.statement(hmo))
