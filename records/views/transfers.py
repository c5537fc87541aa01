"""
Drug transfer requests between the main pharmacy and its branches.
"""
from __future__ import annotations

from django.db.models import Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import DrugTransfer, Pharmacy
from ..permissions import IsPharmacyReviewer
from ..serializers.pharmacy import (
    TransferApproveSerializer,
    TransferCreateSerializer,
    TransferRejectSerializer,
)
from ..services import pharmacy as pharmacy_service
from ..services.formatting import format_transfer
from .common import get_or_404

TRANSFER_QS = DrugTransfer.objects.select_related(
    'drug', 'from_pharmacy', 'to_pharmacy', 'requested_by', 'reviewed_by', 'completed_by'
)


def _sees_all(user) -> bool:
    if user.role == 'admin':
        return True
    return bool(user.assigned_pharmacy and user.assigned_pharmacy.is_main_pharmacy)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def transfers(request):
    if request.method == 'GET':
        qs = TRANSFER_QS.all()
        if not _sees_all(request.user):
            own = request.user.assigned_pharmacy_id
            qs = qs.filter(Q(from_pharmacy_id=own) | Q(to_pharmacy_id=own))
        if request.query_params.get('pharmacy'):
            pharmacy_id = request.query_params['pharmacy']
            qs = qs.filter(Q(from_pharmacy_id=pharmacy_id) | Q(to_pharmacy_id=pharmacy_id))
        if request.query_params.get('status'):
            qs = qs.filter(status=request.query_params['status'])
        return Response([format_transfer(t) for t in qs.order_by('-created_at', '-id')])

    s = TransferCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    transfer = pharmacy_service.request_transfer(
        user=request.user,
        drug_name=v['drugName'],
        to_pharmacy=get_or_404(Pharmacy, v['toPharmacyId'], 'Pharmacy'),
        requested_quantity=v['requestedQuantity'],
        notes=v['notes'],
    )
    return Response(format_transfer(TRANSFER_QS.get(pk=transfer.pk)), status=status.HTTP_201_CREATED)


@api_view(['PUT'])
@permission_classes([IsPharmacyReviewer])
def approve_transfer(request, pk):
    transfer = get_or_404(DrugTransfer, pk, 'Transfer')
    s = TransferApproveSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    pharmacy_service.approve_transfer(
        transfer, user=request.user, approved_quantity=s.validated_data.get('approvedQuantity')
    )
    return Response(format_transfer(TRANSFER_QS.get(pk=transfer.pk)))


@api_view(['PUT'])
@permission_classes([IsPharmacyReviewer])
def reject_transfer(request, pk):
    transfer = get_or_404(DrugTransfer, pk, 'Transfer')
    s = TransferRejectSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    pharmacy_service.reject_transfer(transfer, user=request.user, reason=s.validated_data['rejectionReason'])
    return Response(format_transfer(TRANSFER_QS.get(pk=transfer.pk)))
