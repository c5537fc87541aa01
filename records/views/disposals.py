"""
Drug disposals: destruction of stock or returns to the supplier.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import DrugDisposal, Pharmacy
from ..serializers.pharmacy import DisposalCreateSerializer
from ..services import pharmacy as pharmacy_service
from ..services.formatting import format_disposal
from .common import get_or_404


def _filtered(request):
    qs = DrugDisposal.objects.select_related('drug', 'pharmacy', 'disposed_by')
    params = request.query_params
    if params.get('pharmacy'):
        qs = qs.filter(pharmacy_id=params['pharmacy'])
    if params.get('disposalType'):
        qs = qs.filter(disposal_type=params['disposalType'])
    if params.get('startDate'):
        qs = qs.filter(created_at__date__gte=params['startDate'])
    if params.get('endDate'):
        qs = qs.filter(created_at__date__lte=params['endDate'])
    return qs


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def disposals(request):
    if request.method == 'GET':
        return Response([format_disposal(d) for d in _filtered(request).order_by('-created_at', '-id')])

    s = DisposalCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    disposal = pharmacy_service.dispose(
        user=request.user,
        pharmacy=get_or_404(Pharmacy, v['pharmacyId'], 'Pharmacy'),
        drug_id=v['drugId'],
        quantity=v['quantity'],
        disposal_type=v['disposalType'],
        reason=v['reason'],
        supplier_return_details=v.get('supplierReturnDetails'),
        notes=v['notes'],
    )
    return Response(format_disposal(disposal), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def disposal_stats(request):
    return Response(pharmacy_service.disposal_stats(_filtered(request)))
