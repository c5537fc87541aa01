from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import RadiologyOrder
from ..serializers.investigations import RadiologyOrderCreateSerializer, RadiologyReportSerializer
from ..services import investigations
from ..services.formatting import format_radiology_order
from .common import get_or_404
from .lab import resolve_order_links

RADIOLOGY_QS = RadiologyOrder.objects.select_related('patient', 'doctor', 'charge', 'signed_by')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def radiology_orders(request):
    if request.method == 'GET':
        qs = RADIOLOGY_QS.all()
        if request.query_params.get('patient'):
            qs = qs.filter(patient_id=request.query_params['patient'])
        if request.query_params.get('status'):
            qs = qs.filter(status=request.query_params['status'])
        return Response([format_radiology_order(o) for o in qs])

    s = RadiologyOrderCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    patient, encounter, charge = resolve_order_links(v)
    order = investigations.order_radiology(user=request.user, patient=patient, encounter=encounter,
                                           charge=charge, scan_type=v['scanType'])
    return Response(format_radiology_order(order), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def radiology_orders_for_encounter(request, encounter_id):
    qs = RADIOLOGY_QS.filter(encounter_id=encounter_id)
    return Response([format_radiology_order(o) for o in qs])


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def radiology_report(request, pk):
    order = get_or_404(RadiologyOrder, pk, 'Order', RADIOLOGY_QS)
    s = RadiologyReportSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    order = investigations.record_radiology_report(order, report=v['report'], user=request.user,
                                                   result_image=v.get('resultImage'))
    return Response(format_radiology_order(order))
