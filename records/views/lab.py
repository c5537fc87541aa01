"""
Lab orders: ordering, result entry and scientist approval.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Encounter, EncounterCharge, LabOrder, Patient
from ..serializers.investigations import LabOrderCreateSerializer, LabResultSerializer
from ..services import investigations
from ..services.formatting import format_lab_order
from .common import get_or_404

LAB_QS = LabOrder.objects.select_related(
    'patient', 'doctor', 'charge', 'signed_by', 'last_modified_by', 'approved_by'
)


def resolve_order_links(v):
    """Look up the patient, encounter and charge named in an order request."""
    patient = get_or_404(Patient, v['patientId'], 'Patient')
    encounter = get_or_404(Encounter, v['encounterId'], 'Encounter') if v.get('encounterId') else None
    charge = get_or_404(EncounterCharge, v['chargeId'], 'Charge') if v.get('chargeId') else None
    return patient, encounter, charge


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def lab_orders(request):
    if request.method == 'GET':
        qs = LAB_QS.all()
        if request.query_params.get('patient'):
            qs = qs.filter(patient_id=request.query_params['patient'])
        if request.query_params.get('status'):
            qs = qs.filter(status=request.query_params['status'])
        return Response([format_lab_order(o) for o in qs])

    s = LabOrderCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    patient, encounter, charge = resolve_order_links(v)
    order = investigations.order_lab(user=request.user, patient=patient, encounter=encounter,
                                     charge=charge, test_name=v['testName'], notes=v['notes'])
    return Response(format_lab_order(order), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def lab_orders_for_encounter(request, encounter_id):
    qs = LAB_QS.filter(encounter_id=encounter_id)
    return Response([format_lab_order(o) for o in qs])


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def lab_result(request, pk):
    order = get_or_404(LabOrder, pk, 'Order', LAB_QS)
    s = LabResultSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    order = investigations.record_lab_result(order, result=s.validated_data['result'], user=request.user)
    return Response(format_lab_order(order))


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def approve_lab_result(request, pk):
    order = get_or_404(LabOrder, pk, 'Order', LAB_QS)
    order = investigations.approve_lab_result(order, user=request.user)
    return Response(format_lab_order(order))
