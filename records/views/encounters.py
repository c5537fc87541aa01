"""
Encounters (visits) and the charges billed against them.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Charge, Clinic, Encounter, EncounterCharge, Patient, User
from ..serializers.encounters import (
    EncounterChargeCreateSerializer,
    EncounterChargeUpdateSerializer,
    EncounterCreateSerializer,
)
from ..services import billing
from ..services.formatting import format_encounter, format_encounter_charge
from .common import get_or_404

ENCOUNTER_QS = Encounter.objects.select_related('patient', 'doctor', 'clinic')
CHARGE_QS = EncounterCharge.objects.select_related('added_by', 'patient')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def encounters(request):
    if request.method == 'GET':
        qs = ENCOUNTER_QS.all()
        if request.query_params.get('patient'):
            qs = qs.filter(patient_id=request.query_params['patient'])
        return Response([format_encounter(e) for e in qs.order_by('-created_at', '-id')])

    s = EncounterCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    patient = get_or_404(Patient, v['patientId'], 'Patient')
    data = {}
    if v.get('doctorId'):
        data['doctor'] = get_or_404(User, v['doctorId'], 'Doctor', User.objects.filter(role='doctor'))
    if v.get('clinicId'):
        data['clinic'] = get_or_404(Clinic, v['clinicId'], 'Clinic')
    for field in ('type', 'reason_for_visit'):
        if field in v:
            data[field] = v[field]
    encounter = billing.create_encounter(patient=patient, user=request.user, data=data)
    return Response(format_encounter(encounter), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def encounter_detail(request, pk):
    encounter = get_or_404(Encounter, pk, 'Encounter', ENCOUNTER_QS)
    return Response(format_encounter(encounter))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def add_encounter_charge(request):
    s = EncounterChargeCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    encounter = get_or_404(Encounter, v['encounterId'], 'Encounter', ENCOUNTER_QS)
    charge = get_or_404(Charge, v['chargeId'], 'Charge')
    item = billing.add_charge(encounter=encounter, charge=charge, quantity=v['quantity'],
                              notes=v['notes'], user=request.user)
    return Response(format_encounter_charge(item), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def charges_for_encounter(request, encounter_id):
    qs = CHARGE_QS.filter(encounter_id=encounter_id).order_by('created_at', 'id')
    return Response([format_encounter_charge(c) for c in qs])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def charges_for_patient(request, patient_id):
    qs = CHARGE_QS.filter(patient_id=patient_id)
    if request.query_params.get('status'):
        qs = qs.filter(status=request.query_params['status'])
    return Response([format_encounter_charge(c) for c in qs.order_by('-created_at', '-id')])


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def encounter_charge_detail(request, pk):
    item = get_or_404(EncounterCharge, pk, 'Encounter charge', CHARGE_QS)
    if request.method == 'PUT':
        s = EncounterChargeUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        billing.update_charge(item, s.validated_data)
        return Response(format_encounter_charge(item))

    billing.delete_charge(item)
    return Response({'message': 'Charge removed'})
