"""
Patient registration, demographics and deposit accounts.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import HMO, Patient
from ..serializers.patients import DepositSerializer, PatientSerializer
from ..services import patients as patient_service
from ..services.formatting import format_patient, money
from .common import apply_fields, get_or_404


def _patient_fields(validated: dict) -> dict:
    data = dict(validated)
    if 'hmoId' in data:
        hmo_id = data.pop('hmoId')
        data['hmo'] = get_or_404(HMO, hmo_id, 'HMO') if hmo_id else None
    return data


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patients(request):
    if request.method == 'GET':
        qs = Patient.objects.select_related('hmo').order_by('-created_at', '-id')
        return Response([format_patient(p) for p in qs])

    s = PatientSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = patient_service.register_patient(_patient_fields(s.validated_data))
    return Response(format_patient(patient), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def recent_patients(request):
    return Response([format_patient(p) for p in patient_service.recent_patients()])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def patient_detail(request, pk):
    patient = get_or_404(Patient, pk, 'Patient', Patient.objects.select_related('hmo'))
    if request.method == 'GET':
        return Response(format_patient(patient))

    if request.method == 'PUT':
        s = PatientSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        apply_fields(patient, _patient_fields(s.validated_data))
        return Response(format_patient(patient))

    if getattr(request.user, 'role', None) != 'admin':
        raise PermissionDenied('Only administrators can delete patients')
    patient.delete()
    return Response({'message': 'Patient deleted successfully'})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patient_deposit(request, pk):
    patient = get_or_404(Patient, pk, 'Patient', Patient.objects.select_related('hmo'))
    if request.method == 'GET':
        return Response(patient_service.deposit_status(patient))

    s = DepositSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = patient_service.add_deposit(patient, s.validated_data['amount'])
    return Response({
        'message': 'Deposit added successfully',
        'balance': money(patient.deposit_balance),
        'patient': format_patient(patient),
    })
