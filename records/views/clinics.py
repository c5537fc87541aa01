from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from ..models import Clinic
from ..permissions import IsAdminOrReadOnly
from ..serializers.clinics import ClinicSerializer
from ..services.formatting import format_clinic
from .common import apply_fields, bool_param, get_or_404


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def clinics(request):
    if request.method == 'GET':
        qs = Clinic.objects.all()
        active = bool_param(request.query_params.get('active'))
        if active is not None:
            qs = qs.filter(active=active)
        return Response([format_clinic(c) for c in qs])

    s = ClinicSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    clinic = Clinic.objects.create(**s.validated_data)
    return Response(format_clinic(clinic), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def clinic_detail(request, pk):
    clinic = get_or_404(Clinic, pk, 'Clinic')
    if request.method == 'GET':
        return Response(format_clinic(clinic))

    if request.method == 'PUT':
        s = ClinicSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        apply_fields(clinic, s.validated_data)
        return Response(format_clinic(clinic))

    clinic.active = False
    clinic.save(update_fields=['active', 'updated_at'])
    return Response({'message': 'Clinic deactivated'})
