"""
HMO (insurer) master data.

HMOs are never hard-deleted because claims and patients refer to them;
``DELETE`` deactivates and ``toggle-status`` flips the flag either way.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import HMO
from ..permissions import IsAdminOrReadOnly, IsAdminRole
from ..serializers.hmos import HMOSerializer
from ..services.formatting import format_hmo
from .common import apply_fields, bool_param, get_or_404


def _ensure_unique_name(name: str, exclude_pk=None) -> None:
    qs = HMO.objects.filter(name__iexact=name)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise ValidationError('HMO with this name already exists')


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def hmos(request):
    if request.method == 'GET':
        qs = HMO.objects.all()
        active = bool_param(request.query_params.get('active'))
        if active is not None:
            qs = qs.filter(active=active)
        return Response([format_hmo(h) for h in qs])

    s = HMOSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    _ensure_unique_name(s.validated_data['name'])
    hmo = HMO.objects.create(**s.validated_data)
    return Response(format_hmo(hmo), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def hmo_detail(request, pk):
    hmo = get_or_404(HMO, pk, 'HMO')
    if request.method == 'GET':
        return Response(format_hmo(hmo))

    if request.method == 'PUT':
        s = HMOSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        if 'name' in s.validated_data:
            _ensure_unique_name(s.validated_data['name'], exclude_pk=hmo.pk)
        apply_fields(hmo, s.validated_data)
        return Response(format_hmo(hmo))

    hmo.active = False
    hmo.save(update_fields=['active', 'updated_at'])
    return Response({'message': 'HMO deactivated successfully'})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def toggle_hmo_status(request, pk):
    hmo = get_or_404(HMO, pk, 'HMO')
    hmo.active = not hmo.active
    hmo.save(update_fields=['active', 'updated_at'])
    return Response(format_hmo(hmo))
