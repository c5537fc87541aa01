"""
Price master.  Charges are soft-deleted so historical bills keep their
reference; reactivate with ``PUT {"active": true}``.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from ..models import Charge
from ..permissions import IsAdminOrReadOnly
from ..serializers.charges import ChargeSerializer
from ..services.formatting import format_charge
from .common import apply_fields, bool_param, get_or_404


def _ensure_unique_code(code, exclude_pk=None) -> None:
    if not code:
        return
    qs = Charge.objects.filter(code=code)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise ValidationError('A charge with this code already exists')


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def charges(request):
    if request.method == 'GET':
        qs = Charge.objects.all()
        if request.query_params.get('type'):
            qs = qs.filter(type=request.query_params['type'])
        active = bool_param(request.query_params.get('active'))
        if active is not None:
            qs = qs.filter(active=active)
        return Response([format_charge(c) for c in qs.order_by('type', 'name')])

    s = ChargeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    _ensure_unique_code(s.validated_data.get('code'))
    charge = Charge.objects.create(**s.validated_data)
    return Response(format_charge(charge), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def charge_detail(request, pk):
    charge = get_or_404(Charge, pk, 'Charge')
    if request.method == 'GET':
        return Response(format_charge(charge))

    if request.method == 'PUT':
        s = ChargeSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        if 'code' in s.validated_data:
            _ensure_unique_code(s.validated_data['code'], exclude_pk=charge.pk)
        apply_fields(charge, s.validated_data)
        return Response(format_charge(charge))

    charge.active = False
    charge.save(update_fields=['active', 'updated_at'])
    return Response({'message': 'Charge deactivated'})
