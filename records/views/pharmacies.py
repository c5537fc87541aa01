"""
Pharmacies and their stock.
"""
from __future__ import annotations

import logging

from django.db.models import F
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import InventoryItem, Pharmacy
from ..permissions import IsAdminOrReadOnly
from ..serializers.pharmacy import InventoryItemSerializer, PharmacySerializer
from ..services import pharmacy as pharmacy_service
from ..services.formatting import format_inventory_item, format_pharmacy
from .common import apply_fields, bool_param, get_or_404

logger = logging.getLogger(__name__)

INVENTORY_QS = InventoryItem.objects.select_related('pharmacy')


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def pharmacies(request):
    if request.method == 'GET':
        qs = Pharmacy.objects.order_by('-is_main_pharmacy', 'name')
        return Response([format_pharmacy(p) for p in qs])

    s = PharmacySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    if Pharmacy.objects.filter(name__iexact=s.validated_data['name']).exists():
        raise ValidationError('Pharmacy with this name already exists')
    pharmacy = Pharmacy(**s.validated_data)
    pharmacy.save()
    logger.info('Pharmacy %s created (main=%s)', pharmacy.pk, pharmacy.is_main_pharmacy)
    return Response(format_pharmacy(pharmacy), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def main_pharmacy(request):
    return Response(format_pharmacy(pharmacy_service.main_pharmacy()))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def pharmacy_detail(request, pk):
    pharmacy = get_or_404(Pharmacy, pk, 'Pharmacy')
    if request.method == 'GET':
        return Response(format_pharmacy(pharmacy))

    if request.method == 'PUT':
        s = PharmacySerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        name = s.validated_data.get('name')
        if name and Pharmacy.objects.filter(name__iexact=name).exclude(pk=pharmacy.pk).exists():
            raise ValidationError('Pharmacy with this name already exists')
        apply_fields(pharmacy, s.validated_data)
        return Response(format_pharmacy(pharmacy))

    pharmacy_service.delete_pharmacy(pharmacy)
    return Response({'message': 'Pharmacy deleted successfully'})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def inventory(request):
    """``GET ?pharmacy=<id>&lowStock=true``; ``POST`` adds a stock line."""
    if request.method == 'GET':
        qs = INVENTORY_QS.all()
        if request.query_params.get('pharmacy'):
            qs = qs.filter(pharmacy_id=request.query_params['pharmacy'])
        if bool_param(request.query_params.get('lowStock')):
            qs = qs.filter(quantity__lte=F('reorder_level'))
        return Response([format_inventory_item(i) for i in qs.order_by('name', 'expiry_date')])

    s = InventoryItemSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    pharmacy_id = data.pop('pharmacyId', None)
    if pharmacy_id:
        data['pharmacy'] = get_or_404(Pharmacy, pharmacy_id, 'Pharmacy')
    elif request.user.assigned_pharmacy_id:
        data['pharmacy'] = request.user.assigned_pharmacy
    else:
        raise ValidationError('Pharmacy is required')
    item = InventoryItem.objects.create(**data)
    logger.info('Inventory item %s (%s x%s) added to pharmacy %s',
                item.pk, item.name, item.quantity, item.pharmacy_id)
    return Response(format_inventory_item(item), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def inventory_alerts(request):
    qs = INVENTORY_QS.order_by('expiry_date', 'name')
    if request.query_params.get('pharmacy'):
        qs = qs.filter(pharmacy_id=request.query_params['pharmacy'])
    alerts = pharmacy_service.inventory_alerts(qs)
    for key in ('lowStock', 'expiringSoon', 'expired'):
        alerts[key] = [format_inventory_item(i) for i in alerts[key]]
    return Response(alerts)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def inventory_detail(request, pk):
    item = get_or_404(InventoryItem, pk, 'Inventory item', INVENTORY_QS)
    if request.method == 'GET':
        return Response(format_inventory_item(item))

    if request.method == 'PUT':
        s = InventoryItemSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        data = dict(s.validated_data)
        if 'pharmacyId' in data:
            data['pharmacy'] = get_or_404(Pharmacy, data.pop('pharmacyId'), 'Pharmacy')
        apply_fields(item, data)
        return Response(format_inventory_item(item))

    item.delete()
    return Response({'message': 'Inventory item deleted successfully'})
