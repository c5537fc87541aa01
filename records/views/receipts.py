"""
Cashier endpoints: taking payment for encounter charges, looking up and
validating receipts, and reversing a payment.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Encounter, Receipt
from ..serializers.receipts import PayChargesSerializer, ValidateReceiptSerializer
from ..services import receipts as receipt_service
from ..services.formatting import format_receipt
from .common import get_or_404

RECEIPT_QS = (Receipt.objects
              .select_related('patient', 'cashier')
              .prefetch_related('charges__added_by', 'charges__patient', 'validations__user'))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def pay_encounter(request):
    s = PayChargesSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    encounter = get_or_404(Encounter, v['encounterId'], 'Encounter',
                           Encounter.objects.select_related('patient'))
    receipt = receipt_service.pay_encounter_charges(
        encounter=encounter,
        charge_ids=v['chargeIds'],
        payment_method=v['paymentMethod'],
        user=request.user,
    )
    receipt = RECEIPT_QS.get(pk=receipt.pk)
    return Response(format_receipt(receipt), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def receipts(request):
    qs = RECEIPT_QS.all()
    if request.query_params.get('patient'):
        qs = qs.filter(patient_id=request.query_params['patient'])
    return Response([format_receipt(r) for r in qs.order_by('-payment_date', '-id')])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def receipts_with_claim_status(request):
    qs = RECEIPT_QS.order_by('-payment_date', '-id')
    return Response([
        format_receipt(r, claim_status=receipt_service.claim_status_for(r)) for r in qs
    ])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def receipt_detail(request, pk):
    receipt = get_or_404(Receipt, pk, 'Receipt', RECEIPT_QS)
    return Response(format_receipt(receipt))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def receipt_by_number(request, number):
    receipt = RECEIPT_QS.filter(receipt_number=number).first()
    if receipt is None:
        raise NotFound('Receipt not found')
    return Response(format_receipt(receipt))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def validate_receipt(request):
    """Record that a department has checked a receipt before serving the patient."""
    s = ValidateReceiptSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    receipt = receipt_service.validate_receipt(
        receipt_number=s.validated_data['receiptNumber'],
        department=s.validated_data['department'],
        user=request.user,
    )
    receipt = RECEIPT_QS.get(pk=receipt.pk)
    return Response({
        'valid': True,
        'receipt': format_receipt(receipt),
        'message': 'Receipt validated successfully',
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def reverse_receipt(request, pk):
    receipt = get_or_404(Receipt, pk, 'Receipt')
    return Response(receipt_service.reverse_receipt(receipt, user=request.user))
