"""
HMO claim endpoints.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import HMO, Claim, Encounter
from ..serializers.claims import ClaimFilterSerializer, ClaimStatusSerializer
from ..services import claims as claim_service
from ..services.formatting import format_claim
from .common import get_or_404


def _filtered(request):
    s = ClaimFilterSerializer(data=request.query_params)
    s.is_valid(raise_exception=True)
    return claim_service.filter_claims(s.validated_data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def generate_claim(request, encounter_id):
    encounter = get_or_404(Encounter, encounter_id, 'Encounter',
                           Encounter.objects.select_related('patient__hmo'))
    claim = claim_service.generate_for_encounter(encounter, user=request.user)
    return Response(format_claim(claim), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def claims(request):
    """``?hmo=&status=&startDate=&endDate=`` narrow the list; newest first."""
    return Response([format_claim(c) for c in _filtered(request)])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def claims_summary(request):
    return Response(claim_service.summarize(_filtered(request)))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def claims_for_hmo(request, hmo_id):
    hmo = get_or_404(HMO, hmo_id, 'HMO')
    return Response([format_claim(c) for c in claim_service.claims_for_hmo(hmo.pk)])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def claim_detail(request, pk):
    claim = get_or_404(Claim, pk, 'Claim',
                       Claim.objects.select_related('patient', 'hmo', 'last_status_by')
                       .prefetch_related('items'))
    return Response(format_claim(claim))


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def claim_status(request, pk):
    claim = get_or_404(Claim, pk, 'Claim')
    s = ClaimStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    claim_service.update_status(
        claim,
        status=v['status'],
        user=request.user,
        rejection_reason=v.get('rejectionReason'),
        notes=v.get('notes'),
    )
    return Response(format_claim(claim))
