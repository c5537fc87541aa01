"""
Staff accounts.

Login lives in ``records.auth_views``; everything here needs an
authenticated user, and everything but ``me`` and ``doctors`` the admin
role.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Pharmacy, User
from ..permissions import IsAdminRole
from ..serializers.users import ResetPasswordSerializer, UserCreateSerializer, UserUpdateSerializer
from ..services import users as user_service
from ..services.formatting import format_user
from .common import get_or_404

USER_QS = User.objects.select_related('assigned_pharmacy')


def _resolve_pharmacy(data: dict) -> dict:
    data = dict(data)
    if 'assignedPharmacyId' in data:
        pharmacy_id = data.pop('assignedPharmacyId')
        data['assigned_pharmacy'] = get_or_404(Pharmacy, pharmacy_id, 'Pharmacy') if pharmacy_id else None
    return data


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    return Response(format_user(request.user))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def all_users(request):
    return Response([format_user(u) for u in USER_QS.order_by('-date_joined', '-id')])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def doctors(request):
    qs = USER_QS.filter(role=User.ROLE_DOCTOR, is_active=True).order_by('name')
    return Response([format_user(u) for u in qs])


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def create_user(request):
    s = UserCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = user_service.create_staff(data=_resolve_pharmacy(s.validated_data), created_by=request.user)
    return Response(format_user(user), status=status.HTTP_201_CREATED)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_detail(request, pk):
    target = get_or_404(User, pk, 'User', USER_QS)
    if request.method == 'PUT':
        s = UserUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        user_service.update_staff(target, _resolve_pharmacy(s.validated_data))
        return Response(format_user(target))

    user_service.set_active(target, active=False, actor=request.user)
    return Response({'message': 'User deactivated successfully'})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def toggle_active(request, pk):
    target = get_or_404(User, pk, 'User', USER_QS)
    user_service.set_active(target, active=not target.is_active, actor=request.user)
    return Response({
        'message': f"User {'activated' if target.is_active else 'deactivated'} successfully",
        'user': format_user(target),
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def reset_password(request, pk):
    target = get_or_404(User, pk, 'User')
    s = ResetPasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user_service.reset_password(target, s.validated_data['password'])
    return Response({'message': 'Password reset successfully'})
