"""
Hospital-wide settings shown on printed documents.

Reading is public so the login screen and printouts can show the
hospital name and logo; updating is restricted to administrators.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotAuthenticated, PermissionDenied
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ..serializers.system_settings import SettingsSerializer
from ..services.formatting import format_settings
from ..services.system_settings import get_settings, update_settings


@api_view(['GET', 'PUT'])
@permission_classes([AllowAny])
def settings_view(request):
    if request.method == 'GET':
        return Response(format_settings(get_settings()))

    user = request.user
    if not (user and user.is_authenticated):
        raise NotAuthenticated()
    if getattr(user, 'role', None) != 'admin':
        raise PermissionDenied()
    s = SettingsSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    setting, created = update_settings(dict(s.validated_data), user)
    return Response(format_settings(setting),
                    status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)
