"""
Authentication views.

``login_view`` accepts an email (or username) and password and hands back
both a legacy DRF token and a JWT pair, so older clients sending
``Authorization: Token <key>`` keep working next to ``Bearer`` clients.
Kept apart from the resource views so the authentication classes never
import view code.
"""
from __future__ import annotations

import logging

from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import AuthenticationFailed, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from records.serializers.users import LoginSerializer
from records.services import users as user_service
from records.services.audit import log_action
from records.services.formatting import format_user

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    identifier = s.validated_data['identifier']
    ip = request.META.get('REMOTE_ADDR')

    user = user_service.login(request, identifier, s.validated_data['password'])
    if user is None:
        logger.warning('Failed login for %s from %s', identifier, ip)
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'identifier': identifier, 'ip': ip})
        raise AuthenticationFailed('Invalid email or password')

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': ip})

    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    payload = format_user(user)
    payload.update({
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'user': format_user(user),
    })
    return Response(payload)

# ScopedRateThrottle reads throttle_scope off the view function
login_view.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token for a refresh token."""
    resp = TokenRefreshView.as_view()(request._request)
    data = dict(resp.data)
    if 'access' in data and 'jwt_access' not in data:
        data['jwt_access'] = data.pop('access')
    if 'refresh' in data:
        data['jwt_refresh'] = data.pop('refresh')
    return Response(data, status=resp.status_code)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def jwt_logout_view(request):
    """Blacklist the given refresh token, or every outstanding one of the user."""
    refresh = request.data.get('refresh')
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
        except TokenError as e:
            raise ValidationError(str(e))
        count = 1
    else:
        count = 0
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    logger.info('User %s logged out (%d refresh tokens blacklisted)', request.user.pk, count)
    return Response({'message': 'Logged out', 'blacklisted': count})
