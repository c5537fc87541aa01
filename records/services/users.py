"""
Staff account administration.

Accounts are keyed by email.  Django's ``username`` column is filled with
the email so the admin site and ``authenticate()`` keep working.
"""
import logging
from typing import Any, Dict, Optional

from django.contrib.auth import authenticate
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from records.models import User
from records.services.audit import log_action

logger = logging.getLogger(__name__)


def _check_password(password: str, user: Optional[User] = None) -> None:
    try:
        validate_password(password, user=user)
    except DjangoValidationError as e:
        raise ValidationError({'password': e.messages})


def create_staff(*, data: Dict[str, Any], created_by: Optional[User]) -> User:
    email = data['email'].strip().lower()
    if User.objects.filter(email__iexact=email).exists():
        raise ValidationError('User already exists')
    password = data.pop('password')
    _check_password(password)
    user = User.objects.create_user(
        username=email,
        email=email,
        password=password,
        name=data.get('name', ''),
        role=data.get('role', 'receptionist'),
        assigned_pharmacy=data.get('assigned_pharmacy'),
        created_by=created_by,
    )
    logger.info('User %s (%s) created by %s', user.pk, user.role, getattr(created_by, 'pk', None))
    return user


def update_staff(user: User, data: Dict[str, Any]) -> User:
    if 'email' in data:
        email = data['email'].strip().lower()
        if User.objects.filter(email__iexact=email).exclude(pk=user.pk).exists():
            raise ValidationError('User already exists')
        user.email = email
        user.username = email
    for field in ('name', 'role', 'assigned_pharmacy', 'is_active'):
        if field in data:
            setattr(user, field, data[field])
    if 'password' in data:
        _check_password(data['password'], user)
        user.set_password(data['password'])
    user.save()
    return user


def set_active(target: User, *, active: bool, actor: User) -> User:
    if not active and target.pk == actor.pk:
        raise ValidationError('You cannot deactivate your own account')
    target.is_active = active
    target.save(update_fields=['is_active'])
    logger.info('User %s %s by %s', target.pk, 'activated' if active else 'deactivated', actor.pk)
    log_action(user=actor, action='user_toggle_active', object_type='user', object_id=target.pk,
               detail={'isActive': active})
    return target


def reset_password(target: User, password: str) -> User:
    _check_password(password, target)
    target.set_password(password)
    target.save(update_fields=['password'])
    logger.info('Password reset for user %s', target.pk)
    return target


def login(request, identifier: str, password: str) -> Optional[User]:
    """Authenticate by email (or username); stamps ``last_login`` on success."""
    account = User.objects.filter(email__iexact=identifier).first()
    username = account.username if account else identifier
    user = authenticate(request, username=username, password=password)
    if user is not None:
        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])
    return user
