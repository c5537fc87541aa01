"""
Small helpers shared by the resource views.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Type

from django.db import models
from rest_framework.exceptions import NotFound

TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off'}


def get_or_404(model: Type[models.Model], pk, label: Optional[str] = None, queryset=None):
    qs = queryset if queryset is not None else model._default_manager.all()
    obj = qs.filter(pk=pk).first() if str(pk).isdigit() else None
    if obj is None:
        raise NotFound(f'{label or model._meta.verbose_name.title()} not found')
    return obj


def bool_param(value: Optional[str]) -> Optional[bool]:
    """Parse a query-string boolean; anything unrecognised means "not given"."""
    if value is None:
        return None
    value = value.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return None


def apply_fields(instance: models.Model, data: Dict[str, Any]) -> models.Model:
    """Assign the supplied (already validated) fields and save."""
    for field, value in data.items():
        setattr(instance, field, value)
    instance.save()
    return instance
