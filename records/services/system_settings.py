"""
Access to the hospital-wide Settings record.

The record is created lazily with its defaults on first read, under a
fixed primary key so concurrent first reads converge on the same row.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from django.db import transaction

from records.models import Setting, User
from records.services.audit import log_action

logger = logging.getLogger(__name__)


def get_settings() -> Setting:
    setting, created = Setting.objects.get_or_create(pk=Setting.SINGLETON_PK)
    if created:
        logger.info('Settings record initialised with defaults')
    return setting


def update_settings(data: Dict[str, Any], user: Optional[User]) -> Tuple[Setting, bool]:
    """Overwrite only the supplied fields; returns ``(setting, created)``."""
    with transaction.atomic():
        setting, created = Setting.objects.select_for_update().get_or_create(pk=Setting.SINGLETON_PK)
        for field, value in data.items():
            setattr(setting, field, value)
        setting.last_updated_by = user
        setting.save()
    logger.info('Settings %s by %s: %s', 'created' if created else 'updated',
                getattr(user, 'pk', None), sorted(data))
    log_action(user=user, action='settings_update', object_type='setting', object_id=setting.pk,
               detail={'fields': sorted(data), 'created': created})
    return setting, created
