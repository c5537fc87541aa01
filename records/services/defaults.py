import logging
from typing import Optional, Type

from rest_framework.exceptions import NotFound

from records.models import SingleDefaultModel, User
from records.services.audit import log_action

logger = logging.getLogger(__name__)


def promote_or_404(model: Type[SingleDefaultModel], pk, *, user: Optional[User] = None,
                   label: str = 'Record', action: Optional[str] = None) -> SingleDefaultModel:
    """Flag ``pk`` as the single default row of ``model``.

    Raises ``NotFound`` before touching any row when ``pk`` does not exist.
    """
    obj = model.promote(pk)
    if obj is None:
        raise NotFound(f'{label} not found')
    logger.info('%s %s is now the default (%s)', label, obj.pk, model.default_flag_field)
    if action:
        log_action(user=user, action=action, object_type=model.__name__.lower(), object_id=obj.pk)
    return obj
