"""
Pharmacy stock movements.

All stock leaves through the main pharmacy: branches request drugs from
it, and only the main pharmacy may destroy or return stock.  Every
movement locks the inventory rows it touches.
"""
import logging
from datetime import timedelta
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Count, F, Sum
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from records.models import DrugDisposal, DrugTransfer, InventoryItem, Pharmacy, User
from records.services.audit import log_action

logger = logging.getLogger(__name__)


def main_pharmacy() -> Pharmacy:
    pharmacy = Pharmacy.current_default()
    if pharmacy is None:
        raise NotFound('Main pharmacy not found')
    return pharmacy


def delete_pharmacy(pharmacy: Pharmacy) -> None:
    if pharmacy.is_main_pharmacy:
        raise ValidationError('Cannot delete main pharmacy')
    if pharmacy.inventory.exists():
        raise ValidationError('Cannot delete pharmacy with existing inventory. Transfer items first.')
    pharmacy.delete()
    logger.info('Pharmacy %s removed', pharmacy.name)


def inventory_alerts(qs, today=None) -> dict:
    """Split stock lines into low, expiring and expired buckets.

    Lines expiring today count as expiring soon, not expired.
    """
    today = today or timezone.localdate()
    horizon = today + timedelta(days=settings.EXPIRY_ALERT_DAYS)
    low_stock = list(qs.filter(quantity__lte=F('reorder_level')))
    expiring_soon = list(qs.filter(expiry_date__gte=today, expiry_date__lte=horizon))
    expired = list(qs.filter(expiry_date__lt=today))
    return {
        'lowStock': low_stock,
        'expiringSoon': expiring_soon,
        'expired': expired,
        'summary': {
            'lowStockCount': len(low_stock),
            'expiringSoonCount': len(expiring_soon),
            'expiredCount': len(expired),
        },
    }


# ---------------------------------------------------------------------
# Transfers
# ---------------------------------------------------------------------
def request_transfer(*, user: User, drug_name: str, to_pharmacy: Pharmacy,
                     requested_quantity: int, notes: str = '') -> DrugTransfer:
    """Raise a transfer out of the main pharmacy.

    A branch asking the main pharmacy for stock names the main pharmacy as
    ``to_pharmacy``; the drugs then go to the requester's own branch.
    """
    own = user.assigned_pharmacy
    if own is None:
        raise ValidationError('You are not assigned to any pharmacy')
    if not own.is_main_pharmacy and not to_pharmacy.is_main_pharmacy:
        raise ValidationError('Transfers must involve the main pharmacy')
    source = main_pharmacy()
    destination = own if to_pharmacy.pk == source.pk else to_pharmacy
    if destination.pk == source.pk:
        raise ValidationError('Source and destination pharmacy must differ')
    drug = InventoryItem.objects.filter(name=drug_name, pharmacy=source).order_by('expiry_date').first()
    if drug is None:
        raise NotFound('Drug not found in main pharmacy inventory')
    transfer = DrugTransfer.objects.create(
        drug=drug,
        from_pharmacy=source,
        to_pharmacy=destination,
        requested_quantity=requested_quantity,
        requested_by=user,
        notes=notes or '',
    )
    logger.info('Transfer %s requested: %s x%s %s -> %s',
                transfer.pk, drug.name, requested_quantity, source.name, destination.name)
    return transfer


def _ensure_pending(transfer: DrugTransfer, verb: str) -> None:
    if transfer.status != DrugTransfer.STATUS_PENDING:
        raise ValidationError(f'Can only {verb} pending requests')


def approve_transfer(transfer: DrugTransfer, *, user: User,
                     approved_quantity: Optional[int] = None) -> DrugTransfer:
    with transaction.atomic():
        transfer = (DrugTransfer.objects.select_for_update()
                    .select_related('drug', 'from_pharmacy', 'to_pharmacy')
                    .get(pk=transfer.pk))
        _ensure_pending(transfer, 'approve')
        quantity = approved_quantity or transfer.requested_quantity
        source = (InventoryItem.objects.select_for_update()
                  .filter(pk=transfer.drug_id, pharmacy=transfer.from_pharmacy_id).first())
        available = source.quantity if source else 0
        if source is None or available < quantity:
            raise ValidationError(
                f'Insufficient stock in {transfer.from_pharmacy.name}. Available: {available}'
            )
        source.quantity -= quantity
        source.save(update_fields=['quantity', 'updated_at'])

        destination = (InventoryItem.objects.select_for_update()
                       .filter(name=source.name, pharmacy=transfer.to_pharmacy_id,
                               batch_number=source.batch_number).first())
        if destination is not None:
            destination.quantity += quantity
            destination.save(update_fields=['quantity', 'updated_at'])
        else:
            destination = InventoryItem.objects.get(pk=source.pk)
            destination.pk = None
            destination.id = None
            destination._state.adding = True
            destination.pharmacy_id = transfer.to_pharmacy_id
            destination.quantity = quantity
            destination.save()

        now = timezone.now()
        transfer.approved_quantity = quantity
        transfer.reviewed_by = user
        transfer.reviewed_at = now
        transfer.completed_by = user
        transfer.completed_at = now
        transfer.status = DrugTransfer.STATUS_COMPLETED
        transfer.save()
    logger.info('Transfer %s approved: %s x%s moved %s -> %s', transfer.pk, source.name, quantity,
                transfer.from_pharmacy.name, transfer.to_pharmacy.name)
    log_action(user=user, action='transfer_approve', object_type='drug_transfer', object_id=transfer.pk,
               detail={'quantity': quantity})
    return transfer


def reject_transfer(transfer: DrugTransfer, *, user: User, reason: str) -> DrugTransfer:
    _ensure_pending(transfer, 'reject')
    if not (reason or '').strip():
        raise ValidationError('Rejection reason is required')
    transfer.status = DrugTransfer.STATUS_REJECTED
    transfer.rejection_reason = reason.strip()
    transfer.reviewed_by = user
    transfer.reviewed_at = timezone.now()
    transfer.save()
    logger.info('Transfer %s rejected: %s', transfer.pk, transfer.rejection_reason)
    log_action(user=user, action='transfer_reject', object_type='drug_transfer', object_id=transfer.pk,
               detail={'reason': transfer.rejection_reason})
    return transfer


# ---------------------------------------------------------------------
# Disposals
# ---------------------------------------------------------------------
def dispose(*, user: User, pharmacy: Pharmacy, drug_id, quantity: int, disposal_type: str,
            reason: str, supplier_return_details: Optional[dict] = None, notes: str = '') -> DrugDisposal:
    if not pharmacy.is_main_pharmacy:
        raise ValidationError('Drug disposal can only be done from Main Pharmacy')
    with transaction.atomic():
        item = InventoryItem.objects.select_for_update().filter(pk=drug_id, pharmacy=pharmacy).first()
        if item is None:
            raise NotFound('Drug not found in pharmacy')
        if item.quantity < quantity:
            raise ValidationError(f'Insufficient stock. Available: {item.quantity}')
        disposal = DrugDisposal.objects.create(
            drug=item,
            pharmacy=pharmacy,
            quantity=quantity,
            disposal_type=disposal_type,
            reason=reason,
            disposed_by=user,
            supplier_return_details=(
                supplier_return_details if disposal_type == DrugDisposal.TYPE_RETURN else None
            ),
            batch_number=item.batch_number,
            expiry_date=item.expiry_date,
            notes=notes or '',
        )
        item.quantity -= quantity
        item.save(update_fields=['quantity', 'updated_at'])
    logger.info('Disposal %s: %s x%s (%s)', disposal.pk, item.name, quantity, disposal_type)
    log_action(user=user, action='drug_dispose', object_type='drug_disposal', object_id=disposal.pk,
               detail={'quantity': quantity, 'type': disposal_type})
    return disposal


def disposal_stats(qs) -> dict:
    by_type = [
        {'type': row['disposal_type'], 'count': row['count'], 'totalQuantity': row['total']}
        for row in qs.order_by().values('disposal_type')
        .annotate(count=Count('id'), total=Sum('quantity'))
        .order_by('disposal_type')
    ]
    return {'totalDisposals': qs.count(), 'byType': by_type}
