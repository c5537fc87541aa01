"""
Lab and radiology orders and their results.

Doctors place orders.  Lab technicians and radiologists may order only
for walk-in external investigations.  The first result entry signs the
order; later edits are tracked separately so the original signer stays
on record.
"""
import logging
from typing import Optional

from django.utils import timezone
from rest_framework.exceptions import PermissionDenied, ValidationError

from records.models import Encounter, EncounterCharge, LabOrder, Patient, RadiologyOrder, User
from records.services.audit import log_action

logger = logging.getLogger(__name__)

EXTERNAL_INVESTIGATION = 'External Investigation'


def _check_orderer(user: User, encounter: Optional[Encounter], technician_role: str, noun: str) -> None:
    if user.role == technician_role:
        if encounter is None or encounter.type != EXTERNAL_INVESTIGATION:
            raise PermissionDenied(f'{noun} can only order for External Investigations.')
    elif user.role != User.ROLE_DOCTOR:
        raise PermissionDenied('Not authorized to place this order.')


def _check_links(patient: Patient, encounter: Optional[Encounter], charge: Optional[EncounterCharge]) -> None:
    if encounter is not None and encounter.patient_id != patient.pk:
        raise ValidationError('Encounter does not belong to this patient')
    if charge is not None and charge.patient_id != patient.pk:
        raise ValidationError('Charge does not belong to this patient')


def order_lab(*, user: User, patient: Patient, test_name: str, encounter: Optional[Encounter] = None,
              charge: Optional[EncounterCharge] = None, notes: str = '') -> LabOrder:
    _check_orderer(user, encounter, 'lab_technician', 'Lab Technicians')
    _check_links(patient, encounter, charge)
    order = LabOrder.objects.create(
        doctor=user, patient=patient, encounter=encounter, charge=charge,
        test_name=test_name, notes=notes or '',
    )
    logger.info('Lab order %s (%s) placed for patient %s', order.pk, test_name, patient.pk)
    return order


def record_lab_result(order: LabOrder, *, result: str, user: User) -> LabOrder:
    first_save = not order.result or order.status == LabOrder.STATUS_PENDING
    order.result = result
    order.status = LabOrder.STATUS_COMPLETED
    if first_save:
        order.signed_by = user
        order.signed_at = timezone.now()
    else:
        order.last_modified_by = user
        order.last_modified_at = timezone.now()
    order.save()
    logger.info('Lab order %s result %s by %s', order.pk, 'signed' if first_save else 'amended', user.pk)
    log_action(user=user, action='lab_result', object_type='lab_order', object_id=order.pk,
               detail={'amended': not first_save})
    return order


def approve_lab_result(order: LabOrder, *, user: User) -> LabOrder:
    if user.role != 'lab_scientist':
        raise PermissionDenied('Only Lab Scientists can approve results.')
    if order.status != LabOrder.STATUS_COMPLETED:
        raise ValidationError('Cannot approve a result that has not been entered')
    order.approved_by = user
    order.approved_at = timezone.now()
    order.save(update_fields=['approved_by', 'approved_at', 'updated_at'])
    log_action(user=user, action='lab_approve', object_type='lab_order', object_id=order.pk)
    return order


def order_radiology(*, user: User, patient: Patient, scan_type: str, encounter: Optional[Encounter] = None,
                    charge: Optional[EncounterCharge] = None) -> RadiologyOrder:
    _check_orderer(user, encounter, 'radiologist', 'Radiologists')
    _check_links(patient, encounter, charge)
    order = RadiologyOrder.objects.create(
        doctor=user, patient=patient, encounter=encounter, charge=charge, scan_type=scan_type,
    )
    logger.info('Radiology order %s (%s) placed for patient %s', order.pk, scan_type, patient.pk)
    return order


def record_radiology_report(order: RadiologyOrder, *, report: str, user: User,
                            result_image: Optional[str] = None) -> RadiologyOrder:
    order.report = report
    if result_image is not None:
        order.result_image = result_image
    order.status = RadiologyOrder.STATUS_COMPLETED
    order.signed_by = user
    order.report_date = timezone.now()
    order.save()
    log_action(user=user, action='radiology_report', object_type='radiology_order', object_id=order.pk)
    return order
