"""
Response payload builders.

Every resource is rendered as a plain dict with camelCase keys, the
shape the front-end has always consumed.  Money is stored as
``Decimal`` and emitted as a JSON number.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from records.models import (
    Bank,
    Charge,
    Claim,
    ClaimItem,
    Clinic,
    DrugDisposal,
    DrugTransfer,
    Encounter,
    EncounterCharge,
    HMO,
    HMOTransaction,
    InventoryItem,
    LabOrder,
    Patient,
    Pharmacy,
    RadiologyOrder,
    Receipt,
    Setting,
    User,
)


def money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def user_ref(user: Optional[User]) -> Optional[dict]:
    if user is None:
        return None
    return {'id': user.id, 'name': user.display_name, 'role': user.role}


def pharmacy_ref(pharmacy: Optional[Pharmacy]) -> Optional[dict]:
    if pharmacy is None:
        return None
    return {'id': pharmacy.id, 'name': pharmacy.name, 'isMainPharmacy': pharmacy.is_main_pharmacy}


def format_bank(bank: Bank) -> dict:
    return {
        'id': bank.id,
        'bankName': bank.bank_name,
        'accountName': bank.account_name,
        'accountNumber': bank.account_number,
        'branchName': bank.branch_name,
        'swiftCode': bank.swift_code,
        'isActive': bank.is_active,
        'isDefault': bank.is_default,
        'createdAt': iso(bank.created_at),
        'updatedAt': iso(bank.updated_at),
    }


def format_settings(setting: Setting) -> dict:
    return {
        'id': setting.id,
        'hospitalName': setting.hospital_name,
        'hospitalLogo': setting.hospital_logo,
        'address': setting.address,
        'phone': setting.phone,
        'email': setting.email,
        'website': setting.website,
        'systemVersion': setting.system_version,
        'reportHeader': setting.report_header,
        'reportFooter': setting.report_footer,
        'currencySymbol': setting.currency_symbol,
        'lastUpdatedBy': user_ref(setting.last_updated_by),
        'createdAt': iso(setting.created_at),
        'updatedAt': iso(setting.updated_at),
    }


def format_user(user: User) -> dict:
    return {
        'id': user.id,
        'name': user.display_name,
        'email': user.email,
        'username': user.username,
        'role': user.role,
        'isActive': user.is_active,
        'assignedPharmacy': pharmacy_ref(user.assigned_pharmacy),
        'lastLogin': iso(user.last_login),
        'createdBy': user.created_by_id,
        'createdAt': iso(user.date_joined),
    }


def format_hmo(hmo: HMO) -> dict:
    return {
        'id': hmo.id,
        'name': hmo.name,
        'code': hmo.code,
        'category': hmo.category,
        'description': hmo.description,
        'active': hmo.active,
        'contactPerson': hmo.contact_person,
        'contactPhone': hmo.contact_phone,
        'contactEmail': hmo.contact_email,
        'createdAt': iso(hmo.created_at),
        'updatedAt': iso(hmo.updated_at),
    }


def format_charge(charge: Charge) -> dict:
    return {
        'id': charge.id,
        'name': charge.name,
        'type': charge.type,
        'standardFee': money(charge.standard_fee),
        'retainershipFee': money(charge.retainership_fee),
        'nhiaFee': money(charge.nhia_fee),
        'kschmaFee': money(charge.kschma_fee),
        'basePrice': money(charge.base_price),
        'active': charge.active,
        'department': charge.department,
        'description': charge.description,
        'code': charge.code,
        'resultTemplate': charge.result_template,
        'createdAt': iso(charge.created_at),
        'updatedAt': iso(charge.updated_at),
    }


def format_clinic(clinic: Clinic) -> dict:
    return {
        'id': clinic.id,
        'name': clinic.name,
        'description': clinic.description,
        'department': clinic.department,
        'active': clinic.active,
        'createdAt': iso(clinic.created_at),
        'updatedAt': iso(clinic.updated_at),
    }


def format_patient(patient: Patient) -> dict:
    hmo = patient.hmo
    return {
        'id': patient.id,
        'mrn': patient.mrn,
        'name': patient.name,
        'age': patient.age,
        'gender': patient.gender,
        'contact': patient.contact,
        'address': patient.address,
        'medicalHistory': patient.medical_history,
        'allergies': patient.allergies,
        'provider': patient.provider,
        'hmo': {'id': hmo.id, 'name': hmo.name, 'category': hmo.category} if hmo else None,
        'insuranceNumber': patient.insurance_number,
        'depositBalance': money(patient.deposit_balance),
        'lowDepositThreshold': money(patient.low_deposit_threshold),
        'emergencyContact': {
            'name': patient.emergency_contact_name,
            'phone': patient.emergency_contact_phone,
        },
        'createdAt': iso(patient.created_at),
        'updatedAt': iso(patient.updated_at),
    }


def format_encounter(encounter: Encounter) -> dict:
    patient = encounter.patient
    return {
        'id': encounter.id,
        'patient': {'id': patient.id, 'name': patient.name, 'mrn': patient.mrn, 'provider': patient.provider},
        'doctor': user_ref(encounter.doctor),
        'clinic': {'id': encounter.clinic.id, 'name': encounter.clinic.name} if encounter.clinic else None,
        'type': encounter.type,
        'encounterStatus': encounter.encounter_status,
        'reasonForVisit': encounter.reason_for_visit,
        'paymentValidated': encounter.payment_validated,
        'receiptNumber': encounter.receipt_number,
        'createdAt': iso(encounter.created_at),
        'updatedAt': iso(encounter.updated_at),
    }


def format_encounter_charge(item: EncounterCharge) -> dict:
    return {
        'id': item.id,
        'encounter': item.encounter_id,
        'patient': item.patient_id,
        'charge': item.charge_id,
        'itemType': item.item_type,
        'itemName': item.item_name,
        'quantity': item.quantity,
        'unitPrice': money(item.unit_price),
        'totalAmount': money(item.total_amount),
        'patientPortion': money(item.patient_portion),
        'hmoPortion': money(item.hmo_portion),
        'status': item.status,
        'receipt': item.receipt_id,
        'addedBy': user_ref(item.added_by),
        'notes': item.notes,
        'createdAt': iso(item.created_at),
    }


def format_receipt(receipt: Receipt, *, claim_status: Any = False) -> dict:
    patient = receipt.patient
    payload = {
        'id': receipt.id,
        'receiptNumber': receipt.receipt_number,
        'patient': {'id': patient.id, 'name': patient.name, 'mrn': patient.mrn, 'provider': patient.provider},
        'encounter': receipt.encounter_id,
        'charges': [format_encounter_charge(c) for c in receipt.charges.all()],
        'amountPaid': money(receipt.amount_paid),
        'paymentMethod': receipt.payment_method,
        'cashier': user_ref(receipt.cashier),
        'paymentDate': iso(receipt.payment_date),
        'validated': receipt.validated,
        'validatedBy': [
            {'user': user_ref(v.user), 'department': v.department, 'timestamp': iso(v.timestamp)}
            for v in receipt.validations.all()
        ],
        'createdAt': iso(receipt.created_at),
    }
    if claim_status is not False:
        payload['claimStatus'] = claim_status
    return payload


def format_claim_item(item: ClaimItem) -> dict:
    return {
        'id': item.id,
        'charge': item.charge_id,
        'chargeType': item.charge_type,
        'description': item.description,
        'quantity': item.quantity,
        'unitPrice': money(item.unit_price),
        'totalAmount': money(item.total_amount),
        'patientPortion': money(item.patient_portion),
        'hmoPortion': money(item.hmo_portion),
    }


def format_claim(claim: Claim) -> dict:
    patient = claim.patient
    return {
        'id': claim.id,
        'claimNumber': claim.claim_number,
        'patient': {'id': patient.id, 'name': patient.name, 'mrn': patient.mrn,
                    'insuranceNumber': patient.insurance_number},
        'hmo': {'id': claim.hmo.id, 'name': claim.hmo.name, 'category': claim.hmo.category},
        'encounter': claim.encounter_id,
        'claimItems': [format_claim_item(i) for i in claim.items.all()],
        'totalClaimAmount': money(claim.total_claim_amount),
        'status': claim.status,
        'submittedDate': iso(claim.submitted_date),
        'approvedDate': iso(claim.approved_date),
        'paidDate': iso(claim.paid_date),
        'rejectionReason': claim.rejection_reason,
        'notes': claim.notes,
        'lastStatusBy': user_ref(claim.last_status_by),
        'createdAt': iso(claim.created_at),
        'updatedAt': iso(claim.updated_at),
    }


def format_hmo_transaction(tx: HMOTransaction) -> dict:
    return {
        'id': tx.id,
        'hmo': tx.hmo_id,
        'type': tx.type,
        'amount': money(tx.amount),
        'description': tx.description,
        'reference': tx.reference,
        'recordedBy': user_ref(tx.recorded_by),
        'date': iso(tx.date),
    }


def format_pharmacy(pharmacy: Pharmacy) -> dict:
    return {
        'id': pharmacy.id,
        'name': pharmacy.name,
        'location': pharmacy.location,
        'description': pharmacy.description,
        'isMainPharmacy': pharmacy.is_main_pharmacy,
        'isActive': pharmacy.is_active,
        'createdAt': iso(pharmacy.created_at),
        'updatedAt': iso(pharmacy.updated_at),
    }


def format_inventory_item(item: InventoryItem) -> dict:
    return {
        'id': item.id,
        'name': item.name,
        'pharmacy': pharmacy_ref(item.pharmacy),
        'quantity': item.quantity,
        'price': money(item.price),
        'expiryDate': iso(item.expiry_date),
        'supplier': item.supplier,
        'batchNumber': item.batch_number,
        'barcode': item.barcode,
        'reorderLevel': item.reorder_level,
        'route': item.route,
        'form': item.form,
        'dosage': item.dosage,
        'frequency': item.frequency,
        'drugUnit': item.drug_unit,
        'lowStock': item.is_low_stock,
        'createdAt': iso(item.created_at),
        'updatedAt': iso(item.updated_at),
    }


def format_transfer(transfer: DrugTransfer) -> dict:
    return {
        'id': transfer.id,
        'drug': {'id': transfer.drug.id, 'name': transfer.drug.name, 'batchNumber': transfer.drug.batch_number},
        'fromPharmacy': pharmacy_ref(transfer.from_pharmacy),
        'toPharmacy': pharmacy_ref(transfer.to_pharmacy),
        'requestedQuantity': transfer.requested_quantity,
        'approvedQuantity': transfer.approved_quantity,
        'status': transfer.status,
        'requestedBy': user_ref(transfer.requested_by),
        'reviewedBy': user_ref(transfer.reviewed_by),
        'reviewedAt': iso(transfer.reviewed_at),
        'completedBy': user_ref(transfer.completed_by),
        'completedAt': iso(transfer.completed_at),
        'rejectionReason': transfer.rejection_reason,
        'notes': transfer.notes,
        'createdAt': iso(transfer.created_at),
    }


def format_disposal(disposal: DrugDisposal) -> dict:
    return {
        'id': disposal.id,
        'drug': {'id': disposal.drug.id, 'name': disposal.drug.name},
        'pharmacy': pharmacy_ref(disposal.pharmacy),
        'quantity': disposal.quantity,
        'disposalType': disposal.disposal_type,
        'reason': disposal.reason,
        'disposedBy': user_ref(disposal.disposed_by),
        'supplierReturnDetails': disposal.supplier_return_details,
        'batchNumber': disposal.batch_number,
        'expiryDate': iso(disposal.expiry_date),
        'notes': disposal.notes,
        'disposalDate': iso(disposal.created_at),
    }


def _order_common(order) -> dict:
    patient = order.patient
    return {
        'id': order.id,
        'patient': {'id': patient.id, 'name': patient.name, 'mrn': patient.mrn},
        'doctor': user_ref(order.doctor),
        'encounter': order.encounter_id,
        'charge': {'id': order.charge.id, 'status': order.charge.status} if order.charge else None,
        'status': order.status,
        'signedBy': user_ref(order.signed_by),
        'createdAt': iso(order.created_at),
        'updatedAt': iso(order.updated_at),
    }


def format_lab_order(order: LabOrder) -> dict:
    data = _order_common(order)
    data.update({
        'testName': order.test_name,
        'result': order.result,
        'notes': order.notes,
        'signedAt': iso(order.signed_at),
        'lastModifiedBy': user_ref(order.last_modified_by),
        'lastModifiedAt': iso(order.last_modified_at),
        'approvedBy': user_ref(order.approved_by),
        'approvedAt': iso(order.approved_at),
    })
    return data


def format_radiology_order(order: RadiologyOrder) -> dict:
    data = _order_common(order)
    data.update({
        'scanType': order.scan_type,
        'report': order.report,
        'resultImage': order.result_image,
        'reportDate': iso(order.report_date),
    })
    return data
