"""
URL table for the EMR API.

Paths follow the front-end's API client, so there are no trailing
slashes.  Every route is named after its view for ``reverse()``.
"""
from django.urls import path

from .auth_views import jwt_logout_view, jwt_refresh_view, login_view
from .views import (
    banks,
    charges,
    claims,
    clinics,
    disposals,
    encounters,
    health,
    hmo_ledger,
    hmos,
    lab,
    patients,
    pharmacies,
    radiology,
    receipts,
    system_settings,
    transfers,
    users,
)


urlpatterns = [
    path('healthz', health.healthz, name='healthz'),
    # Authentication
    path('api/users/login', login_view, name='login'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt-refresh'),
    path('api/auth/logout', jwt_logout_view, name='jwt-logout'),
    # Banks
    path('api/banks', banks.banks, name='banks'),
    path('api/banks/default', banks.default_bank, name='bank-default'),
    path('api/banks/<int:pk>', banks.bank_detail, name='bank-detail'),
    path('api/banks/<int:pk>/set-default', banks.set_default_bank, name='bank-set-default'),
    # System settings
    path('api/settings', system_settings.settings_view, name='settings'),
    # HMOs
    path('api/hmos', hmos.hmos, name='hmos'),
    path('api/hmos/<int:pk>', hmos.hmo_detail, name='hmo-detail'),
    path('api/hmos/<int:pk>/toggle-status', hmos.toggle_hmo_status, name='hmo-toggle-status'),
    # Charges and clinics
    path('api/charges', charges.charges, name='charges'),
    path('api/charges/<int:pk>', charges.charge_detail, name='charge-detail'),
    path('api/clinics', clinics.clinics, name='clinics'),
    path('api/clinics/<int:pk>', clinics.clinic_detail, name='clinic-detail'),
    # Patients
    path('api/patients', patients.patients, name='patients'),
    path('api/patients/recent', patients.recent_patients, name='patients-recent'),
    path('api/patients/<int:pk>', patients.patient_detail, name='patient-detail'),
    path('api/patients/<int:pk>/deposit', patients.patient_deposit, name='patient-deposit'),
    # Encounters
    path('api/encounters', encounters.encounters, name='encounters'),
    path('api/encounters/<int:pk>', encounters.encounter_detail, name='encounter-detail'),
    path('api/encounter-charges', encounters.add_encounter_charge, name='encounter-charges'),
    path('api/encounter-charges/encounter/<int:encounter_id>', encounters.charges_for_encounter,
         name='encounter-charges-by-encounter'),
    path('api/encounter-charges/patient/<int:patient_id>', encounters.charges_for_patient,
         name='encounter-charges-by-patient'),
    path('api/encounter-charges/<int:pk>', encounters.encounter_charge_detail, name='encounter-charge-detail'),
    # Receipts
    path('api/receipts', receipts.receipts, name='receipts'),
    path('api/receipts/encounter', receipts.pay_encounter, name='receipts-pay-encounter'),
    path('api/receipts/with-claim-status', receipts.receipts_with_claim_status, name='receipts-claim-status'),
    path('api/receipts/validate', receipts.validate_receipt, name='receipts-validate'),
    path('api/receipts/number/<str:number>', receipts.receipt_by_number, name='receipt-by-number'),
    path('api/receipts/<int:pk>', receipts.receipt_detail, name='receipt-detail'),
    path('api/receipts/<int:pk>/reverse', receipts.reverse_receipt, name='receipt-reverse'),
    # Claims
    path('api/claims', claims.claims, name='claims'),
    path('api/claims/summary', claims.claims_summary, name='claims-summary'),
    path('api/claims/generate/<int:encounter_id>', claims.generate_claim, name='claims-generate'),
    path('api/claims/hmo/<int:hmo_id>', claims.claims_for_hmo, name='claims-by-hmo'),
    path('api/claims/<int:pk>', claims.claim_detail, name='claim-detail'),
    path('api/claims/<int:pk>/status', claims.claim_status, name='claim-status'),
    # HMO ledger
    path('api/hmo-transactions/deposit', hmo_ledger.hmo_deposit, name='hmo-deposit'),
    path('api/hmo-transactions/statement/<int:hmo_id>', hmo_ledger.hmo_statement, name='hmo-statement'),
    # Lab and radiology
    path('api/lab', lab.lab_orders, name='lab-orders'),
    path('api/lab/encounter/<int:encounter_id>', lab.lab_orders_for_encounter, name='lab-orders-by-encounter'),
    path('api/lab/<int:pk>/result', lab.lab_result, name='lab-result'),
    path('api/lab/<int:pk>/approve', lab.approve_lab_result, name='lab-approve'),
    path('api/radiology', radiology.radiology_orders, name='radiology-orders'),
    path('api/radiology/encounter/<int:encounter_id>', radiology.radiology_orders_for_encounter,
         name='radiology-orders-by-encounter'),
    path('api/radiology/<int:pk>/report', radiology.radiology_report, name='radiology-report'),
    # Pharmacy
    path('api/pharmacies', pharmacies.pharmacies, name='pharmacies'),
    path('api/pharmacies/main', pharmacies.main_pharmacy, name='pharmacy-main'),
    path('api/pharmacies/<int:pk>', pharmacies.pharmacy_detail, name='pharmacy-detail'),
    path('api/inventory', pharmacies.inventory, name='inventory'),
    path('api/inventory/alerts', pharmacies.inventory_alerts, name='inventory-alerts'),
    path('api/inventory/<int:pk>', pharmacies.inventory_detail, name='inventory-detail'),
    path('api/drug-transfers', transfers.transfers, name='drug-transfers'),
    path('api/drug-transfers/<int:pk>/approve', transfers.approve_transfer, name='drug-transfer-approve'),
    path('api/drug-transfers/<int:pk>/reject', transfers.reject_transfer, name='drug-transfer-reject'),
    path('api/drug-disposals', disposals.disposals, name='drug-disposals'),
    path('api/drug-disposals/stats', disposals.disposal_stats, name='drug-disposal-stats'),
    # Users
    path('api/users', users.create_user, name='users'),
    path('api/users/me', users.me, name='users-me'),
    path('api/users/all', users.all_users, name='users-all'),
    path('api/users/doctors', users.doctors, name='users-doctors'),
    path('api/users/<int:pk>', users.user_detail, name='user-detail'),
    path('api/users/<int:pk>/toggle-active', users.toggle_active, name='user-toggle-active'),
    path('api/users/<int:pk>/reset-password', users.reset_password, name='user-reset-password'),
]
