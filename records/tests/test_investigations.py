import pytest
from django.urls import reverse

from records.models import Encounter, LabOrder, OperationLog, RadiologyOrder, User

from .helpers import client_for, make_user

pytestmark = pytest.mark.django_db


@pytest.fixture
def doctor(db):
    return make_user('doctor@example.com', User.ROLE_DOCTOR)


@pytest.fixture
def technician(db):
    return make_user('labtech@example.com', 'lab_technician')


@pytest.fixture
def scientist(db):
    return make_user('scientist@example.com', 'lab_scientist')


@pytest.fixture
def radiologist(db):
    return make_user('radiologist@example.com', 'radiologist')


@pytest.fixture
def lab_order(doctor, make_patient, encounter_for):
    patient = make_patient()
    return LabOrder.objects.create(doctor=doctor, patient=patient, encounter=encounter_for(patient, doctor),
                                   test_name='Full Blood Count')


def test_doctor_orders_lab(doctor, make_patient, encounter_for):
    patient = make_patient()
    encounter = encounter_for(patient, doctor)
    resp = client_for(doctor).post(reverse('lab-orders'), {
        'patientId': patient.id, 'encounterId': encounter.id, 'testName': 'Malaria Parasite',
    }, format='json')
    assert resp.status_code == 201
    assert resp.data['status'] == 'pending'
    assert resp.data['doctor']['id'] == doctor.id

    listed = client_for(doctor).get(reverse('lab-orders-by-encounter', args=[encounter.id])).data
    assert [o['testName'] for o in listed] == ['Malaria Parasite']


def test_technician_orders_only_for_external_investigations(technician, make_patient):
    patient = make_patient()
    client = client_for(technician)
    outpatient = Encounter.objects.create(patient=patient)
    resp = client.post(reverse('lab-orders'), {
        'patientId': patient.id, 'encounterId': outpatient.id, 'testName': 'FBC',
    }, format='json')
    assert resp.status_code == 403

    external = Encounter.objects.create(patient=patient, type='External Investigation')
    resp = client.post(reverse('lab-orders'), {
        'patientId': patient.id, 'encounterId': external.id, 'testName': 'FBC',
    }, format='json')
    assert resp.status_code == 201


def test_cashier_cannot_order(cashier_client, make_patient):
    resp = cashier_client.post(reverse('lab-orders'), {'patientId': make_patient().id, 'testName': 'FBC'},
                               format='json')
    assert resp.status_code == 403
    assert not LabOrder.objects.exists()


def test_order_encounter_must_belong_to_patient(doctor, make_patient, encounter_for):
    other = encounter_for(make_patient())
    resp = client_for(doctor).post(reverse('lab-orders'), {
        'patientId': make_patient().id, 'encounterId': other.id, 'testName': 'FBC',
    }, format='json')
    assert resp.status_code == 400
    assert resp.data['message'] == 'Encounter does not belong to this patient'


def test_first_result_signs_later_edits_are_tracked(lab_order, technician, scientist):
    resp = client_for(technician).put(reverse('lab-result', args=[lab_order.id]), {'result': 'Hb 12.5'},
                                      format='json')
    assert resp.status_code == 200
    assert resp.data['status'] == 'completed'
    assert resp.data['signedBy']['id'] == technician.id
    assert resp.data['signedAt'] is not None
    assert resp.data['lastModifiedBy'] is None

    resp = client_for(scientist).put(reverse('lab-result', args=[lab_order.id]), {'result': 'Hb 12.8'},
                                     format='json')
    assert resp.data['result'] == 'Hb 12.8'
    assert resp.data['signedBy']['id'] == technician.id
    assert resp.data['lastModifiedBy']['id'] == scientist.id
    assert OperationLog.objects.filter(action='lab_result', object_id=str(lab_order.id)).count() == 2


def test_only_scientist_approves(lab_order, technician, scientist):
    resp = client_for(scientist).put(reverse('lab-approve', args=[lab_order.id]))
    assert resp.status_code == 400

    client_for(technician).put(reverse('lab-result', args=[lab_order.id]), {'result': 'Hb 12.5'}, format='json')
    resp = client_for(technician).put(reverse('lab-approve', args=[lab_order.id]))
    assert resp.status_code == 403
    assert resp.data['message'] == 'Only Lab Scientists can approve results.'

    resp = client_for(scientist).put(reverse('lab-approve', args=[lab_order.id]))
    assert resp.status_code == 200
    assert resp.data['approvedBy']['id'] == scientist.id


def test_unknown_lab_order_is_404(scientist):
    resp = client_for(scientist).put(reverse('lab-result', args=[999]), {'result': 'x'}, format='json')
    assert resp.status_code == 404
    assert resp.data['message'] == 'Order not found'


def test_radiology_order_and_report(doctor, radiologist, make_patient, encounter_for):
    patient = make_patient()
    encounter = encounter_for(patient, doctor)
    resp = client_for(radiologist).post(reverse('radiology-orders'), {
        'patientId': patient.id, 'encounterId': encounter.id, 'scanType': 'Chest X-Ray',
    }, format='json')
    assert resp.status_code == 403

    resp = client_for(doctor).post(reverse('radiology-orders'), {
        'patientId': patient.id, 'encounterId': encounter.id, 'scanType': 'Chest X-Ray',
    }, format='json')
    assert resp.status_code == 201
    order_id = resp.data['id']

    resp = client_for(radiologist).put(reverse('radiology-report', args=[order_id]), {
        'report': 'No active lung lesion', 'resultImage': 'https://pacs.local/img/1.png',
    }, format='json')
    assert resp.status_code == 200
    assert resp.data['status'] == 'completed'
    assert resp.data['signedBy']['id'] == radiologist.id
    assert resp.data['reportDate'] is not None
    assert RadiologyOrder.objects.get(pk=order_id).result_image == 'https://pacs.local/img/1.png'

    listed = client_for(doctor).get(reverse('radiology-orders'), {'status': 'completed'}).data
    assert [o['id'] for o in listed] == [order_id]
