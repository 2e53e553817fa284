"""
Referential-integrity policy between clinical records and inventory.

Stock churn must never touch prescription history; deleting a
prescription takes its medicine lines with it.
"""
from datetime import timedelta

import pytest
from django.utils import timezone

from clinic.models import Patient, Prescription, PrescriptionMedicine, StockItem
from clinic.permissions import DEFAULT_PERMISSIONS, default_permissions_for
from clinic.services import users as user_svc
from clinic.services.patients import created_on
from clinic.services.schema import check_clinical_isolation, foreign_keys

from .factories import make_patient, make_prescription, make_stock

pytestmark = pytest.mark.django_db


def _line_counts():
    return {
        rx_id: PrescriptionMedicine.objects.filter(prescription_id=rx_id).count()
        for rx_id in Prescription.objects.values_list('id', flat=True)
    }


def test_deleting_stock_keeps_prescription_medicines():
    patient = make_patient()
    stock = make_stock(name='Paracetamol')
    make_prescription('RX-1', patient, medicines=('Paracetamol', 'Cetirizine'))
    make_prescription('RX-2', patient, medicines=('Paracetamol',))
    PrescriptionMedicine.objects.create(prescription=None, medicine_name='Paracetamol', category='Analgesic')
    before = _line_counts()
    total_before = PrescriptionMedicine.objects.count()

    stock.delete()

    assert not StockItem.objects.filter(pk=stock.pk).exists()
    assert _line_counts() == before
    assert PrescriptionMedicine.objects.count() == total_before
    assert PrescriptionMedicine.objects.filter(medicine_name='Paracetamol').count() == 3


def test_deleting_stock_through_api_keeps_clinical_rows(client_for, receptionist_user):
    make_prescription('RX-1', medicines=('Amoxicillin',))
    stock = make_stock(name='Amoxicillin')
    client = client_for(receptionist_user)

    r = client.delete(f'/api/stock/{stock.id}')

    assert r.status_code == 200
    assert PrescriptionMedicine.objects.filter(prescription_id='RX-1', medicine_name='Amoxicillin').count() == 1


def test_deleting_prescription_cascades_to_its_medicines():
    make_prescription('RX-1', medicines=('A', 'B', 'C'))
    make_prescription('RX-2', medicines=('A',))
    master = PrescriptionMedicine.objects.create(prescription=None, medicine_name='A')

    Prescription.objects.get(pk='RX-1').delete()

    assert PrescriptionMedicine.objects.filter(prescription_id='RX-1').count() == 0
    assert PrescriptionMedicine.objects.filter(prescription_id='RX-2').count() == 1
    assert PrescriptionMedicine.objects.filter(pk=master.pk).exists()


def test_master_list_entry_round_trips_category():
    med = PrescriptionMedicine.objects.create(
        prescription=None, medicine_name='Omeprazole', category='Antacid', dosage='20mg'
    )

    fresh = PrescriptionMedicine.objects.get(pk=med.pk)

    assert fresh.prescription_id is None
    assert fresh.is_master
    assert fresh.category == 'Antacid'


def test_same_day_filter_includes_today_and_excludes_yesterday():
    now = timezone.now()
    make_patient('PAT-TODAY', created_at=now)
    make_patient('PAT-YESTERDAY', created_at=now - timedelta(days=1))

    ids = set(created_on(Patient.objects.all()).values_list('id', flat=True))

    assert ids == {'PAT-TODAY'}


def test_new_doctor_gets_exactly_the_doctor_defaults(admin_user):
    doctor = user_svc.create_user(admin_user, data={
        'username': 'dr_house', 'password': 'Vic0din-Diagnosis', 'role': 'Doctor',
    })

    doctor.refresh_from_db()
    assert set(doctor.permissions) == {
        'view_patients', 'edit_patients', 'view_prescriptions',
        'create_prescriptions', 'view_lab_results', 'view_medicines',
    }
    assert set(doctor.permissions) == set(DEFAULT_PERMISSIONS['Doctor'])
    assert doctor.has_capability('create_prescriptions')
    assert not doctor.has_capability('manage_stock')


def test_doctor_permissions_can_be_overridden(admin_user):
    doctor = user_svc.create_user(admin_user, data={
        'username': 'dr_override', 'password': 'Vic0din-Diagnosis', 'role': 'Doctor',
        'permissions': ['view_patients', 'view_reports', 'view_patients'],
    })

    assert doctor.permissions == ['view_patients', 'view_reports']
    assert not doctor.has_capability('create_prescriptions')


def test_default_permissions_are_in_canonical_order():
    assert default_permissions_for('Doctor') == [
        'view_patients', 'edit_patients', 'view_lab_results',
        'view_prescriptions', 'create_prescriptions', 'view_medicines',
    ]
    assert default_permissions_for('Nobody') == []


def test_clinical_medicines_reference_only_prescriptions():
    targets = {target.lower() for _, target, _ in foreign_keys('PrescriptionMedicines')}

    assert targets == {'prescriptions'}
    check_clinical_isolation()
