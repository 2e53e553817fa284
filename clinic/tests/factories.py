from django.utils import timezone

from clinic.models import Patient, Prescription, PrescriptionMedicine, StockItem, User
from clinic.permissions import default_permissions_for

PASSWORD = 'Fr0nt-Desk-2024!'


def make_user(username, role, password=PASSWORD, **extra):
    u = User(username=username, role=role, **extra)
    if 'permissions' not in extra:
        u.permissions = default_permissions_for(role)
    u.set_password(password)
    u.save()
    return u


def make_patient(pid='PAT-1000AAA', name='Asha Verma', created_at=None, mrn=None, **extra):
    return Patient.objects.create(
        id=pid, mrn=mrn or pid, name=name, created_at=created_at or timezone.now(), **extra
    )


def make_stock(sid='STK-1000AAA', name='Paracetamol', quantity=50, **extra):
    return StockItem.objects.create(id=sid, name=name, quantity=quantity, **extra)


def make_prescription(rx_id='RX-1000AAA', patient=None, medicines=('Paracetamol',)):
    rx = Prescription.objects.create(
        id=rx_id, patient=patient, patient_name=patient.name if patient else 'Walk-in', diagnosis='Fever'
    )
    for name in medicines:
        PrescriptionMedicine.objects.create(prescription=rx, medicine_name=name, dosage='500mg')
    return rx
