import logging

from django.db import transaction

from clinic import ids
from clinic.models import Prescription, PrescriptionMedicine
from ._fields import assign
from .patients import resolve_patient

logger = logging.getLogger(__name__)

FIELDS = {
    'patientName': 'patient_name',
    'patientAge': 'patient_age',
    'diagnosis': 'diagnosis',
    'labTests': 'lab_tests',
    'doctorNotes': 'doctor_notes',
    'precautions': 'precautions',
    'generatedText': 'generated_text',
    'followUpDate': 'follow_up_date',
    'status': 'status',
}


def _link_patient(rx: Prescription, data: dict) -> None:
    if 'patientId' not in data:
        return
    patient = resolve_patient(data['patientId'])
    changed = (patient.pk if patient else None) != rx.patient_id
    rx.patient = patient
    if patient is None:
        return
    # snapshot follows the linked patient unless the body names it explicitly
    if not data.get('patientName') and (changed or not rx.patient_name):
        rx.patient_name = patient.name
    if data.get('patientAge') is None and (changed or rx.patient_age is None):
        rx.patient_age = patient.age


def replace_medicines(rx: Prescription, lines) -> list[PrescriptionMedicine]:
    """Swap the prescription's medicine lines for ``lines``, keeping their order."""
    rx.medicines.all().delete()
    rows = [
        PrescriptionMedicine(
            prescription=rx,
            medicine_name=line['medicineName'],
            category=line.get('category', ''),
            dosage=line.get('dosage', ''),
            frequency=line.get('frequency', ''),
            duration=line.get('duration', ''),
            quantity=line.get('quantity', 1),
        )
        for line in lines
    ]
    # bulk_create does not return primary keys on every backend
    for row in rows:
        row.save()
    return rows


def create_prescription(*, data: dict) -> Prescription:
    with transaction.atomic():
        rx = Prescription(id=data.get('id') or ids.generate_id(ids.PRESCRIPTION, Prescription))
        assign(rx, data, FIELDS)
        _link_patient(rx, data)
        rx.save(force_insert=True)
        lines = replace_medicines(rx, data.get('medicines') or [])
    logger.info("prescription %s created with %d medicines", rx.id, len(lines))
    return rx


def update_prescription(rx: Prescription, *, data: dict) -> Prescription:
    with transaction.atomic():
        assign(rx, data, FIELDS)
        _link_patient(rx, data)
        rx.save()
        if 'medicines' in data:
            replace_medicines(rx, data['medicines'] or [])
    logger.info("prescription %s updated", rx.id)
    return rx


def delete_prescription(rx: Prescription) -> int:
    """Delete ``rx``; its medicine lines go with it."""
    lines = rx.medicines.count()
    rx_id = rx.id
    rx.delete()
    logger.info("prescription %s deleted with %d medicine lines", rx_id, lines)
    return lines
