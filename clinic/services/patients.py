import logging
import math

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from clinic import ids
from clinic.models import Patient
from ._fields import assign

logger = logging.getLogger(__name__)

FIELDS = {
    'mrn': 'mrn',
    'name': 'name',
    'age': 'age',
    'gender': 'gender',
    'phone': 'phone',
    'address': 'address',
    'visitDate': 'visit_date',
    'symptoms': 'symptoms',
}


def created_on(qs, day=None):
    """Restrict ``qs`` to rows created on ``day`` (local date, default today)."""
    return qs.filter(created_at__date=day or timezone.localdate())


def create_patient(actor, *, data: dict) -> Patient:
    with transaction.atomic():
        patient = Patient(id=data.get('id') or ids.generate_id(ids.PATIENT, Patient))
        assign(patient, data, FIELDS)
        if not patient.mrn:
            patient.mrn = patient.id
        patient.created_by = getattr(actor, 'username', '') or ''
        patient.created_by_role = getattr(actor, 'role', '') or ''
        patient.save(force_insert=True)
    logger.info("patient %s registered by %s", patient.id, patient.created_by)
    return patient


def update_patient(patient: Patient, *, data: dict) -> Patient:
    with transaction.atomic():
        assign(patient, data, FIELDS)
        if not patient.mrn:
            patient.mrn = patient.id
        patient.save()
    return patient


def delete_patient(patient: Patient) -> None:
    pid = patient.id
    patient.delete()
    logger.info("patient %s deleted", pid)


def list_patients(*, search=None, page=1, limit=20, created_today=False):
    qs = Patient.objects.all()
    if search:
        qs = qs.filter(
            Q(name__icontains=search)
            | Q(id__icontains=search)
            | Q(phone__icontains=search)
            | Q(mrn__icontains=search)
        )
    if created_today:
        qs = created_on(qs)
    total = qs.count()
    start = (page - 1) * limit
    meta = {
        'total': total,
        'page': page,
        'limit': limit,
        'totalPages': math.ceil(total / limit) if total else 0,
    }
    return list(qs[start:start + limit]), meta


def resolve_patient(patient_id):
    """Patient for an optional reference; unknown ids are rejected."""
    if not patient_id:
        return None
    patient = Patient.objects.filter(pk=patient_id).first()
    if patient is None:
        raise ValueError(f"unknown patient {patient_id}")
    return patient
