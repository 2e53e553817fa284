import logging

from django.db import transaction
from django.utils import timezone

from clinic import ids
from clinic.models import LabResult
from ._fields import assign
from .patients import resolve_patient

logger = logging.getLogger(__name__)

FIELDS = {
    'patientName': 'patient_name',
    'patientAge': 'patient_age',
    'testDate': 'test_date',
    'reportDate': 'report_date',
    'tests': 'tests',
    'notes': 'notes',
    'technician': 'technician',
    'status': 'status',
}


def create_lab_result(*, data: dict) -> LabResult:
    with transaction.atomic():
        result = LabResult(id=data.get('id') or ids.generate_id(ids.LAB_RESULT, LabResult))
        assign(result, data, FIELDS)
        patient = resolve_patient(data.get('patientId'))
        result.patient = patient
        if patient is not None:
            result.patient_name = result.patient_name or patient.name
            if result.patient_age is None:
                result.patient_age = patient.age
        result.save(force_insert=True)
    logger.info("lab result %s created (%s)", result.id, result.status)
    return result


def update_status(result: LabResult, status: str, *, notified_at=None, collected_at=None) -> LabResult:
    """Move a lab result to ``status``.

    Moving to Notified or Collected stamps the matching time when the
    caller did not supply one.
    """
    now = timezone.now()
    result.status = status
    if notified_at is not None:
        result.notified_at = notified_at
    elif status == LabResult.STATUS_NOTIFIED and result.notified_at is None:
        result.notified_at = now
    if collected_at is not None:
        result.collected_at = collected_at
    elif status == LabResult.STATUS_COLLECTED and result.collected_at is None:
        result.collected_at = now
    result.save(update_fields=['status', 'notified_at', 'collected_at'])
    logger.info("lab result %s -> %s", result.id, status)
    return result
