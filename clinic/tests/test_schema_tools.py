"""Schema ledger, management commands and the shared error envelope."""
from io import StringIO

import pytest
from django.core.management import CommandError, call_command
from rest_framework.test import APIClient

from clinic.models import Patient, Payment, PatientServices, SchemaLedgerEntry, User
from clinic.permissions import default_permissions_for
from clinic.services.schema import (
    SchemaDriftError,
    ledger_problems,
    record_ledger,
    verify_ledger,
)

from .factories import make_patient

pytestmark = pytest.mark.django_db

MIGRATIONS = [
    '0001_initial',
    '0002_patient_mrn',
    '0003_decouple_clinical_records',
    '0004_user_profile',
    '0005_schema_ledger',
]


def run(*args):
    out = StringIO()
    call_command(*args, stdout=out, stderr=StringIO())
    return out.getvalue()


# ---------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------
def test_migrate_records_every_clinic_migration():
    names = list(SchemaLedgerEntry.objects.filter(app='clinic').values_list('name', flat=True))

    assert names == MIGRATIONS
    assert all(len(c) == 64 for c in SchemaLedgerEntry.objects.values_list('checksum', flat=True))
    verify_ledger()


def test_record_is_idempotent():
    assert record_ledger() == []
    assert SchemaLedgerEntry.objects.count() == len(MIGRATIONS)


def test_edited_migration_is_detected():
    SchemaLedgerEntry.objects.filter(name='0003_decouple_clinical_records').update(checksum='0' * 64)

    with pytest.raises(SchemaDriftError) as exc:
        verify_ledger()

    assert exc.value.problems == ['clinic.0003_decouple_clinical_records changed after it was applied']
    with pytest.raises(CommandError):
        run('schema_ledger', '--verify')


def test_missing_entry_is_detected_then_recorded():
    SchemaLedgerEntry.objects.filter(name='0005_schema_ledger').delete()

    assert ledger_problems() == ['clinic.0005_schema_ledger applied but not in ledger']

    out = run('schema_ledger')
    assert 'recorded clinic.0005_schema_ledger' in out
    assert ledger_problems() == []


def test_unknown_entry_is_detected():
    SchemaLedgerEntry.objects.create(app='clinic', name='0099_future', checksum='f' * 64)

    assert ledger_problems() == ['clinic.0099_future in ledger but not applied']


def test_verify_command_passes_on_clean_ledger():
    assert 'matches' in run('schema_ledger', '--verify')


# ---------------------------------------------------------------------
# Management commands
# ---------------------------------------------------------------------
def test_check_constraints_lists_clinical_relations():
    out = run('check_constraints')

    assert 'PrescriptionMedicines.prescription_id -> Prescriptions.id' in out
    assert 'clinical records are isolated from inventory' in out
    assert 'stock' not in [line.split(' -> ')[-1].split('.')[0] for line in out.splitlines()]


def test_seed_users_is_idempotent():
    first = run('seed_users')
    second = run('seed_users')

    assert first.count('created:') == 4
    assert second.count('exists:') == 4
    assert User.objects.count() == 4
    admin = User.objects.get(username='admin')
    assert admin.check_password('admin123')
    assert admin.permissions == default_permissions_for('Admin')


def test_seed_users_can_reset_permissions():
    run('seed_users')
    User.objects.filter(username='doctor').update(permissions=['view_patients'])

    out = run('seed_users', '--reset-permissions')

    assert 'reset permissions: doctor' in out
    assert User.objects.get(username='doctor').permissions == default_permissions_for('Doctor')


def test_purge_billing_needs_confirmation():
    patient = make_patient('PAT-1')
    PatientServices.objects.create(id='SRV-1', patient=patient)
    Payment.objects.create(id='PAY-1', patient=patient, patient_name=patient.name)

    with pytest.raises(CommandError):
        run('purge_billing')
    assert Payment.objects.count() == 1

    out = run('purge_billing', '--yes')

    assert 'deleted 1 service bills and 1 payments' in out
    assert not PatientServices.objects.exists()
    assert not Payment.objects.exists()
    assert Patient.objects.filter(pk='PAT-1').exists()


# ---------------------------------------------------------------------
# Health and error envelope
# ---------------------------------------------------------------------
def test_health_is_public():
    r = APIClient().get('/api/health')

    assert r.status_code == 200
    assert r.data['status'] == 'ok'
    assert r.data['database'] == 'connected'
    assert r.data['timestamp']


def test_unauthenticated_requests_use_error_envelope():
    r = APIClient().get('/api/patients')

    assert r.status_code == 401
    assert r.data['ok'] is False
    assert r.data['error']['code'] == 'not_authenticated'


def test_missing_record_uses_error_envelope(client_for, admin_user):
    r = client_for(admin_user).get('/api/patients/PAT-NOPE')

    assert r.status_code == 404
    assert r.data['error']['code'] == 'not_found'


def test_forbidden_uses_error_envelope(client_for, labtech_user):
    r = client_for(labtech_user).get('/api/payments')

    assert r.status_code == 403
    assert r.data['error']['code'] == 'forbidden'
