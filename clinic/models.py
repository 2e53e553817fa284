"""
Database models for the front-desk backend.

Table names follow the schema the front-end and the reporting scripts
already know (``Patients``, ``stock``, ``Prescriptions`` ...).  Clinical
records and pharmacy inventory are deliberately unrelated: a
:class:`PrescriptionMedicine` identifies its medicine by name only, so
stock churn can never touch prescription history.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone

from .permissions import (
    ROLE_ADMIN,
    ROLE_CHOICES,
    ROLE_RECEPTIONIST,
    default_permissions_for,
)


class Patient(models.Model):
    GENDER_CHOICES = [
        ('Male', 'Male'),
        ('Female', 'Female'),
        ('Other', 'Other'),
    ]

    id = models.CharField(max_length=50, primary_key=True)
    # Backfilled from ``id`` when a patient is registered without one.
    mrn = models.CharField(max_length=50, unique=True, null=True, blank=True)
    name = models.CharField(max_length=255)
    age = models.PositiveIntegerField(null=True, blank=True)
    gender = models.CharField(max_length=20, choices=GENDER_CHOICES, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    visit_date = models.CharField(max_length=50, blank=True)
    symptoms = models.TextField(blank=True)
    created_by = models.CharField(max_length=100, blank=True)
    created_by_role = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'Patients'
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class StockItem(models.Model):
    """Pharmacy inventory.  Nothing in the clinical tables points here."""
    id = models.CharField(max_length=50, primary_key=True)
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=100, blank=True)
    quantity = models.IntegerField(default=0)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    low_stock_threshold = models.IntegerField(default=10)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'stock'
        ordering = ['name']

    @property
    def is_low(self) -> bool:
        return self.quantity <= self.low_stock_threshold

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity}"


class Prescription(models.Model):
    STATUS_DRAFT = 'Draft'
    STATUS_FINALIZED = 'Finalized'
    STATUS_CHOICES = ((STATUS_DRAFT, 'Draft'), (STATUS_FINALIZED, 'Finalized'))

    id = models.CharField(max_length=50, primary_key=True)
    patient = models.ForeignKey(
        Patient, null=True, blank=True, on_delete=models.SET_NULL, related_name='prescriptions'
    )
    patient_name = models.CharField(max_length=255, blank=True)
    patient_age = models.PositiveIntegerField(null=True, blank=True)
    diagnosis = models.TextField(blank=True)
    lab_tests = models.JSONField(default=list, blank=True)
    doctor_notes = models.TextField(blank=True)
    precautions = models.TextField(blank=True)
    generated_text = models.TextField(blank=True)
    follow_up_date = models.CharField(max_length=50, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_FINALIZED)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'Prescriptions'
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.id} for {self.patient_name}"


class PrescriptionMedicine(models.Model):
    """A clinical medicine line.

    With a prescription it is a dispensing record; without one it belongs
    to the clinical master list that doctors pick from.
    """
    prescription = models.ForeignKey(
        Prescription, null=True, blank=True, on_delete=models.CASCADE, related_name='medicines'
    )
    medicine_name = models.CharField(max_length=255, db_index=True)
    category = models.CharField(max_length=100, blank=True)
    dosage = models.CharField(max_length=50, blank=True)
    frequency = models.CharField(max_length=100, blank=True)
    duration = models.CharField(max_length=50, blank=True)
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        db_table = 'PrescriptionMedicines'
        ordering = ['id']

    @property
    def is_master(self) -> bool:
        return self.prescription_id is None

    def __str__(self) -> str:
        return f"{self.medicine_name} ({self.prescription_id or 'master'})"


class LabResult(models.Model):
    STATUS_SAMPLE_COLLECTED = 'Sample Collected'
    STATUS_PROCESSING = 'Processing'
    STATUS_READY = 'Ready'
    STATUS_NOTIFIED = 'Notified'
    STATUS_COLLECTED = 'Collected'
    STATUS_CHOICES = [
        (STATUS_SAMPLE_COLLECTED, 'Sample Collected'),
        (STATUS_PROCESSING, 'Processing'),
        (STATUS_READY, 'Ready'),
        (STATUS_NOTIFIED, 'Notified'),
        (STATUS_COLLECTED, 'Collected'),
    ]

    id = models.CharField(max_length=50, primary_key=True)
    patient = models.ForeignKey(
        Patient, null=True, blank=True, on_delete=models.SET_NULL, related_name='lab_results'
    )
    patient_name = models.CharField(max_length=255, blank=True)
    patient_age = models.PositiveIntegerField(null=True, blank=True)
    test_date = models.CharField(max_length=50, blank=True)
    report_date = models.CharField(max_length=50, blank=True)
    tests = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True)
    technician = models.CharField(max_length=255, blank=True)
    status = models.CharField(
        max_length=50, choices=STATUS_CHOICES, default=STATUS_SAMPLE_COLLECTED, db_index=True
    )
    notified_at = models.DateTimeField(null=True, blank=True)
    collected_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'LabResults'
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.id} ({self.status})"


class PatientServices(models.Model):
    """Additional billable services (consultation, ECG, surgery ...) for a visit."""
    STATUS_DRAFT = 'Draft'
    STATUS_COMPLETED = 'Completed'
    STATUS_CHOICES = ((STATUS_DRAFT, 'Draft'), (STATUS_COMPLETED, 'Completed'))

    id = models.CharField(max_length=50, primary_key=True)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='services')
    services = models.JSONField(default=dict, blank=True)
    grand_total = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_DRAFT)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'PatientServices'
        ordering = ['-created_at']
        verbose_name_plural = 'patient services'

    def __str__(self) -> str:
        return f"{self.id} for {self.patient_id} ({self.status})"


class Payment(models.Model):
    MODE_CHOICES = (('Cash', 'Cash'), ('Card', 'Card'))

    id = models.CharField(max_length=50, primary_key=True)
    patient = models.ForeignKey(
        Patient, null=True, blank=True, on_delete=models.SET_NULL, related_name='payments'
    )
    patient_name = models.CharField(max_length=255, blank=True)
    consultation_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    lab_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    medicine_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    payment_mode = models.CharField(max_length=50, choices=MODE_CHOICES, default='Cash')
    # Snapshot of dispensed items; ``stockId`` is informational only.
    medicines = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'Payments'
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.id}: {self.total_amount}"


class DailyExpense(models.Model):
    METHOD_CHOICES = [
        ('Cash', 'Cash'),
        ('Card', 'Card'),
        ('Online', 'Online'),
        ('Other', 'Other'),
    ]

    id = models.CharField(max_length=50, primary_key=True)
    date = models.DateField()
    description = models.TextField()
    category = models.CharField(max_length=100)
    amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    payment_method = models.CharField(max_length=50, choices=METHOD_CHOICES, default='Cash')
    created_by = models.CharField(max_length=100, default='System')
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'DailyExpenses'
        ordering = ['-date', '-created_at']

    def __str__(self) -> str:
        return f"{self.date} {self.category}: {self.amount}"


class User(AbstractUser):
    """Staff account with a role and an explicit capability list.

    ``permissions`` holds capability tokens such as ``view_patients``.
    It is filled from the role defaults when the account is created and
    may be overridden per user afterwards.
    """
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_RECEPTIONIST)
    name = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=50, blank=True)
    permissions = models.JSONField(default=list, blank=True)
    created_by = models.CharField(max_length=50, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'Users'

    def has_capability(self, capability: str) -> bool:
        if not self.is_active:
            return False
        if self.role == ROLE_ADMIN:
            return True
        return capability in self.effective_permissions()

    def effective_permissions(self) -> list[str]:
        return list(self.permissions or []) or default_permissions_for(self.role)

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class SchemaLedgerEntry(models.Model):
    """Checksum of an applied migration, recorded after each ``migrate``."""
    app = models.CharField(max_length=100)
    name = models.CharField(max_length=255)
    checksum = models.CharField(max_length=64)
    applied_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'SchemaLedger'
        ordering = ['app', 'name']
        constraints = [
            models.UniqueConstraint(fields=['app', 'name'], name='unique_ledger_migration'),
        ]

    def __str__(self) -> str:
        return f"{self.app}.{self.name} {self.checksum[:12]}"
