"""
Payments, patient service bills and the daily expense ledger.

A payment snapshots the medicines it dispensed (``stockId``, name,
quantity, price) and takes those quantities off the shelf.  The stock id
is only a lookup key; payments hold no foreign key to inventory.
"""
from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction

from clinic import ids
from clinic.models import DailyExpense, PatientServices, Payment
from ._fields import assign
from .patients import created_on, resolve_patient
from .pharmacy import reduce_stock

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')

# service section -> charge keys summed when the section is enabled
CHARGED_SECTIONS = {
    'consultation': ('fee',),
    'ultrasound': ('charges',),
    'ecg': ('charges',),
    'retention': ('charges',),
    'surgery': ('operationCharges', 'otCharges', 'anesthesiaCharges'),
}


def _dec(value) -> Decimal:
    if value in (None, ''):
        return ZERO
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"not a number: {value!r}")


def _section(services: dict, name: str) -> dict:
    block = services.get(name) or {}
    if not isinstance(block, dict):
        raise ValueError(f"services.{name} must be an object")
    return block


def medicine_total(medicines) -> Decimal:
    if not isinstance(medicines or [], list):
        raise ValueError("medicines must be a list")
    total = ZERO
    for m in medicines or []:
        if not isinstance(m, dict):
            raise ValueError("each medicine must be an object")
        try:
            quantity = int(m.get('quantity') or 0)
        except (TypeError, ValueError):
            raise ValueError(f"not a quantity: {m.get('quantity')!r}")
        total += _dec(m.get('price')) * quantity
    return total


def compute_grand_total(services: dict) -> Decimal:
    """Total of every enabled service plus lab fee and medicines.

    Raises ``ValueError`` when a section is not an object or a charge is
    not a number.
    """
    services = services or {}
    if not isinstance(services, dict):
        raise ValueError("services must be an object")
    total = ZERO
    for section, keys in CHARGED_SECTIONS.items():
        block = _section(services, section)
        if block.get('enabled'):
            total += sum((_dec(block.get(k)) for k in keys), ZERO)
    injection = _section(services, 'injection')
    if injection.get('enabled'):
        total += medicine_total([{'price': injection.get('charges'), 'quantity': injection.get('quantity')}])
    fees = _section(services, 'feeCollection')
    total += _dec(fees.get('labFee'))
    total += medicine_total(fees.get('medicines'))
    return total.quantize(Decimal('0.01'))


# ---------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------
def _json_medicines(medicines) -> list[dict]:
    return [
        {
            'stockId': m.get('stockId') or '',
            'name': m['name'],
            'quantity': int(m['quantity']),
            'price': float(_dec(m.get('price'))),
        }
        for m in medicines or []
    ]


def create_payment(*, data: dict) -> Payment:
    medicines = data.get('medicines') or []
    consultation = _dec(data.get('consultationFee'))
    lab = _dec(data.get('labFee'))
    medicine_fee = _dec(data.get('medicineFee')) or medicine_total(medicines)
    total = data.get('totalAmount')
    if total is None:
        total = consultation + lab + medicine_fee
    with transaction.atomic():
        patient = resolve_patient(data.get('patientId'))
        payment = Payment(
            id=data.get('id') or ids.generate_id(ids.PAYMENT, Payment),
            patient=patient,
            patient_name=data.get('patientName') or (patient.name if patient else ''),
            consultation_fee=consultation,
            lab_fee=lab,
            medicine_fee=medicine_fee,
            total_amount=_dec(total),
            payment_mode=data.get('paymentMode') or 'Cash',
            medicines=_json_medicines(medicines),
        )
        payment.save(force_insert=True)
        for m in medicines:
            if m.get('stockId'):
                reduce_stock(m['stockId'], int(m['quantity']))
    logger.info("payment %s recorded: %s (%s)", payment.id, payment.total_amount, payment.payment_mode)
    return payment


def list_payments(*, patient_id=None, today=False):
    qs = Payment.objects.all()
    if patient_id:
        qs = qs.filter(patient_id=patient_id)
    if today:
        qs = created_on(qs)
    return qs


def total_collection(qs) -> Decimal:
    return sum((p.total_amount for p in qs), ZERO)


# ---------------------------------------------------------------------
# Patient services
# ---------------------------------------------------------------------
def save_patient_services(*, data: dict, instance: PatientServices | None = None) -> PatientServices:
    with transaction.atomic():
        if instance is None:
            patient = resolve_patient(data['patientId'])
            if patient is None:
                raise ValueError('patientId is required')
            instance = PatientServices(
                id=data.get('id') or ids.generate_id(ids.SERVICES, PatientServices),
                patient=patient,
            )
            creating = True
        else:
            creating = False
            if data.get('patientId'):
                instance.patient = resolve_patient(data['patientId'])
        if 'services' in data:
            instance.services = data['services'] or {}
        if data.get('status'):
            instance.status = data['status']
        instance.grand_total = compute_grand_total(instance.services)
        instance.save(force_insert=creating)
    logger.info("services %s for %s saved: %s", instance.id, instance.patient_id, instance.grand_total)
    return instance


def purge_billing() -> dict:
    """Delete every patient service bill and payment."""
    with transaction.atomic():
        services, _ = PatientServices.objects.all().delete()
        payments, _ = Payment.objects.all().delete()
    logger.warning("billing purged: %d service bills, %d payments", services, payments)
    return {'services': services, 'payments': payments}


# ---------------------------------------------------------------------
# Daily expenses
# ---------------------------------------------------------------------
EXPENSE_FIELDS = {
    'date': 'date',
    'description': 'description',
    'category': 'category',
    'amount': 'amount',
    'paymentMethod': 'payment_method',
}


def create_expense(actor, *, data: dict) -> DailyExpense:
    with transaction.atomic():
        expense = DailyExpense(id=data.get('id') or ids.generate_id(ids.EXPENSE, DailyExpense))
        assign(expense, data, EXPENSE_FIELDS)
        expense.created_by = data.get('createdBy') or getattr(actor, 'username', '') or 'System'
        expense.save(force_insert=True)
    logger.info("expense %s recorded: %s %s", expense.id, expense.category, expense.amount)
    return expense


def update_expense(expense: DailyExpense, *, data: dict) -> DailyExpense:
    assign(expense, data, EXPENSE_FIELDS)
    if data.get('createdBy'):
        expense.created_by = data['createdBy']
    expense.save()
    return expense
