from django.db.models import Sum
from django.utils import timezone

from clinic.models import DailyExpense, LabResult, Patient
from .billing import ZERO, list_payments, total_collection
from .patients import created_on
from .pharmacy import low_stock

PENDING_LAB_STATUSES = (
    LabResult.STATUS_SAMPLE_COLLECTED,
    LabResult.STATUS_PROCESSING,
    LabResult.STATUS_READY,
)


def summary() -> dict:
    payments = list_payments(today=True)
    expenses = DailyExpense.objects.filter(date=timezone.localdate()).aggregate(total=Sum('amount'))['total']
    return {
        'patientsToday': created_on(Patient.objects.all()).count(),
        'paymentsToday': payments.count(),
        'collectionToday': float(total_collection(payments)),
        'expensesToday': float(expenses or ZERO),
        'lowStock': low_stock().count(),
        'pendingLabResults': LabResult.objects.filter(status__in=PENDING_LAB_STATUSES).count(),
    }
