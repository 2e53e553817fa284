from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from clinic.models import DailyExpense, LabResult, PatientServices, Payment, StockItem
from clinic.services.billing import compute_grand_total

from .factories import make_patient, make_stock

pytestmark = pytest.mark.django_db


# ---------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------
def test_payment_computes_total_and_deducts_stock(client_for, receptionist_user):
    make_patient('PAT-1', name='Bilal')
    make_stock('STK-1', name='Paracetamol', quantity=10, price=Decimal('5.00'))
    make_stock('STK-2', name='Syrup', quantity=1, price=Decimal('80.00'))
    client = client_for(receptionist_user)

    r = client.post('/api/payments', {
        'patientId': 'PAT-1',
        'consultationFee': '500',
        'labFee': '200',
        'paymentMode': 'Card',
        'medicines': [
            {'stockId': 'STK-1', 'name': 'Paracetamol', 'quantity': 4, 'price': '5.00'},
            {'stockId': 'STK-2', 'name': 'Syrup', 'quantity': 3, 'price': '80.00'},
            {'stockId': 'STK-GONE', 'name': 'Vanished', 'quantity': 1, 'price': '10.00'},
        ],
    }, format='json')

    assert r.status_code == 201
    payment = Payment.objects.get(pk=r.data['id'])
    assert payment.medicine_fee == Decimal('270.00')
    assert payment.total_amount == Decimal('970.00')
    assert r.data['totalAmount'] == 970.0
    assert payment.patient_name == 'Bilal'
    assert payment.payment_mode == 'Card'
    assert payment.medicines[0] == {'stockId': 'STK-1', 'name': 'Paracetamol', 'quantity': 4, 'price': 5.0}
    assert StockItem.objects.get(pk='STK-1').quantity == 6
    # never below zero
    assert StockItem.objects.get(pk='STK-2').quantity == 0


def test_explicit_total_is_kept(client_for, receptionist_user):
    r = client_for(receptionist_user).post('/api/payments', {
        'patientName': 'Walk-in', 'consultationFee': '300', 'totalAmount': '250',
    }, format='json')

    assert r.status_code == 201
    assert Payment.objects.get(pk=r.data['id']).total_amount == Decimal('250.00')


def test_payment_list_filters(client_for, receptionist_user):
    patient = make_patient('PAT-1')
    Payment.objects.create(id='PAY-1', patient=patient, total_amount=100)
    Payment.objects.create(id='PAY-2', total_amount=50)
    Payment.objects.create(id='PAY-3', patient=patient, total_amount=70,
                           created_at=timezone.now() - timedelta(days=1))
    client = client_for(receptionist_user)

    assert {p['ID'] for p in client.get('/api/payments').data} == {'PAY-1', 'PAY-2', 'PAY-3'}
    assert {p['ID'] for p in client.get('/api/payments', {'patientId': 'PAT-1'}).data} == {'PAY-1', 'PAY-3'}
    assert {p['ID'] for p in client.get('/api/payments', {'today': 'true'}).data} == {'PAY-1', 'PAY-2'}


def test_doctor_cannot_see_payments(client_for, doctor_user):
    assert client_for(doctor_user).get('/api/payments').status_code == 403


# ---------------------------------------------------------------------
# Patient services
# ---------------------------------------------------------------------
SERVICES = {
    'consultation': {'enabled': True, 'type': 'Specialist', 'doctorName': 'Dr. Khan', 'fee': 1000},
    'ultrasound': {'enabled': False, 'type': 'Abdomen', 'charges': 1500},
    'ecg': {'enabled': True, 'type': 'Resting', 'charges': 500},
    'bpReading': {'enabled': True, 'systolic': 120, 'diastolic': 80, 'pulse': 72},
    'injection': {'enabled': True, 'type': 'IM', 'name': 'Vitamin B', 'quantity': 2, 'charges': 150},
    'retention': {'enabled': False, 'duration': '', 'charges': 700},
    'surgery': {'enabled': True, 'type': 'Normal', 'operationCharges': 20000,
                'otCharges': 5000, 'anesthesiaCharges': 3000},
    'feeCollection': {
        'labFee': 800,
        'medicines': [{'stockId': 'STK-1', 'name': 'Paracetamol', 'quantity': 10, 'price': 2.5}],
        'paymentMode': 'Cash',
    },
}


def test_grand_total_counts_enabled_services_only():
    # 1000 + 500 + 2*150 + 28000 + 800 + 25
    assert compute_grand_total(SERVICES) == Decimal('30625.00')
    assert compute_grand_total({}) == Decimal('0.00')


def test_services_create_list_and_update(client_for, receptionist_user):
    make_patient('PAT-1')
    make_patient('PAT-2', mrn='MRN-2')
    client = client_for(receptionist_user)

    r = client.post('/api/patient-services', {'patientId': 'PAT-1', 'services': SERVICES}, format='json')
    assert r.status_code == 201
    sid = r.data['id']
    assert r.data['grandTotal'] == 30625.0
    PatientServices.objects.create(id='SRV-OTHER', patient_id='PAT-2')

    mine = client.get('/api/patient-services/PAT-1').data
    assert [s['ID'] for s in mine] == [sid]
    assert mine[0]['Status'] == 'Draft'
    assert mine[0]['Services']['consultation']['doctorName'] == 'Dr. Khan'
    assert len(client.get('/api/patient-services').data) == 2

    services = dict(SERVICES, surgery={'enabled': False})
    r = client.put(f'/api/patient-services/{sid}', {'services': services, 'status': 'Completed'}, format='json')
    assert r.status_code == 200
    bill = PatientServices.objects.get(pk=sid)
    assert bill.status == 'Completed'
    assert bill.grand_total == Decimal('2625.00')


@pytest.mark.parametrize('services', [
    {'consultation': 500},
    {'feeCollection': {'medicines': ['Paracetamol']}},
    {'feeCollection': {'medicines': {'name': 'ORS'}}},
    {'ecg': {'enabled': True, 'charges': 'a lot'}},
    {'injection': {'enabled': True, 'charges': 10, 'quantity': 'two'}},
])
def test_malformed_services_are_rejected(client_for, receptionist_user, services):
    make_patient('PAT-1')
    client = client_for(receptionist_user)

    r = client.post('/api/patient-services', {'patientId': 'PAT-1', 'services': services}, format='json')

    assert r.status_code == 400
    assert r.data['error']['code'] == 'invalid'
    assert not PatientServices.objects.exists()


def test_grand_total_rejects_non_object_section():
    with pytest.raises(ValueError):
        compute_grand_total({'surgery': [20000]})


def test_services_need_a_known_patient(client_for, receptionist_user):
    client = client_for(receptionist_user)

    assert client.post('/api/patient-services', {'services': {}}, format='json').status_code == 400
    assert client.post('/api/patient-services', {'patientId': 'PAT-X'}, format='json').status_code == 400


# ---------------------------------------------------------------------
# Daily expenses
# ---------------------------------------------------------------------
def test_expenses_are_ordered_and_default_creator(client_for, receptionist_user):
    client = client_for(receptionist_user)
    today = timezone.localdate()

    r = client.post('/api/daily-expenses', {
        'date': (today - timedelta(days=1)).isoformat(), 'description': 'Printer paper',
        'category': 'Stationery', 'amount': '450.00',
    }, format='json')
    assert r.status_code == 201
    assert r.data['id'].startswith('EXP-')
    client.post('/api/daily-expenses', {
        'date': today.isoformat(), 'description': 'Tea', 'category': 'Pantry',
        'amount': '120', 'paymentMethod': 'Online',
    }, format='json')

    rows = client.get('/api/daily-expenses').data
    assert [e['Description'] for e in rows] == ['Tea', 'Printer paper']
    assert rows[0]['PaymentMethod'] == 'Online'
    assert rows[1]['CreatedBy'] == 'reception_t'
    assert [e['Description'] for e in client.get('/api/daily-expenses', {'date': today.isoformat()}).data] == ['Tea']


def test_expense_without_actor_name_defaults_to_system():
    from clinic.services.billing import create_expense

    expense = create_expense(None, data={
        'date': date(2026, 1, 5), 'description': 'Fuel', 'category': 'Transport', 'amount': Decimal('10'),
    })

    assert expense.created_by == 'System'


def test_expense_update_and_delete(client_for, admin_user):
    DailyExpense.objects.create(id='EXP-1', date=date(2026, 1, 1), description='Old', category='Misc', amount=5)
    client = client_for(admin_user)

    assert client.put('/api/daily-expenses/EXP-1', {'amount': '7.50'}, format='json').status_code == 200
    assert DailyExpense.objects.get(pk='EXP-1').amount == Decimal('7.50')
    assert client.delete('/api/daily-expenses/EXP-1').status_code == 200
    assert not DailyExpense.objects.exists()


@pytest.mark.parametrize('fixture_name', ['doctor_user', 'labtech_user'])
def test_expenses_are_limited_to_admin_and_reception(request, client_for, fixture_name):
    user = request.getfixturevalue(fixture_name)

    assert client_for(user).get('/api/daily-expenses').status_code == 403


# ---------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------
def test_dashboard_summarises_today(client_for, doctor_user):
    make_patient('PAT-1')
    make_patient('PAT-OLD', created_at=timezone.now() - timedelta(days=2))
    Payment.objects.create(id='PAY-1', total_amount=Decimal('150.50'))
    Payment.objects.create(id='PAY-2', total_amount=Decimal('49.50'))
    DailyExpense.objects.create(id='EXP-1', date=timezone.localdate(), description='x', category='y', amount=30)
    make_stock('STK-1', quantity=2)
    LabResult.objects.create(id='LAB-1', patient_name='A')
    LabResult.objects.create(id='LAB-2', patient_name='B', status='Collected')

    r = client_for(doctor_user).get('/api/dashboard')

    assert r.status_code == 200
    assert r.data == {
        'patientsToday': 1,
        'paymentsToday': 2,
        'collectionToday': 200.0,
        'expensesToday': 30.0,
        'lowStock': 1,
        'pendingLabResults': 1,
    }
