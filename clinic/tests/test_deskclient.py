"""
The desk client against a live test server.

``RequestsClient`` routes ``requests`` calls through the Django test
handler, so the client code runs unchanged.
"""
from datetime import date
from decimal import Decimal

import pytest
import requests
from rest_framework.test import RequestsClient

from clinic.models import Patient, StockItem
from deskclient import (
    ApiClient,
    ApiError,
    ClinicalMedicineStore,
    DailyExpenseStore,
    LabResultStore,
    PatientServicesStore,
    PatientStore,
    PaymentStore,
    StockStore,
)

from .factories import PASSWORD, make_user

BASE_URL = 'http://testserver/api'

live = pytest.mark.django_db(transaction=True)


def api_for(username, role):
    make_user(username, role)
    api = ApiClient(base_url=BASE_URL, session=RequestsClient())
    api.login(username, PASSWORD)
    return api


@live
def test_login_keeps_token_and_user():
    api = api_for('desk', 'Receptionist')

    assert api.token
    assert api.user['Role'] == 'Receptionist'
    assert api.health() is True
    assert api.dashboard()['patientsToday'] == 0

    api.logout()
    with pytest.raises(ApiError) as exc:
        api.dashboard()
    assert exc.value.status == 401


@live
def test_bad_login_raises():
    make_user('desk', 'Receptionist')
    api = ApiClient(base_url=BASE_URL, session=RequestsClient())

    with pytest.raises(ApiError) as exc:
        api.login('desk', 'wrong')

    assert exc.value.status == 401
    assert exc.value.code == 'invalid_credentials'
    assert api.token is None


@live
def test_patient_store_refetches_after_create():
    store = PatientStore(api_for('desk', 'Receptionist'), limit=5)

    result = store.create({'name': 'Meera', 'age': 30, 'phone': '98450'})

    assert result['id'].startswith('PAT-')
    assert [p.name for p in store.items] == ['Meera']
    assert store.meta['total'] == 1
    assert store.today_patients()[0].id == result['id']
    assert store.get(result['id']).phone == '98450'
    assert store.loading is False


@live
def test_validation_error_keeps_items():
    store = PatientStore(api_for('desk', 'Receptionist'))
    store.create({'name': 'Meera'})
    before = list(store.items)

    with pytest.raises(ApiError) as exc:
        store.create({'name': '   '})

    assert exc.value.status == 400
    assert store.error is exc.value
    assert store.items == before
    assert Patient.objects.count() == 1


@live
def test_forbidden_store_records_error():
    store = ClinicalMedicineStore(api_for('desk', 'Receptionist'))

    with pytest.raises(ApiError) as exc:
        store.fetch()

    assert exc.value.status == 403
    assert exc.value.code == 'forbidden'
    assert store.items == []
    assert store.error is exc.value


@live
def test_clinical_master_list_add_and_delete_by_name():
    store = ClinicalMedicineStore(api_for('dr', 'Doctor'))

    store.create({'medicineName': 'Amoxicillin', 'category': 'Antibiotic', 'dosage': '500mg'})
    store.create({'medicineName': 'Cetirizine'})
    assert sorted(m.medicine_name for m in store.items) == ['Amoxicillin', 'Cetirizine']

    result = store.delete_by_name('Amoxicillin')

    assert result['deleted'] == 1
    assert [m.medicine_name for m in store.items] == ['Cetirizine']


@live
def test_stock_low_queries():
    store = StockStore(api_for('desk', 'Receptionist'))
    store.create({'name': 'Paracetamol', 'quantity': 100, 'price': '2.50'})
    store.create({'name': 'ORS', 'quantity': 3, 'lowStockThreshold': 5})

    assert [s.name for s in store.low_stock()] == ['ORS']
    assert [s.name for s in store.fetch_low()] == ['ORS']
    assert next(s for s in store.items if s.name == 'Paracetamol').price == Decimal('2.5')


@live
def test_payment_store_totals():
    api = api_for('desk', 'Receptionist')
    StockItem.objects.create(id='STK-1', name='ORS', quantity=10)
    Patient.objects.create(id='PAT-1', mrn='PAT-1', name='Meera')
    store = PaymentStore(api)

    store.create({'patientId': 'PAT-1', 'consultationFee': '300', 'labFee': '150'})
    store.create({
        'patientName': 'Walk-in',
        'medicines': [{'stockId': 'STK-1', 'name': 'ORS', 'quantity': 2, 'price': '20'}],
    })

    assert len(store.items) == 2
    assert [p.total_amount for p in store.patient_payments('PAT-1')] == [Decimal('450.0')]
    assert store.total_collection(store.today_payments()) == Decimal('490')
    assert StockItem.objects.get(pk='STK-1').quantity == 8
    assert not hasattr(store, 'update')
    assert not hasattr(store, 'delete')


@live
def test_lab_store_moves_result_through_statuses():
    store = LabResultStore(api_for('lab', 'LabTechnician'))

    result = store.create({'patientName': 'Walk-in', 'tests': [{'name': 'Hb', 'value': '12'}]})
    store.update_status(result['id'], 'Ready')
    store.update_status(result['id'], 'Notified')

    [item] = store.items
    assert item.status == 'Notified'
    assert item.notified_at is not None
    assert item.collected_at is None
    assert item.tests[0]['name'] == 'Hb'
    assert not any(hasattr(store, op) for op in ('get', 'update', 'delete'))


@live
def test_services_store_creates_updates_and_lists_per_patient():
    Patient.objects.create(id='PAT-1', mrn='PAT-1', name='Meera')
    Patient.objects.create(id='PAT-2', mrn='PAT-2', name='Ravi')
    store = PatientServicesStore(api_for('desk', 'Receptionist'))

    created = store.create({
        'patientId': 'PAT-1',
        'services': {'consultation': {'enabled': True, 'fee': 500}},
    })
    store.create({'patientId': 'PAT-2'})
    store.update(created['id'], {
        'services': {'consultation': {'enabled': True, 'fee': 500}, 'ecg': {'enabled': True, 'charges': 300}},
        'status': 'Completed',
    })

    assert len(store.items) == 2
    [bill] = store.for_patient('PAT-1')
    assert bill.id == created['id']
    assert bill.grand_total == Decimal('800')
    assert bill.status == 'Completed'
    assert not hasattr(store, 'get')
    assert not hasattr(store, 'delete')


@live
def test_services_store_rejects_malformed_document():
    Patient.objects.create(id='PAT-1', mrn='PAT-1', name='Meera')
    store = PatientServicesStore(api_for('desk', 'Receptionist'))

    with pytest.raises(ApiError) as exc:
        store.create({'patientId': 'PAT-1', 'services': {'consultation': 500}})

    assert exc.value.status == 400
    assert store.items == []


@live
def test_expense_store_crud_and_daily_total():
    store = DailyExpenseStore(api_for('desk', 'Receptionist'))
    today = date.today()

    tea = store.create({'date': today.isoformat(), 'description': 'Tea', 'category': 'Pantry', 'amount': '30'})
    store.create({'date': '2024-01-02', 'description': 'Gloves', 'category': 'Supplies', 'amount': '120'})
    store.update(tea['id'], {'amount': '45'})

    assert store.total(today) == Decimal('45')
    assert store.total() == Decimal('165')
    assert next(e for e in store.items if e.id == tea['id']).created_by == 'desk'

    store.delete(tea['id'])

    assert [e.description for e in store.items] == ['Gloves']
    assert not hasattr(store, 'get')


class _Unreachable(requests.Session):
    def request(self, *args, **kwargs):
        raise requests.ConnectionError("connection refused")


def test_network_failure_has_status_zero():
    api = ApiClient(base_url='http://desk.invalid/api', session=_Unreachable())

    with pytest.raises(ApiError) as exc:
        api.get('patients')

    assert exc.value.status == 0
    assert api.health() is False


def test_base_url_from_environment(monkeypatch):
    monkeypatch.setenv('DESK_API_URL', 'http://clinic.local:9000/api/')

    assert ApiClient().base_url == 'http://clinic.local:9000/api'
    assert ApiClient(base_url='http://other/api').base_url == 'http://other/api'
