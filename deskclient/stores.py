"""
Per-entity stores over :class:`~deskclient.api.ApiClient`.

A store holds the last fetched list in ``items``.  Writes go straight to
the API and are followed by a refetch; there is no optimistic update.
When a call fails the error is kept on ``error``, re-raised, and
``items`` stays as it was.

A store has only the operations its API resource serves.  The mixins
below add ``get``, ``create``, ``update`` and ``delete`` one at a time.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .api import ApiClient, ApiError
from .models import (
    ClinicalMedicine,
    DailyExpense,
    LabResult,
    Patient,
    PatientServices,
    Payment,
    Prescription,
    StockItem,
    User,
)

logger = logging.getLogger(__name__)


class EntityStore:
    """List-only store.  Mix in the write operations the resource supports."""
    path = ''
    model: Any = None

    def __init__(self, api: ApiClient):
        self.api = api
        self.items: List[Any] = []
        self.loading = False
        self.error: Optional[ApiError] = None

    def params(self) -> Optional[Dict[str, Any]]:
        return None

    def rows(self, data) -> List[Dict[str, Any]]:
        return data or []

    def _call(self, method: str, path: str, **kwargs):
        self.loading = True
        self.error = None
        try:
            return self.api.request(method, path, **kwargs)
        except ApiError as e:
            self.error = e
            logger.warning("%s %s failed: %s", method, path, e)
            raise
        finally:
            self.loading = False

    def fetch(self) -> List[Any]:
        data = self._call("GET", self.path, params=self.params())
        self.items = [self.model.from_dto(row) for row in self.rows(data)]
        return self.items

    def _write(self, method: str, path: str, payload=None, params=None):
        result = self._call(method, path, json=payload, params=params)
        self.fetch()
        return result


class RetrieveMixin:
    def get(self, item_id):
        return self.model.from_dto(self._call("GET", f"{self.path}/{item_id}"))


class CreateMixin:
    def create(self, payload: Dict[str, Any]):
        return self._write("POST", self.path, payload)


class UpdateMixin:
    def update(self, item_id, payload: Dict[str, Any]):
        return self._write("PUT", f"{self.path}/{item_id}", payload)


class DeleteMixin:
    def delete(self, item_id):
        return self._write("DELETE", f"{self.path}/{item_id}")


class CrudStore(RetrieveMixin, CreateMixin, UpdateMixin, DeleteMixin, EntityStore):
    pass


class PatientStore(CrudStore):
    path = 'patients'
    model = Patient

    def __init__(self, api: ApiClient, limit: int = 20):
        super().__init__(api)
        self.page = 1
        self.limit = limit
        self.search = ''
        self.created_today = False
        self.meta: Dict[str, int] = {}

    def params(self):
        params = {'page': self.page, 'limit': self.limit}
        if self.search:
            params['search'] = self.search
        if self.created_today:
            params['createdToday'] = 'true'
        return params

    def rows(self, data):
        self.meta = dict(data.get('meta') or {})
        return data.get('data') or []

    def today_patients(self) -> List[Patient]:
        self.created_today = True
        try:
            return self.fetch()
        finally:
            self.created_today = False


class StockStore(CrudStore):
    path = 'stock'
    model = StockItem

    def low_stock(self) -> List[StockItem]:
        return [item for item in self.items if item.is_low]

    def fetch_low(self) -> List[StockItem]:
        return [StockItem.from_dto(row) for row in self._call("GET", f"{self.path}/low") or []]


class ClinicalMedicineStore(CreateMixin, UpdateMixin, DeleteMixin, EntityStore):
    path = 'clinical-medicines'
    model = ClinicalMedicine

    def delete_by_name(self, name: str):
        return self._write("DELETE", self.path, params={'name': name})


class PrescriptionStore(CrudStore):
    path = 'prescriptions'
    model = Prescription


class LabResultStore(CreateMixin, EntityStore):
    path = 'lab-results'
    model = LabResult

    def update_status(self, result_id: str, status: str, **times):
        payload = {'status': status}
        payload.update({k: v for k, v in times.items() if v is not None})
        return self._write("PUT", f"{self.path}/{result_id}/status", payload)


class PaymentStore(CreateMixin, EntityStore):
    """Payments are recorded once and never edited."""
    path = 'payments'
    model = Payment

    def today_payments(self) -> List[Payment]:
        data = self._call("GET", self.path, params={'today': 'true'})
        return [Payment.from_dto(row) for row in data or []]

    def patient_payments(self, patient_id: str) -> List[Payment]:
        return [p for p in self.items if p.patient_id == patient_id]

    @staticmethod
    def total_collection(payments) -> Decimal:
        return sum((p.total_amount for p in payments), Decimal("0"))


class PatientServicesStore(CreateMixin, UpdateMixin, EntityStore):
    path = 'patient-services'
    model = PatientServices

    def for_patient(self, patient_id: str) -> List[PatientServices]:
        data = self._call("GET", f"{self.path}/{patient_id}")
        return [PatientServices.from_dto(row) for row in data or []]


class DailyExpenseStore(CreateMixin, UpdateMixin, DeleteMixin, EntityStore):
    path = 'daily-expenses'
    model = DailyExpense

    def total(self, day=None) -> Decimal:
        return sum((e.amount for e in self.items if day is None or e.date == day), Decimal("0"))


class UserStore(CrudStore):
    path = 'users'
    model = User

    def update_permissions(self, user_id: int, permissions: List[str]):
        return self._write("PUT", f"{self.path}/{user_id}/permissions", {'permissions': permissions})

    def change_password(self, user_id: int, password: str):
        return self._write("PUT", f"{self.path}/{user_id}/password", {'password': password})

    def deactivate(self, user_id: int):
        return self.delete(user_id)
