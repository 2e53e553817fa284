"""
Python client for the front-desk API.

``ApiClient`` talks HTTP; the stores in :mod:`deskclient.stores` keep a
per-entity list in memory and refetch it after every write.
"""
from .api import DEFAULT_BASE_URL, ApiClient, ApiError
from .stores import (
    ClinicalMedicineStore,
    DailyExpenseStore,
    LabResultStore,
    PatientServicesStore,
    PatientStore,
    PaymentStore,
    PrescriptionStore,
    StockStore,
    UserStore,
)

__all__ = [
    'DEFAULT_BASE_URL',
    'ApiClient',
    'ApiError',
    'ClinicalMedicineStore',
    'DailyExpenseStore',
    'LabResultStore',
    'PatientServicesStore',
    'PatientStore',
    'PaymentStore',
    'PrescriptionStore',
    'StockStore',
    'UserStore',
]
