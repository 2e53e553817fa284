import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from .factories import make_user


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    # throttling history lives in the local-memory cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def admin_user(db):
    return make_user('admin_t', 'Admin', name='Admin')


@pytest.fixture
def doctor_user(db):
    return make_user('doctor_t', 'Doctor', name='Dr. Strange')


@pytest.fixture
def receptionist_user(db):
    return make_user('reception_t', 'Receptionist', name='Front Desk')


@pytest.fixture
def labtech_user(db):
    return make_user('lab_t', 'LabTechnician', name='Lab')


@pytest.fixture
def client_for():
    def _make(user):
        c = APIClient()
        c.force_authenticate(user=user)
        return c
    return _make
