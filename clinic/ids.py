"""Human-readable record identifiers such as ``PAT-4821K7Q``."""
from __future__ import annotations

import secrets
import string

_ALPHABET = string.ascii_uppercase + string.digits

PATIENT = 'PAT'
STOCK = 'STK'
PRESCRIPTION = 'RX'
LAB_RESULT = 'LAB'
SERVICES = 'SRV'
PAYMENT = 'PAY'
EXPENSE = 'EXP'


def make_id(prefix: str) -> str:
    number = 1000 + secrets.randbelow(9000)
    suffix = ''.join(secrets.choice(_ALPHABET) for _ in range(3))
    return f"{prefix}-{number}{suffix}"


def generate_id(prefix: str, model) -> str:
    """Return an id with ``prefix`` that no ``model`` row uses yet."""
    while True:
        candidate = make_id(prefix)
        if not model.objects.filter(pk=candidate).exists():
            return candidate
