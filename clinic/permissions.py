"""
Roles, capability tokens and the DRF permission classes built on them.

Every user carries an explicit list of capabilities.  The list starts as
the role default and may be overridden per user; administrators pass
every capability check regardless of their list.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

ROLE_ADMIN = 'Admin'
ROLE_DOCTOR = 'Doctor'
ROLE_RECEPTIONIST = 'Receptionist'
ROLE_LAB_TECHNICIAN = 'LabTechnician'

ROLE_CHOICES = [
    (ROLE_ADMIN, 'Administrator'),
    (ROLE_DOCTOR, 'Doctor'),
    (ROLE_RECEPTIONIST, 'Receptionist'),
    (ROLE_LAB_TECHNICIAN, 'Lab Technician'),
]
ROLES = {value for value, _ in ROLE_CHOICES}

# Canonical order; stored permission lists are sorted by it.
CAPABILITIES = (
    'view_patients',
    'edit_patients',
    'delete_patients',
    'view_payments',
    'create_payments',
    'view_lab_results',
    'edit_lab_results',
    'view_prescriptions',
    'create_prescriptions',
    'view_reports',
    'manage_users',
    'manage_stock',
    'view_medicines',
)

DEFAULT_PERMISSIONS: dict[str, tuple[str, ...]] = {
    ROLE_ADMIN: CAPABILITIES,
    ROLE_DOCTOR: (
        'view_patients',
        'edit_patients',
        'view_prescriptions',
        'create_prescriptions',
        'view_lab_results',
        'view_medicines',
    ),
    ROLE_RECEPTIONIST: (
        'view_patients',
        'edit_patients',
        'view_payments',
        'create_payments',
        'manage_stock',
    ),
    ROLE_LAB_TECHNICIAN: (
        'view_patients',
        'view_lab_results',
        'edit_lab_results',
    ),
}

# Roles that see the daily expense ledger.
EXPENSE_ROLES = {ROLE_ADMIN, ROLE_RECEPTIONIST}


def default_permissions_for(role: str) -> list[str]:
    return normalize_permissions(DEFAULT_PERMISSIONS.get(role, ()))


def normalize_permissions(values) -> list[str]:
    """Deduplicate and order capability tokens, rejecting unknown ones."""
    unknown = sorted({v for v in values if v not in CAPABILITIES})
    if unknown:
        raise ValueError(f"unknown permissions: {', '.join(unknown)}")
    wanted = set(values)
    return [c for c in CAPABILITIES if c in wanted]


class HasCapability(BasePermission):
    """Base class; subclasses set ``read``, ``write`` and ``delete`` capability sets.

    A request passes when the user holds any capability of the set that
    matches the HTTP method.  An empty set denies.
    """
    read: frozenset[str] = frozenset()
    write: frozenset[str] = frozenset()
    delete: frozenset[str] = frozenset()

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            needed = self.read
        elif request.method == "DELETE":
            needed = self.delete
        else:
            needed = self.write
        return any(user.has_capability(c) for c in needed)


def capability(read=(), write=(), delete=()):
    """Build a :class:`HasCapability` subclass for a view.

    ``write`` falls back to ``read`` and ``delete`` to ``write``.
    """
    write = write or read
    return type(
        'HasCapability',
        (HasCapability,),
        {
            'read': frozenset(read),
            'write': frozenset(write),
            'delete': frozenset(delete or write),
        },
    )


class CanManageUsers(BasePermission):
    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and user.has_capability('manage_users'))


class IsExpenseRole(BasePermission):
    """Admin and reception staff keep the daily expense ledger."""
    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) in EXPENSE_ROLES)
