"""Staff accounts and their capability lists."""
import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import transaction
from rest_framework.exceptions import ValidationError as DRFValidation

from clinic.permissions import default_permissions_for, normalize_permissions

logger = logging.getLogger(__name__)

User = get_user_model()

PROFILE_FIELDS = {'name': 'name', 'email': 'email', 'phone': 'phone'}


def _check_password(password, user=None):
    try:
        validate_password(password, user=user)
    except ValidationError as e:
        raise DRFValidation({'password': e.messages})


def resolve_permissions(role, permissions=None) -> list[str]:
    """Explicit list when given, otherwise the role defaults."""
    if permissions is None:
        return default_permissions_for(role)
    return normalize_permissions(permissions)


def create_user(actor, *, data: dict):
    role = data['role']
    with transaction.atomic():
        user = User(username=data['username'], role=role)
        _check_password(data['password'], user)
        for key, attr in PROFILE_FIELDS.items():
            setattr(user, attr, data.get(key) or '')
        user.permissions = resolve_permissions(role, data.get('permissions'))
        user.created_by = getattr(actor, 'username', '') or ''
        user.set_password(data['password'])
        user.save(force_insert=True)
    logger.info("user %s (%s) created by %s", user.username, role, user.created_by)
    return user


def update_user(user, *, data: dict):
    with transaction.atomic():
        for key, attr in PROFILE_FIELDS.items():
            if key in data:
                setattr(user, attr, data[key] or '')
        if 'isActive' in data:
            user.is_active = data['isActive']
        role_changed = 'role' in data and data['role'] != user.role
        if role_changed:
            user.role = data['role']
        if data.get('permissions') is not None:
            user.permissions = normalize_permissions(data['permissions'])
        elif role_changed:
            user.permissions = default_permissions_for(user.role)
        user.save()
    logger.info("user %s updated", user.username)
    return user


def set_permissions(user, permissions) -> list[str]:
    user.permissions = normalize_permissions(permissions)
    user.save(update_fields=['permissions', 'updated_at'])
    logger.info("permissions of %s set to %s", user.username, ','.join(user.permissions) or '(role defaults)')
    return user.permissions


def set_password(user, password) -> None:
    _check_password(password, user)
    user.set_password(password)
    user.save(update_fields=['password', 'updated_at'])
    logger.info("password changed for %s", user.username)


def deactivate(user) -> None:
    user.is_active = False
    user.save(update_fields=['is_active', 'updated_at'])
    logger.info("user %s deactivated", user.username)
