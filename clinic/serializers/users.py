from rest_framework import serializers

from clinic.permissions import CAPABILITIES, ROLES
from .fields import CleanCharField


class PermissionListField(serializers.ListField):
    child = serializers.ChoiceField(choices=CAPABILITIES)


class UserCreateSerializer(serializers.Serializer):
    username = serializers.RegexField(r'^[\w.@+-]+$', max_length=150)
    password = serializers.CharField(write_only=True)
    name = CleanCharField(required=False, allow_blank=True, max_length=255)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = CleanCharField(required=False, allow_blank=True, max_length=50)
    role = serializers.ChoiceField(choices=sorted(ROLES))
    permissions = PermissionListField(required=False, allow_null=True)


class UserUpdateSerializer(serializers.Serializer):
    name = CleanCharField(required=False, allow_blank=True, max_length=255)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = CleanCharField(required=False, allow_blank=True, max_length=50)
    role = serializers.ChoiceField(choices=sorted(ROLES), required=False)
    isActive = serializers.BooleanField(required=False)
    permissions = PermissionListField(required=False, allow_null=True)


class UserPermissionsSerializer(serializers.Serializer):
    permissions = PermissionListField(allow_empty=True)


class UserPasswordSerializer(serializers.Serializer):
    password = serializers.CharField(write_only=True)
