"""User administration.  Every endpoint needs the ``manage_users`` capability."""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.dto import user_dto
from clinic.models import User
from clinic.permissions import CanManageUsers
from clinic.serializers.users import (
    UserCreateSerializer,
    UserPasswordSerializer,
    UserPermissionsSerializer,
    UserUpdateSerializer,
)
from clinic.services import users as svc


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, CanManageUsers])
def users(request):
    if request.method == 'POST':
        s = UserCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        user = svc.create_user(request.user, data=s.validated_data)
        return Response(
            {'success': True, 'id': user.id, 'permissions': user.permissions},
            status=status.HTTP_201_CREATED,
        )
    return Response([user_dto(u) for u in User.objects.order_by('username')])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, CanManageUsers])
def user_detail(request, user_id):
    user = get_object_or_404(User, pk=user_id)
    if request.method == 'GET':
        return Response(user_dto(user))
    if request.method == 'DELETE':
        # soft delete; history keeps the account's name
        svc.deactivate(user)
        return Response({'success': True})
    s = UserUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    svc.update_user(user, data=s.validated_data)
    return Response({'success': True, 'id': user.id})


@api_view(['PUT'])
@permission_classes([IsAuthenticated, CanManageUsers])
def user_permissions(request, user_id):
    user = get_object_or_404(User, pk=user_id)
    s = UserPermissionsSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    svc.set_permissions(user, s.validated_data['permissions'])
    return Response({'success': True, 'permissions': user.effective_permissions()})


@api_view(['PUT'])
@permission_classes([IsAuthenticated, CanManageUsers])
def user_password(request, user_id):
    user = get_object_or_404(User, pk=user_id)
    s = UserPasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    svc.set_password(user, s.validated_data['password'])
    return Response({'success': True})
