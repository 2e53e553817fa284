import logging

from django.db import IntegrityError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

_CODES = {
    status.HTTP_400_BAD_REQUEST: 'invalid',
    status.HTTP_401_UNAUTHORIZED: 'not_authenticated',
    status.HTTP_403_FORBIDDEN: 'forbidden',
    status.HTTP_404_NOT_FOUND: 'not_found',
    status.HTTP_405_METHOD_NOT_ALLOWED: 'method_not_allowed',
    status.HTTP_429_TOO_MANY_REQUESTS: 'throttled',
}


def api_exception_handler(exc, context):
    if isinstance(exc, IntegrityError):
        logger.warning("integrity error in %s: %s", _view_name(context), exc)
        return Response(
            {'ok': False, 'error': {'code': 'conflict', 'message': 'record conflicts with existing data'}},
            status=status.HTTP_409_CONFLICT,
        )
    if isinstance(exc, ValueError) and not isinstance(exc, exceptions.APIException):
        return Response(
            {'ok': False, 'error': {'code': 'invalid', 'message': str(exc)}},
            status=status.HTTP_400_BAD_REQUEST,
        )
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception("unhandled error in %s", _view_name(context), exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    code = _CODES.get(resp.status_code, 'api_error')
    return Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code, headers=_passthrough_headers(resp))


def _view_name(context) -> str:
    view = (context or {}).get('view')
    if view is None:
        return 'unknown view'
    return view.__class__.__name__


def _passthrough_headers(resp):
    return {k: v for k, v in resp.items() if k in ('WWW-Authenticate', 'Retry-After')}
