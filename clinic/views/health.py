import logging

from django.db import connections
from django.utils import timezone
from rest_framework.decorators import api_view, authentication_classes, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([])
def health(request):
    """Liveness check used by the desk client to pick its backend."""
    now = timezone.now().isoformat()
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except Exception as e:
        logger.error("health check failed: %s", e)
        return Response({'status': 'error', 'database': 'unreachable', 'timestamp': now}, status=500)
    ok = bool(row and row[0] == 1)
    return Response(
        {'status': 'ok' if ok else 'error', 'database': 'connected' if ok else 'unreachable', 'timestamp': now},
        status=200 if ok else 500,
    )
