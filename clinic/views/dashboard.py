from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.services.dashboard import summary


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Today's front-desk figures."""
    return Response(summary())
