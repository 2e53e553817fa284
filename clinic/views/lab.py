from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.dto import lab_result_dto
from clinic.models import LabResult
from clinic.permissions import capability
from clinic.serializers.lab import LabResultSerializer, LabStatusSerializer
from clinic.services import lab as svc

LabAccess = capability(read=['view_lab_results'], write=['edit_lab_results'])


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, LabAccess])
def lab_results(request):
    if request.method == 'POST':
        s = LabResultSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        result = svc.create_lab_result(data=s.validated_data)
        return Response({'success': True, 'id': result.id}, status=status.HTTP_201_CREATED)
    qs = LabResult.objects.all()
    wanted = request.query_params.get('status')
    if wanted:
        qs = qs.filter(status=wanted)
    return Response([lab_result_dto(r) for r in qs])


@api_view(['PUT'])
@permission_classes([IsAuthenticated, LabAccess])
def lab_result_status(request, result_id):
    result = get_object_or_404(LabResult, pk=result_id)
    s = LabStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    svc.update_status(
        result,
        s.validated_data['status'],
        notified_at=s.validated_data.get('notifiedAt'),
        collected_at=s.validated_data.get('collectedAt'),
    )
    return Response({'success': True, 'id': result.id, 'status': result.status})
