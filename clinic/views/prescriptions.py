from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.dto import prescription_dto
from clinic.models import Prescription
from clinic.permissions import capability
from clinic.serializers.prescription import PrescriptionSerializer
from clinic.services import prescriptions as svc

PrescriptionAccess = capability(read=['view_prescriptions'], write=['create_prescriptions'])


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, PrescriptionAccess])
def prescriptions(request):
    if request.method == 'POST':
        s = PrescriptionSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        rx = svc.create_prescription(data=s.validated_data)
        return Response({'success': True, 'id': rx.id}, status=status.HTTP_201_CREATED)
    qs = Prescription.objects.prefetch_related('medicines')
    patient_id = request.query_params.get('patientId')
    if patient_id:
        qs = qs.filter(patient_id=patient_id)
    return Response([prescription_dto(rx) for rx in qs])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, PrescriptionAccess])
def prescription_detail(request, rx_id):
    rx = get_object_or_404(Prescription, pk=rx_id)
    if request.method == 'GET':
        return Response(prescription_dto(rx))
    if request.method == 'DELETE':
        svc.delete_prescription(rx)
        return Response({'success': True})
    s = PrescriptionSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    svc.update_prescription(rx, data=s.validated_data)
    return Response({'success': True, 'id': rx.id})
