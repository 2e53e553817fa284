"""Patient registration, lookup and paging."""
from __future__ import annotations

from django.conf import settings
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.dto import patient_dto
from clinic.models import Patient
from clinic.permissions import capability
from clinic.serializers.patient import PatientListQuerySerializer, PatientSerializer
from clinic.services import patients as svc

PatientAccess = capability(read=['view_patients'], write=['edit_patients'], delete=['delete_patients'])


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, PatientAccess])
def patients(request):
    if request.method == 'POST':
        s = PatientSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        patient = svc.create_patient(request.user, data=s.validated_data)
        return Response({'success': True, 'id': patient.id, 'mrn': patient.mrn}, status=status.HTTP_201_CREATED)

    q = PatientListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    items, meta = svc.list_patients(
        search=q.validated_data.get('search'),
        page=q.validated_data.get('page') or 1,
        limit=q.validated_data.get('limit') or settings.PATIENT_PAGE_SIZE,
        created_today=q.validated_data.get('createdToday', False),
    )
    return Response({'data': [patient_dto(p) for p in items], 'meta': meta})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, PatientAccess])
def patient_detail(request, patient_id):
    patient = get_object_or_404(Patient, pk=patient_id)
    if request.method == 'GET':
        return Response(patient_dto(patient))
    if request.method == 'DELETE':
        svc.delete_patient(patient)
        return Response({'success': True})
    s = PatientSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    svc.update_patient(patient, data=s.validated_data)
    return Response({'success': True, 'id': patient.id})
