"""Stock (inventory) and the clinical medicine master list."""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.dto import clinical_medicine_dto, stock_dto
from clinic.models import PrescriptionMedicine, StockItem
from clinic.permissions import capability
from clinic.serializers.pharmacy import (
    ClinicalMedicineDeleteSerializer,
    ClinicalMedicineSerializer,
    StockItemSerializer,
)
from clinic.services import pharmacy as svc

StockAccess = capability(
    read=['manage_stock', 'view_medicines', 'create_payments'],
    write=['manage_stock'],
)
ClinicalAccess = capability(
    read=['view_medicines', 'create_prescriptions'],
    write=['create_prescriptions'],
)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, StockAccess])
def stock(request):
    if request.method == 'POST':
        s = StockItemSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        item = svc.create_stock(data=s.validated_data)
        return Response({'success': True, 'id': item.id}, status=status.HTTP_201_CREATED)
    return Response([stock_dto(i) for i in StockItem.objects.all()])


@api_view(['GET'])
@permission_classes([IsAuthenticated, StockAccess])
def low_stock(request):
    return Response([stock_dto(i) for i in svc.low_stock()])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, StockAccess])
def stock_detail(request, stock_id):
    item = get_object_or_404(StockItem, pk=stock_id)
    if request.method == 'GET':
        return Response(stock_dto(item))
    if request.method == 'DELETE':
        svc.delete_stock(item)
        return Response({'success': True})
    s = StockItemSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    svc.update_stock(item, data=s.validated_data)
    return Response({'success': True, 'id': item.id})


@api_view(['GET', 'POST', 'DELETE'])
@permission_classes([IsAuthenticated, ClinicalAccess])
def clinical_medicines(request):
    if request.method == 'POST':
        s = ClinicalMedicineSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        med = svc.add_clinical_medicine(data=s.validated_data)
        return Response({'success': True, 'id': med.id}, status=status.HTTP_201_CREATED)
    if request.method == 'DELETE':
        q = ClinicalMedicineDeleteSerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        deleted = svc.delete_clinical_medicine_by_name(q.validated_data['name'])
        return Response({'success': True, 'deleted': deleted})
    return Response([clinical_medicine_dto(m) for m in svc.master_list()])


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, ClinicalAccess])
def clinical_medicine_detail(request, pk):
    med = get_object_or_404(PrescriptionMedicine, pk=pk, prescription__isnull=True)
    if request.method == 'DELETE':
        med.delete()
        return Response({'success': True})
    s = ClinicalMedicineSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    svc.update_clinical_medicine(med, data=s.validated_data)
    return Response({'success': True, 'id': med.id})
