"""Payments, patient service bills and daily expenses."""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.dto import expense_dto, patient_services_dto, payment_dto
from clinic.models import DailyExpense, PatientServices
from clinic.permissions import IsExpenseRole, capability
from clinic.serializers.billing import (
    DailyExpenseQuerySerializer,
    DailyExpenseSerializer,
    PatientServicesSerializer,
    PaymentListQuerySerializer,
    PaymentSerializer,
)
from clinic.services import billing as svc

BillingAccess = capability(read=['view_payments'], write=['create_payments'])


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, BillingAccess])
def payments(request):
    if request.method == 'POST':
        s = PaymentSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        payment = svc.create_payment(data=s.validated_data)
        return Response(
            {'success': True, 'id': payment.id, 'totalAmount': float(payment.total_amount)},
            status=status.HTTP_201_CREATED,
        )
    q = PaymentListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = svc.list_payments(
        patient_id=q.validated_data.get('patientId'),
        today=q.validated_data.get('today', False),
    )
    return Response([payment_dto(p) for p in qs])


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, BillingAccess])
def patient_services(request):
    if request.method == 'POST':
        s = PatientServicesSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        bill = svc.save_patient_services(data=s.validated_data)
        return Response(
            {'success': True, 'id': bill.id, 'grandTotal': float(bill.grand_total)},
            status=status.HTTP_201_CREATED,
        )
    qs = PatientServices.objects.select_related('patient')
    return Response([patient_services_dto(b) for b in qs])


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, BillingAccess])
def patient_services_detail(request, key):
    """GET lists a patient's bills (``key`` is a patient id); PUT updates bill ``key``."""
    if request.method == 'GET':
        qs = PatientServices.objects.select_related('patient').filter(patient_id=key)
        return Response([patient_services_dto(b) for b in qs])
    bill = get_object_or_404(PatientServices, pk=key)
    s = PatientServicesSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    svc.save_patient_services(data=s.validated_data, instance=bill)
    return Response({'success': True, 'id': bill.id, 'grandTotal': float(bill.grand_total)})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsExpenseRole])
def daily_expenses(request):
    if request.method == 'POST':
        s = DailyExpenseSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        expense = svc.create_expense(request.user, data=s.validated_data)
        return Response({'success': True, 'id': expense.id}, status=status.HTTP_201_CREATED)
    q = DailyExpenseQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = DailyExpense.objects.all()
    if q.validated_data.get('date'):
        qs = qs.filter(date=q.validated_data['date'])
    return Response([expense_dto(e) for e in qs])


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsExpenseRole])
def daily_expense_detail(request, expense_id):
    expense = get_object_or_404(DailyExpense, pk=expense_id)
    if request.method == 'DELETE':
        expense.delete()
        return Response({'success': True})
    s = DailyExpenseSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    svc.update_expense(expense, data=s.validated_data)
    return Response({'success': True, 'id': expense.id})
