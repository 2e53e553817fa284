from rest_framework import serializers

from clinic.models import LabResult
from .fields import CleanCharField

STATUSES = [c for c, _ in LabResult.STATUS_CHOICES]


class LabTestSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    value = CleanCharField(required=False, allow_blank=True, max_length=100)
    unit = CleanCharField(required=False, allow_blank=True, max_length=50)
    normalRange = CleanCharField(required=False, allow_blank=True, max_length=100)
    status = CleanCharField(required=False, allow_blank=True, max_length=50)


class LabResultSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, max_length=50)
    patientId = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=50)
    patientName = CleanCharField(required=False, allow_blank=True, max_length=255)
    patientAge = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=150)
    testDate = CleanCharField(required=False, allow_blank=True, max_length=50)
    reportDate = CleanCharField(required=False, allow_blank=True, max_length=50)
    tests = LabTestSerializer(many=True, required=False)
    notes = CleanCharField(required=False, allow_blank=True)
    technician = CleanCharField(required=False, allow_blank=True, max_length=255)
    status = serializers.ChoiceField(choices=STATUSES, required=False)


class LabStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=STATUSES)
    notifiedAt = serializers.DateTimeField(required=False, allow_null=True)
    collectedAt = serializers.DateTimeField(required=False, allow_null=True)
