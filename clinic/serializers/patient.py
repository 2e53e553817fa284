from django.conf import settings
from rest_framework import serializers

from clinic.models import Patient
from .fields import CleanCharField


class PatientSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, max_length=50)
    mrn = CleanCharField(required=False, allow_blank=True, allow_null=True, max_length=50)
    name = CleanCharField(max_length=255)
    age = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=150)
    gender = serializers.ChoiceField(
        choices=[c for c, _ in Patient.GENDER_CHOICES], required=False, allow_blank=True
    )
    phone = CleanCharField(required=False, allow_blank=True, max_length=20)
    address = CleanCharField(required=False, allow_blank=True)
    visitDate = CleanCharField(required=False, allow_blank=True, max_length=50)
    symptoms = CleanCharField(required=False, allow_blank=True)

    def validate_name(self, v):
        v = v.strip()
        if not v:
            raise serializers.ValidationError('name is required')
        return v


class PatientListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1)
    limit = serializers.IntegerField(required=False, min_value=1)
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
    createdToday = serializers.BooleanField(required=False)

    def validate_limit(self, v):
        return min(v, settings.PATIENT_PAGE_SIZE_MAX)
