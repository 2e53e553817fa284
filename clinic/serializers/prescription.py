from rest_framework import serializers

from clinic.models import Prescription
from .fields import CleanCharField
from .pharmacy import ClinicalMedicineSerializer


class PrescriptionMedicineLineSerializer(ClinicalMedicineSerializer):
    quantity = serializers.IntegerField(min_value=1, default=1)


class PrescriptionSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, max_length=50)
    patientId = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=50)
    patientName = CleanCharField(required=False, allow_blank=True, max_length=255)
    patientAge = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=150)
    diagnosis = CleanCharField(required=False, allow_blank=True)
    labTests = serializers.ListField(child=CleanCharField(max_length=255), required=False)
    doctorNotes = CleanCharField(required=False, allow_blank=True)
    precautions = CleanCharField(required=False, allow_blank=True)
    generatedText = CleanCharField(required=False, allow_blank=True)
    followUpDate = CleanCharField(required=False, allow_blank=True, max_length=50)
    status = serializers.ChoiceField(choices=[c for c, _ in Prescription.STATUS_CHOICES], required=False)
    medicines = PrescriptionMedicineLineSerializer(many=True, required=False)

    def validate_medicines(self, lines):
        # partial updates leave nested lines partial too; a line is always whole
        s = PrescriptionMedicineLineSerializer(data=self.initial_data.get('medicines') or [], many=True)
        s.is_valid(raise_exception=True)
        return s.validated_data
