from rest_framework import serializers

from clinic.models import DailyExpense, Payment, PatientServices
from clinic.services.billing import compute_grand_total
from .fields import CleanCharField


class PaymentMedicineSerializer(serializers.Serializer):
    stockId = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=50)
    name = CleanCharField(max_length=255)
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=0)


class PaymentSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, max_length=50)
    patientId = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=50)
    patientName = CleanCharField(required=False, allow_blank=True, max_length=255)
    consultationFee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=0)
    labFee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=0)
    medicineFee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=0)
    totalAmount = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    paymentMode = serializers.ChoiceField(choices=[c for c, _ in Payment.MODE_CHOICES], default='Cash')
    medicines = PaymentMedicineSerializer(many=True, required=False)


class PaymentListQuerySerializer(serializers.Serializer):
    patientId = serializers.CharField(required=False, max_length=50)
    today = serializers.BooleanField(required=False)


class PatientServicesSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, max_length=50)
    patientId = serializers.CharField(max_length=50)
    services = serializers.DictField(required=False)
    status = serializers.ChoiceField(
        choices=[c for c, _ in PatientServices.STATUS_CHOICES], required=False
    )

    def validate_services(self, value):
        try:
            compute_grand_total(value)
        except ValueError as e:
            raise serializers.ValidationError(str(e))
        return value


class DailyExpenseSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, max_length=50)
    date = serializers.DateField()
    description = CleanCharField()
    category = CleanCharField(max_length=100)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    paymentMethod = serializers.ChoiceField(
        choices=[c for c, _ in DailyExpense.METHOD_CHOICES], default='Cash'
    )
    createdBy = CleanCharField(required=False, allow_blank=True, max_length=100)


class DailyExpenseQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
