from rest_framework import serializers

from .fields import CleanCharField


class StockItemSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, max_length=50)
    name = CleanCharField(max_length=255)
    category = CleanCharField(required=False, allow_blank=True, max_length=100)
    quantity = serializers.IntegerField(min_value=0, default=0)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=0)
    lowStockThreshold = serializers.IntegerField(min_value=0, default=10)


class ClinicalMedicineSerializer(serializers.Serializer):
    medicineName = CleanCharField(max_length=255)
    category = CleanCharField(required=False, allow_blank=True, max_length=100)
    dosage = CleanCharField(required=False, allow_blank=True, max_length=50)
    frequency = CleanCharField(required=False, allow_blank=True, max_length=100)
    duration = CleanCharField(required=False, allow_blank=True, max_length=50)


class ClinicalMedicineDeleteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
