"""
Django admin registrations for the clinic models.

Staff with a superuser account can inspect and correct records at
``/admin/``.  The schema ledger is read-only here; it is written by the
``post_migrate`` hook and the ``schema_ledger`` command.
"""

from django.contrib import admin

from .models import (
    DailyExpense,
    LabResult,
    Patient,
    PatientServices,
    Payment,
    Prescription,
    PrescriptionMedicine,
    SchemaLedgerEntry,
    StockItem,
    User,
)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'mrn', 'name', 'age', 'gender', 'phone', 'created_at')
    list_filter = ('gender',)
    search_fields = ('id', 'mrn', 'name', 'phone')


@admin.register(StockItem)
class StockItemAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'category', 'quantity', 'price', 'low_stock_threshold')
    list_filter = ('category',)
    search_fields = ('id', 'name')


class PrescriptionMedicineInline(admin.TabularInline):
    model = PrescriptionMedicine
    extra = 0


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient_name', 'diagnosis', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('id', 'patient_name', 'patient__id')
    inlines = [PrescriptionMedicineInline]


@admin.register(PrescriptionMedicine)
class PrescriptionMedicineAdmin(admin.ModelAdmin):
    list_display = ('id', 'medicine_name', 'category', 'prescription', 'dosage', 'quantity')
    list_filter = ('category',)
    search_fields = ('medicine_name', 'prescription__id')


@admin.register(LabResult)
class LabResultAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient_name', 'status', 'technician', 'created_at')
    list_filter = ('status',)
    search_fields = ('id', 'patient_name', 'patient__id')


@admin.register(PatientServices)
class PatientServicesAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'grand_total', 'status', 'updated_at')
    list_filter = ('status',)
    search_fields = ('id', 'patient__id', 'patient__name')


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient_name', 'total_amount', 'payment_mode', 'created_at')
    list_filter = ('payment_mode',)
    search_fields = ('id', 'patient_name', 'patient__id')


@admin.register(DailyExpense)
class DailyExpenseAdmin(admin.ModelAdmin):
    list_display = ('id', 'date', 'category', 'amount', 'payment_method', 'created_by')
    list_filter = ('category', 'payment_method')
    search_fields = ('id', 'description')


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'name', 'role', 'is_active', 'last_login')
    list_filter = ('role', 'is_active')
    search_fields = ('username', 'name', 'email')
    exclude = ('password',)


@admin.register(SchemaLedgerEntry)
class SchemaLedgerEntryAdmin(admin.ModelAdmin):
    list_display = ('app', 'name', 'checksum', 'applied_at')
    readonly_fields = ('app', 'name', 'checksum', 'applied_at')

    def has_add_permission(self, request):
        return False
