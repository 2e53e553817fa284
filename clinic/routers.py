"""
URL mappings for the front-desk API.

Paths match what the desk client calls; trailing slashes are omitted.
Fixed segments (``stock/low``, ``users/login``) are listed before the
parameterised routes they would otherwise collide with.
"""
from django.urls import include, path

from .views import billing, dashboard, health, lab, patients, pharmacy, prescriptions, users
from .views.auth import jwt_refresh_view, login_view

urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('api/health', health.health, name='health'),
    # Authentication
    path('api/users/login', login_view, name='login_view'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh'),
    # Patients
    path('api/patients', patients.patients, name='patients'),
    path('api/patients/<str:patient_id>', patients.patient_detail, name='patient_detail'),
    # Inventory
    path('api/stock', pharmacy.stock, name='stock'),
    path('api/stock/low', pharmacy.low_stock, name='stock_low'),
    path('api/stock/<str:stock_id>', pharmacy.stock_detail, name='stock_detail'),
    # Clinical medicine master list
    path('api/clinical-medicines', pharmacy.clinical_medicines, name='clinical_medicines'),
    path('api/clinical-medicines/<int:pk>', pharmacy.clinical_medicine_detail, name='clinical_medicine_detail'),
    # Prescriptions
    path('api/prescriptions', prescriptions.prescriptions, name='prescriptions'),
    path('api/prescriptions/<str:rx_id>', prescriptions.prescription_detail, name='prescription_detail'),
    # Lab
    path('api/lab-results', lab.lab_results, name='lab_results'),
    path('api/lab-results/<str:result_id>/status', lab.lab_result_status, name='lab_result_status'),
    # Billing
    path('api/payments', billing.payments, name='payments'),
    path('api/patient-services', billing.patient_services, name='patient_services'),
    path('api/patient-services/<str:key>', billing.patient_services_detail, name='patient_services_detail'),
    path('api/daily-expenses', billing.daily_expenses, name='daily_expenses'),
    path('api/daily-expenses/<str:expense_id>', billing.daily_expense_detail, name='daily_expense_detail'),
    # Users
    path('api/users', users.users, name='users'),
    path('api/users/<int:user_id>', users.user_detail, name='user_detail'),
    path('api/users/<int:user_id>/permissions', users.user_permissions, name='user_permissions'),
    path('api/users/<int:user_id>/password', users.user_password, name='user_password'),
    # Dashboard
    path('api/dashboard', dashboard.dashboard, name='dashboard'),
]
