"""
Row to DTO mapping.

Responses use the PascalCase field names of the database schema
(``ID``, ``PatientName`` ...), which is what the desk client expects.
Money is returned as a float, timestamps as ISO 8601 strings.
"""
from __future__ import annotations

from decimal import Decimal


def _iso(value):
    return value.isoformat() if value else None


def _money(value) -> float:
    return float(value if value is not None else Decimal('0'))


def patient_dto(p) -> dict:
    return {
        'ID': p.id,
        'MRN': p.mrn,
        'Name': p.name,
        'Age': p.age,
        'Gender': p.gender,
        'Phone': p.phone,
        'Address': p.address,
        'VisitDate': p.visit_date,
        'Symptoms': p.symptoms,
        'CreatedBy': p.created_by,
        'CreatedByRole': p.created_by_role,
        'CreatedAt': _iso(p.created_at),
    }


def stock_dto(s) -> dict:
    return {
        'ID': s.id,
        'Name': s.name,
        'Category': s.category,
        'Quantity': s.quantity,
        'Price': _money(s.price),
        'LowStockThreshold': s.low_stock_threshold,
        'CreatedAt': _iso(s.created_at),
    }


def clinical_medicine_dto(m) -> dict:
    return {
        'ID': m.id,
        'MedicineName': m.medicine_name,
        'Category': m.category,
        'Dosage': m.dosage,
        'Frequency': m.frequency,
        'Duration': m.duration,
    }


def prescription_medicine_dto(m) -> dict:
    data = clinical_medicine_dto(m)
    data['PrescriptionID'] = m.prescription_id
    data['Quantity'] = m.quantity
    return data


def prescription_dto(rx, medicines=None) -> dict:
    if medicines is None:
        medicines = rx.medicines.all()
    return {
        'ID': rx.id,
        'PatientID': rx.patient_id,
        'PatientName': rx.patient_name,
        'PatientAge': rx.patient_age,
        'Diagnosis': rx.diagnosis,
        'LabTests': list(rx.lab_tests or []),
        'DoctorNotes': rx.doctor_notes,
        'Precautions': rx.precautions,
        'GeneratedText': rx.generated_text,
        'FollowUpDate': rx.follow_up_date,
        'Status': rx.status,
        'CreatedAt': _iso(rx.created_at),
        'Medicines': [prescription_medicine_dto(m) for m in medicines],
    }


def lab_result_dto(r) -> dict:
    return {
        'ID': r.id,
        'PatientID': r.patient_id,
        'PatientName': r.patient_name,
        'PatientAge': r.patient_age,
        'TestDate': r.test_date,
        'ReportDate': r.report_date,
        'Tests': list(r.tests or []),
        'Notes': r.notes,
        'Technician': r.technician,
        'Status': r.status,
        'NotifiedAt': _iso(r.notified_at),
        'CollectedAt': _iso(r.collected_at),
        'CreatedAt': _iso(r.created_at),
    }


def patient_services_dto(ps) -> dict:
    return {
        'ID': ps.id,
        'PatientID': ps.patient_id,
        'PatientName': ps.patient.name if ps.patient_id else '',
        'Services': ps.services or {},
        'GrandTotal': _money(ps.grand_total),
        'Status': ps.status,
        'CreatedAt': _iso(ps.created_at),
        'UpdatedAt': _iso(ps.updated_at),
    }


def payment_dto(p) -> dict:
    return {
        'ID': p.id,
        'PatientID': p.patient_id,
        'PatientName': p.patient_name,
        'ConsultationFee': _money(p.consultation_fee),
        'LabFee': _money(p.lab_fee),
        'MedicineFee': _money(p.medicine_fee),
        'TotalAmount': _money(p.total_amount),
        'PaymentMode': p.payment_mode,
        'Medicines': list(p.medicines or []),
        'CreatedAt': _iso(p.created_at),
    }


def expense_dto(e) -> dict:
    return {
        'ID': e.id,
        'Date': _iso(e.date),
        'Description': e.description,
        'Category': e.category,
        'Amount': _money(e.amount),
        'PaymentMethod': e.payment_method,
        'CreatedBy': e.created_by,
        'CreatedAt': _iso(e.created_at),
    }


def user_dto(u) -> dict:
    # never includes the password hash
    return {
        'ID': u.id,
        'Username': u.username,
        'Name': u.name or u.get_full_name() or u.username,
        'Email': u.email,
        'Phone': u.phone,
        'Role': u.role,
        'Permissions': u.effective_permissions(),
        'IsActive': 1 if u.is_active else 0,
        'CreatedBy': u.created_by,
        'CreatedAt': _iso(u.date_joined),
        'LastLogin': _iso(u.last_login),
    }
