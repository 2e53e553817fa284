"""View models built from the API's PascalCase DTOs."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional


def _dt(value) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _money(value) -> Decimal:
    return Decimal(str(value if value is not None else 0))


@dataclass
class Patient:
    id: str
    mrn: Optional[str]
    name: str
    age: Optional[int] = None
    gender: str = ""
    phone: str = ""
    address: str = ""
    visit_date: str = ""
    symptoms: str = ""
    created_by: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_dto(cls, d: Dict[str, Any]) -> "Patient":
        return cls(
            id=d["ID"],
            mrn=d.get("MRN"),
            name=d.get("Name", ""),
            age=d.get("Age"),
            gender=d.get("Gender") or "",
            phone=d.get("Phone") or "",
            address=d.get("Address") or "",
            visit_date=d.get("VisitDate") or "",
            symptoms=d.get("Symptoms") or "",
            created_by=d.get("CreatedBy") or "",
            created_at=_dt(d.get("CreatedAt")),
        )


@dataclass
class StockItem:
    id: str
    name: str
    category: str
    quantity: int
    price: Decimal
    low_stock_threshold: int = 10

    @property
    def is_low(self) -> bool:
        return self.quantity <= self.low_stock_threshold

    @classmethod
    def from_dto(cls, d: Dict[str, Any]) -> "StockItem":
        return cls(
            id=d["ID"],
            name=d.get("Name", ""),
            category=d.get("Category") or "",
            quantity=int(d.get("Quantity") or 0),
            price=_money(d.get("Price")),
            low_stock_threshold=int(d.get("LowStockThreshold", 10)),
        )


@dataclass
class ClinicalMedicine:
    id: int
    medicine_name: str
    category: str = ""
    dosage: str = ""
    frequency: str = ""
    duration: str = ""
    quantity: int = 1
    prescription_id: Optional[str] = None

    @classmethod
    def from_dto(cls, d: Dict[str, Any]) -> "ClinicalMedicine":
        return cls(
            id=d["ID"],
            medicine_name=d.get("MedicineName", ""),
            category=d.get("Category") or "",
            dosage=d.get("Dosage") or "",
            frequency=d.get("Frequency") or "",
            duration=d.get("Duration") or "",
            quantity=int(d.get("Quantity") or 1),
            prescription_id=d.get("PrescriptionID"),
        )


@dataclass
class Prescription:
    id: str
    patient_id: Optional[str]
    patient_name: str
    diagnosis: str
    status: str
    lab_tests: List[str] = field(default_factory=list)
    medicines: List[ClinicalMedicine] = field(default_factory=list)
    follow_up_date: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_dto(cls, d: Dict[str, Any]) -> "Prescription":
        return cls(
            id=d["ID"],
            patient_id=d.get("PatientID"),
            patient_name=d.get("PatientName") or "",
            diagnosis=d.get("Diagnosis") or "",
            status=d.get("Status") or "",
            lab_tests=list(d.get("LabTests") or []),
            medicines=[ClinicalMedicine.from_dto(m) for m in d.get("Medicines") or []],
            follow_up_date=d.get("FollowUpDate") or "",
            created_at=_dt(d.get("CreatedAt")),
        )


@dataclass
class LabResult:
    id: str
    patient_id: Optional[str]
    patient_name: str
    status: str
    tests: List[Dict[str, Any]] = field(default_factory=list)
    technician: str = ""
    notified_at: Optional[datetime] = None
    collected_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dto(cls, d: Dict[str, Any]) -> "LabResult":
        return cls(
            id=d["ID"],
            patient_id=d.get("PatientID"),
            patient_name=d.get("PatientName") or "",
            status=d.get("Status") or "",
            tests=list(d.get("Tests") or []),
            technician=d.get("Technician") or "",
            notified_at=_dt(d.get("NotifiedAt")),
            collected_at=_dt(d.get("CollectedAt")),
            created_at=_dt(d.get("CreatedAt")),
        )


@dataclass
class Payment:
    id: str
    patient_id: Optional[str]
    patient_name: str
    total_amount: Decimal
    payment_mode: str
    consultation_fee: Decimal = Decimal("0")
    lab_fee: Decimal = Decimal("0")
    medicine_fee: Decimal = Decimal("0")
    medicines: List[Dict[str, Any]] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def from_dto(cls, d: Dict[str, Any]) -> "Payment":
        return cls(
            id=d["ID"],
            patient_id=d.get("PatientID"),
            patient_name=d.get("PatientName") or "",
            total_amount=_money(d.get("TotalAmount")),
            payment_mode=d.get("PaymentMode") or "Cash",
            consultation_fee=_money(d.get("ConsultationFee")),
            lab_fee=_money(d.get("LabFee")),
            medicine_fee=_money(d.get("MedicineFee")),
            medicines=list(d.get("Medicines") or []),
            created_at=_dt(d.get("CreatedAt")),
        )


@dataclass
class PatientServices:
    id: str
    patient_id: str
    services: Dict[str, Any]
    grand_total: Decimal
    status: str
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dto(cls, d: Dict[str, Any]) -> "PatientServices":
        return cls(
            id=d["ID"],
            patient_id=d.get("PatientID") or "",
            services=dict(d.get("Services") or {}),
            grand_total=_money(d.get("GrandTotal")),
            status=d.get("Status") or "",
            updated_at=_dt(d.get("UpdatedAt")),
        )


@dataclass
class DailyExpense:
    id: str
    date: Optional[date]
    description: str
    category: str
    amount: Decimal
    payment_method: str
    created_by: str = "System"

    @classmethod
    def from_dto(cls, d: Dict[str, Any]) -> "DailyExpense":
        return cls(
            id=d["ID"],
            date=date.fromisoformat(d["Date"]) if d.get("Date") else None,
            description=d.get("Description") or "",
            category=d.get("Category") or "",
            amount=_money(d.get("Amount")),
            payment_method=d.get("PaymentMethod") or "Cash",
            created_by=d.get("CreatedBy") or "System",
        )


@dataclass
class User:
    id: int
    username: str
    name: str
    role: str
    permissions: List[str] = field(default_factory=list)
    is_active: bool = True
    email: str = ""
    phone: str = ""
    last_login: Optional[datetime] = None

    def can(self, capability: str) -> bool:
        return self.is_active and (self.role == "Admin" or capability in self.permissions)

    @classmethod
    def from_dto(cls, d: Dict[str, Any]) -> "User":
        return cls(
            id=d["ID"],
            username=d.get("Username", ""),
            name=d.get("Name") or "",
            role=d.get("Role") or "",
            permissions=list(d.get("Permissions") or []),
            is_active=bool(d.get("IsActive", 1)),
            email=d.get("Email") or "",
            phone=d.get("Phone") or "",
            last_login=_dt(d.get("LastLogin")),
        )
