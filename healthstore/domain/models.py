"""
Domain models for family health records.

Records are persisted as camelCase JSON (the wire format of the remote API
this store emulates); the models expose snake_case attributes through
aliases. Every field except the key is optional and unknown fields are kept,
so records written by older or newer callers still load.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MedicationStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    DISCONTINUED = "discontinued"


class DoseStatus(str, Enum):
    """Dose lifecycle: pending is the only non-terminal state."""

    PENDING = "pending"
    TAKEN = "taken"
    MISSED = "missed"
    SKIPPED = "skipped"

    @property
    def is_terminal(self) -> bool:
        return self is not DoseStatus.PENDING


class ParameterStatus(str, Enum):
    NORMAL = "normal"
    BORDERLINE = "borderline"
    HIGH = "high"
    LOW = "low"
    CRITICAL = "critical"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PolicyStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    PENDING_RENEWAL = "pending_renewal"
    CANCELLED = "cancelled"


class PolicyType(str, Enum):
    HEALTH = "health"
    LIFE = "life"
    DENTAL = "dental"
    VISION = "vision"
    DISABILITY = "disability"
    OTHER = "other"


class ClaimStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    IN_REVIEW = "in_review"


class ReminderFrequency(str, Enum):
    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class Severity(str, Enum):
    """Insight severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RecordModel(BaseModel):
    """Shared configuration: camelCase aliases, lenient about extra fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted camelCase form, keeping only fields that were set."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class Entity(RecordModel):
    """Base for every stored entity."""

    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Medication(Entity):
    user_id: str | None = None
    family_member_id: str | None = None
    name: str | None = None
    medicine_name: str | None = None
    dosage: str | None = None
    dose_strength: str | None = None
    dose_form: str | None = None
    frequency: str | None = None
    times: list[str] = Field(default_factory=list)
    start_date: date | None = None
    end_date: date | None = None
    instructions: str | None = None
    side_effects: list[str] = Field(default_factory=list)
    status: MedicationStatus | None = None


class DoseRecord(Entity):
    user_id: str | None = None
    family_member_id: str | None = None
    medication_id: str | None = None
    medication_name: str | None = None
    dosage: str | None = None
    scheduled_time: datetime | None = None
    taken_at: datetime | None = None
    status: DoseStatus = DoseStatus.PENDING
    notes: str | None = None


class FamilyMember(Entity):
    user_id: str | None = None
    name: str | None = None
    relationship: str | None = None
    age: int | None = None
    gender: str | None = None
    blood_type: str | None = None
    allergies: list[str] = Field(default_factory=list)
    medical_conditions: list[str] = Field(default_factory=list)
    emergency_contact: bool = False


class ReportParameter(RecordModel):
    value: float | None = None
    unit: str | None = None
    normal_range: str | None = None
    status: ParameterStatus = ParameterStatus.NORMAL


class AnalysisSummary(RecordModel):
    normal_count: int = 0
    abnormal_count: int = 0
    critical_count: int = 0
    overall_status: str = "healthy"
    risk_level: RiskLevel = RiskLevel.LOW
    recommendations: list[str] = Field(default_factory=list)


class ReportAnalysis(RecordModel):
    parameters: dict[str, ReportParameter] = Field(default_factory=dict)
    summary: AnalysisSummary | None = None


class HealthReport(Entity):
    user_id: str | None = None
    family_member_id: str | None = None
    title: str | None = None
    report_type: str | None = None
    file_url: str | None = None
    lab_name: str | None = None
    doctor_name: str | None = None
    uploaded_at: datetime | None = None
    analysis: ReportAnalysis | None = None


class Prescription(Entity):
    """Owned through patient_id rather than user_id."""

    patient_id: str | None = None
    doctor_id: str | None = None
    diagnosis: str | None = None
    medication: str | None = None
    notes: str | None = None
    prescribed_date: date | None = None
    refills: int | None = None
    status: str | None = None


class Appointment(Entity):
    user_id: str | None = None
    patient_id: str | None = None
    doctor_name: str | None = None
    specialty: str | None = None
    date_time: datetime | None = None
    purpose: str | None = None
    status: str | None = None
    location: str | None = None


class TargetRange(RecordModel):
    min: float | None = None
    max: float | None = None


class HealthMetric(Entity):
    user_id: str | None = None
    name: str | None = None
    value: float | None = None
    unit: str | None = None
    status: ParameterStatus | None = None
    trend: str | None = None
    target_range: TargetRange | None = None
    recorded_at: datetime | None = None


class DiseaseAnalysis(Entity):
    user_id: str | None = None
    family_member_id: str | None = None
    disease_name: str | None = None
    risk_level: RiskLevel | None = None
    probability: float | None = None
    symptoms: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class HealthTrend(Entity):
    user_id: str | None = None
    month: str | None = None
    blood_pressure: dict[str, Any] | None = None
    blood_sugar: dict[str, Any] | None = None
    cholesterol: dict[str, Any] | None = None
    weight: dict[str, Any] | None = None


class CoveragePeriod(RecordModel):
    start_date: date | None = None
    end_date: date | None = None


class CoPayments(RecordModel):
    doctor_visit: float = 0
    specialist: float = 0
    emergency: float = 0
    prescription: float = 0


class Deductibles(RecordModel):
    individual: float = 0
    family: float = 0


class ContactInfo(RecordModel):
    provider_phone: str | None = None
    provider_email: str | None = None
    provider_website: str | None = None
    claims_phone: str | None = None


class InsuranceDocument(RecordModel):
    id: str | None = None
    name: str | None = None
    type: str | None = None
    file_url: str | None = None
    uploaded_at: datetime | None = None


class InsuranceClaim(RecordModel):
    id: str | None = None
    policy_id: str | None = None
    claim_number: str | None = None
    claim_type: str | None = None
    claim_date: date | None = None
    amount_requested: float | None = None
    amount_approved: float | None = None
    status: ClaimStatus = ClaimStatus.PENDING
    description: str | None = None


class InsurancePolicy(Entity):
    user_id: str | None = None
    family_member_id: str | None = None
    provider_name: str | None = None
    policy_number: str | None = None
    policy_type: PolicyType | None = None
    coverage_amount: float | None = None
    coverage_period: CoveragePeriod | None = None
    co_payments: CoPayments | None = None
    deductibles: Deductibles | None = None
    status: PolicyStatus = PolicyStatus.ACTIVE
    premium: float | None = None
    premium_frequency: str | None = None
    contact_info: ContactInfo | None = None
    documents: list[InsuranceDocument] = Field(default_factory=list)
    claims: list[InsuranceClaim] = Field(default_factory=list)


class SelfReminder(Entity):
    user_id: str | None = None
    title: str | None = None
    description: str | None = None
    type: str | None = None
    frequency: ReminderFrequency | None = None
    times: list[str] = Field(default_factory=list)
    days: list[str] | None = None
    is_active: bool = True
    medication_name: str | None = None


class AIInsight(Entity):
    """Derived record; always points back at the records that produced it."""

    user_id: str | None = None
    type: str | None = None
    title: str | None = None
    description: str | None = None
    severity: Severity | None = None
    category: str | None = None
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    actionable: bool = False
    related_reports: list[str] = Field(default_factory=list)
    related_metrics: list[str] = Field(default_factory=list)
    related_prescriptions: list[str] = Field(default_factory=list)

    @property
    def sources(self) -> list[str]:
        return [*self.related_reports, *self.related_metrics, *self.related_prescriptions]


class User(Entity):
    """Account record; the id is also the owner key for every other collection."""

    email: str | None = None
    name: str | None = None
    role: str | None = None
    plan: str | None = None
